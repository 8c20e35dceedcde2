"""
Decimal String (DS) repair.

DS values must be written as JSON numbers, but the DS grammar accepts
values that JSON does not (leading '+', superfluous leading zeros,
surrounding spaces). fix_decimal_string() rewrites them to an equivalent
JSON number.
"""
import re
from typing import Optional

from services.errors import FormatError

JSON_NUMBER = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?')
# zeros followed by another digit: "007" -> "7", "00.5" -> "0.5"
LEADING_ZEROS = re.compile(r'^0+(?=[0-9])')


def is_json_number(text: str) -> bool:
    return JSON_NUMBER.fullmatch(text) is not None


def fix_decimal_string(raw: str) -> Optional[str]:
    """Return `raw` as a valid JSON number token, or None if it is blank.

    Raises FormatError when the value cannot be repaired.
    """
    if is_json_number(raw):
        return raw

    if not raw or raw.isspace():
        return None

    val = raw.strip()

    negative = False
    if val[0] == '+':
        val = val[1:]
    elif val[0] == '-':
        negative = True
        val = val[1:]

    val = LEADING_ZEROS.sub('', val)

    if negative:
        val = '-' + val

    if is_json_number(val):
        return val

    raise FormatError(f"Cannot write dicom number {raw!r} to json", value=raw)
