"""
DICOM dataset to JSON conversion.

The output follows the DICOM JSON Model (PS3.18 Annex F) with one
deliberate deviation: keys are written as DICOM keywords unless the
converter is created with write_tags_as_keywords=False.
"""
import json
import logging
import math
from decimal import Decimal
from typing import Any, Dict, List

from pydicom.multival import MultiValue

from services.decimal_string import fix_decimal_string
from services.errors import FormatError, UnsupportedOperation
from services.tag_dictionary import effective_vr, is_group_length, keyword_for, tag_as_hex

logger = logging.getLogger(__name__)

BINARY_VRS = frozenset(['OB', 'OD', 'OF', 'OL', 'OV', 'OW', 'UN'])

INTEGER_RANGES = {
    'IS': (-2 ** 31, 2 ** 31 - 1),
    'SL': (-2 ** 31, 2 ** 31 - 1),
    'SS': (-2 ** 15, 2 ** 15 - 1),
    'SV': (-2 ** 63, 2 ** 63 - 1),
    'UL': (0, 2 ** 32 - 1),
    'US': (0, 2 ** 16 - 1),
    'UV': (0, 2 ** 64 - 1),
}

# Largest exponent of an integral DS that is still written as an int
MAX_DECIMAL_DIGITS = 28


class JsonDicomConverter:
    """Converts a pydicom Dataset to a DICOM JSON Model dictionary.

    The converter only holds its key naming mode, so a single instance can
    be shared by threads converting different datasets.
    """

    def __init__(self, write_tags_as_keywords=True):
        self.write_tags_as_keywords = write_tags_as_keywords
        self._encoders = {
            'PN': self._encode_person_name,
            'SQ': self._encode_sequence,
            'FL': self._encode_float,
            'FD': self._encode_float,
            'DS': self._encode_decimal_string,
            'AT': self._encode_attribute_tag,
        }
        for vr in BINARY_VRS:
            self._encoders[vr] = None
        for vr in INTEGER_RANGES:
            self._encoders[vr] = self._encode_integer

    def convert(self, ds) -> Dict[str, Any]:
        """Return the JSON object for `ds` as a dict, in dataset order."""
        json_dataset = {}
        for elem in ds:
            if is_group_length(elem.tag):
                continue

            keyword = keyword_for(elem.tag)
            if keyword is None:
                logger.debug(f"Skipping element {elem.tag} without keyword")
                continue

            key = keyword if self.write_tags_as_keywords else tag_as_hex(elem.tag)
            json_dataset[key] = self.encode_element(elem)
        return json_dataset

    def dumps(self, ds, indent=None) -> str:
        """Return the JSON text for `ds`."""
        return json.dumps(
            self.convert(ds), indent=indent, ensure_ascii=False, allow_nan=False
        )

    def loads(self, *args, **kwargs):
        raise UnsupportedOperation("Conversion from JSON to a DICOM dataset is not supported")

    def encode_element(self, elem) -> Dict[str, Any]:
        """Return the {"vr": ..., "Value": [...]} object for one element.

        "Value" is left out when the element has no value.
        """
        vr = effective_vr(elem)
        json_element: Dict[str, Any] = {'vr': vr}

        encoder = self._encoders.get(vr, self._encode_string)
        if encoder is None:
            return json_element

        values = _element_values(elem)
        if values:
            json_element['Value'] = encoder(vr, values)
        return json_element

    def _encode_person_name(self, vr, values) -> List[Any]:
        encoded = []
        for val in values:
            alphabetic = _alphabetic(val)
            encoded.append({'Alphabetic': alphabetic} if alphabetic else None)
        return encoded

    def _encode_sequence(self, vr, values) -> List[Any]:
        return [self.convert(item) for item in values]

    def _encode_float(self, vr, values) -> List[Any]:
        encoded = []
        for val in values:
            number = float(val)
            if not math.isfinite(number):
                raise FormatError(f"Cannot write {vr} value {val!r} to json", value=val)
            encoded.append(number)
        return encoded

    def _encode_integer(self, vr, values) -> List[Any]:
        low, high = INTEGER_RANGES[vr]
        encoded = []
        for val in values:
            try:
                number = int(val)
            except (TypeError, ValueError):
                raise FormatError(f"Cannot write {vr} value {val!r} to json", value=val)
            if not low <= number <= high:
                raise FormatError(f"{vr} value {number} is out of range", value=val)
            encoded.append(number)
        return encoded

    def _encode_decimal_string(self, vr, values) -> List[Any]:
        encoded = []
        for val in values:
            raw = _raw_decimal_string(val)
            fixed = fix_decimal_string(raw) if raw else None
            encoded.append(None if fixed is None else decimal_string_to_number(fixed))
        return encoded

    def _encode_attribute_tag(self, vr, values) -> List[Any]:
        return [None if val is None else f"{int(val):08X}" for val in values]

    def _encode_string(self, vr, values) -> List[Any]:
        return [None if val is None or val == '' else str(val) for val in values]


def decimal_string_to_number(text):
    """Return the narrowest Python number that holds JSON number `text`.

    Integers within the 64-bit unsigned or signed range become int. Other
    values are read as Decimal: those without fractional digits become int,
    the rest float.
    """
    if 'e' not in text and 'E' not in text and '.' not in text:
        number = int(text)
        if -2 ** 63 <= number < 2 ** 64:
            return number

    value = Decimal(text)
    if value.as_tuple().exponent >= 0 and value.adjusted() <= MAX_DECIMAL_DIGITS:
        return int(value)

    number = float(value)
    if not math.isfinite(number):
        raise FormatError(f"Cannot write dicom number {text!r} to json", value=text)
    return number


def _element_values(elem) -> List[Any]:
    value = elem.value
    # pydicom reports VM 1 for every sequence, empty ones included
    if elem.VR == 'SQ':
        return list(value or [])
    if elem.VM == 0:
        return []
    if isinstance(value, (list, tuple, MultiValue)):
        return list(value)
    return [value]


def _alphabetic(val):
    if val is None:
        return None
    components = getattr(val, 'components', None)
    if components is not None:
        return components[0] if components else None
    return str(val).split('=')[0]


def _raw_decimal_string(val):
    if val is None:
        return None
    original = getattr(val, 'original_string', None)
    if original is not None:
        return original
    return str(val)
