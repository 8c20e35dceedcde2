"""
Tag classification on top of the pydicom data dictionary.
"""
from typing import Optional

from pydicom.datadict import DicomDictionary
from pydicom.tag import Tag

# Candidates of an ambiguous VR that hold raw bytes
BYTE_VRS = ('OB', 'OW', 'OD', 'OF', 'OL', 'OV', 'UN')


def is_group_length(tag) -> bool:
    """Group length (gggg,0000) elements are never written."""
    return Tag(tag).element == 0


def keyword_for(tag) -> Optional[str]:
    """Return the keyword of `tag`, or None when it has no usable keyword.

    Only exact entries of the standard dictionary qualify. Private tags,
    unknown tags and repeater tags such as (60xx,3000), whose keyword is
    shared by a whole range, return None.
    """
    entry = DicomDictionary.get(Tag(tag))
    if entry is None:
        return None
    keyword = entry[4]
    if not keyword or not keyword.strip():
        return None
    return keyword


def tag_as_hex(tag) -> str:
    tag = Tag(tag)
    return f"{tag.group:04X}{tag.element:04X}"


def effective_vr(elem) -> str:
    """Return a single VR code for `elem`.

    Elements read from implicit VR files may keep an ambiguous VR such as
    'US or SS' or 'OB or OW'. Byte values select a binary candidate,
    anything else the first candidate.
    """
    vr = str(elem.VR)
    if ' or ' not in vr:
        return vr

    candidates = [c.strip() for c in vr.split(' or ')]
    if isinstance(elem.value, (bytes, bytearray)):
        for candidate in candidates:
            if candidate in BYTE_VRS:
                return candidate
    for candidate in candidates:
        if candidate not in BYTE_VRS:
            return candidate
    return candidates[0]
