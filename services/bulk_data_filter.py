import logging

from services.tag_dictionary import effective_vr

logger = logging.getLogger(__name__)

# OV is bulk-capable too but is kept; its encoder writes no value.
BULK_DATA_VRS = frozenset(['OB', 'OD', 'OF', 'OL', 'OW', 'UN'])


def remove_bulk_data(ds):
    """
    Remove bulk binary elements from a dataset and all nested sequences.

    Sequence items are filtered before their parent level; sequence elements
    themselves are always kept. Tags are collected during the walk of a
    level and deleted once that walk is over.

    Args:
        ds: pydicom Dataset to filter

    Returns:
        The same Dataset (note: modification is done in-place)
    """
    tags_to_remove = []
    for elem in ds:
        if elem.VR == 'SQ':
            for item in elem.value or []:
                remove_bulk_data(item)
        elif effective_vr(elem) in BULK_DATA_VRS:
            tags_to_remove.append(elem.tag)

    for tag in tags_to_remove:
        logger.debug(f"Removing bulk data element {tag}")
        del ds[tag]

    return ds
