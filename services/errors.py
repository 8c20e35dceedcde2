"""
Exceptions raised while turning DICOM datasets into JSON metadata.
"""


class MetadataExtractionError(Exception):
    """Base class for every error raised by the metadata extractor."""


class FormatError(MetadataExtractionError, ValueError):
    """A value cannot be written as a valid JSON number.

    Raised for decimal strings that cannot be repaired, non-finite floats
    and integers that do not fit their VR.
    """

    def __init__(self, message, value=None):
        super().__init__(message)
        self.value = value


class UnsupportedOperation(MetadataExtractionError, NotImplementedError):
    """JSON to dataset conversion is not available."""
