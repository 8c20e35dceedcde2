import logging
from pathlib import Path

import pydicom

from services.bulk_data_filter import remove_bulk_data
from services.json_dicom_converter import JsonDicomConverter

logger = logging.getLogger(__name__)


class DicomMetadataExtractorToJson:
    """Write the metadata of a DICOM dataset as a JSON document.

    Bulk data elements are removed from the dataset (in place) before it is
    serialized. The JSON text is built in memory first, so nothing reaches
    the output when the conversion fails.
    """

    def __init__(self, converter=None, indent=None):
        self.converter = converter or JsonDicomConverter(write_tags_as_keywords=True)
        self.indent = indent

    def get_metadata_dataset(self, ds):
        """Return `ds` with its bulk data elements removed."""
        return remove_bulk_data(ds)

    def to_json_bytes(self, ds) -> bytes:
        self.get_metadata_dataset(ds)
        return self.converter.dumps(ds, indent=self.indent).encode('utf-8')

    def extract_metadata(self, ds, output) -> int:
        """Write the JSON metadata of `ds` to the binary stream `output`.

        Returns the number of bytes written.
        """
        data = self.to_json_bytes(ds)
        output.write(data)
        return len(data)

    def extract_file(self, dicom_path, output_path) -> Path:
        """Read `dicom_path` and write its JSON metadata to `output_path`."""
        ds = pydicom.dcmread(dicom_path)
        data = self.to_json_bytes(ds)

        output_path = Path(output_path)
        with open(output_path, 'wb') as f:
            f.write(data)
        logger.debug(f"Metadata saved to {output_path}")
        return output_path
