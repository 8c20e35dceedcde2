import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from threading import Lock

from pydicom.errors import InvalidDicomError

from config.extractor_config import ExtractorConfig
from services.errors import MetadataExtractionError
from services.json_dicom_converter import JsonDicomConverter
from services.metadata_extractor import DicomMetadataExtractorToJson

logger = logging.getLogger(__name__)


class ExtractionStats:
    def __init__(self):
        self.converted = 0
        self.skipped = 0
        self.errors = 0
        self._lock = Lock()

    def increment_converted(self):
        with self._lock:
            self.converted += 1

    def increment_skipped(self):
        with self._lock:
            self.skipped += 1

    def increment_errors(self):
        with self._lock:
            self.errors += 1

    @property
    def total(self):
        return self.converted + self.skipped + self.errors


class ExtractController:
    def __init__(self, config=ExtractorConfig, max_workers=None, indent=None, write_tags_as_keywords=None):
        self.config = config
        self.max_workers = max_workers or config.MAX_WORKERS
        if write_tags_as_keywords is None:
            write_tags_as_keywords = config.WRITE_TAGS_AS_KEYWORDS
        converter = JsonDicomConverter(write_tags_as_keywords=write_tags_as_keywords)
        self.extractor = DicomMetadataExtractorToJson(
            converter, indent=config.INDENT if indent is None else indent
        )

    def list_dicom_files(self, source):
        """Return the DICOM files directly under `source`, sorted by name."""
        suffix = self.config.DICOM_SUFFIX.lower()
        return sorted(
            path for path in Path(source).iterdir()
            if path.is_file() and path.suffix.lower() == suffix
        )

    def output_path_for(self, dicom_path, destination):
        return Path(destination) / (Path(dicom_path).stem + self.config.OUTPUT_SUFFIX)

    def extract_folder(self, source, destination=None):
        """Extract the metadata of every .dcm file of `source` to JSON files.

        The JSON files are written to `destination`, by default a
        subfolder of `source`.
        """
        source = Path(source)
        if destination is None:
            destination = source / self.config.DESTINATION_FOLDER
        files = self.list_dicom_files(source)
        logger.info(f"Found {len(files)} DICOM file(s) in {source}")
        return self.extract_files(files, destination)

    def extract_files(self, files, destination):
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        stats = ExtractionStats()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._extract_file_safe, Path(path), destination, stats): path
                for path in files
            }

            for future in as_completed(futures):
                path = futures[future]
                try:
                    future.result()
                except Exception as e:
                    logger.error(f"Unexpected error for {path}: {type(e).__name__} - {e}")
                    stats.increment_errors()

        logger.info(
            f"Extraction complete: {stats.converted} converted, "
            f"{stats.skipped} skipped, {stats.errors} error(s)"
        )
        return stats

    def _extract_file_safe(self, dicom_path, destination, stats):
        """Extract a single file, logging and counting failures."""
        output_path = self.output_path_for(dicom_path, destination)
        try:
            self.extractor.extract_file(dicom_path, output_path)
            stats.increment_converted()
            logger.info(f"{dicom_path.name} -> {output_path.name}")
            return True

        except InvalidDicomError as e:
            logger.warning(f"Invalid DICOM file: {dicom_path.name} - Reason: {e}")
            stats.increment_skipped()
            return False

        except MetadataExtractionError as e:
            logger.error(f"Cannot convert {dicom_path.name}: {e}")
            stats.increment_errors()
            return False

        except OSError as e:
            logger.error(f"Cannot read or write {dicom_path.name}: {e}")
            stats.increment_errors()
            return False
