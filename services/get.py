from pathlib import Path
from pydicom import Dataset
from services.errors import MetadataExtractionError
from services.metadata_extractor import DicomMetadataExtractorToJson
from services.search_criteria import SearchCriteria
from pynetdicom import AE, evt, StoragePresentationContexts, build_role
from pynetdicom.sop_class import StudyRootQueryRetrieveInformationModelGet
import threading
import time
import logging

logger = logging.getLogger(__name__)


class Get:
    """C-GET instances from a PACS and write their metadata as JSON."""
    SUCCESS_STATUS = 0x0000
    CANNOT_UNDERSTAND_STATUS = 0xC210
    MAX_CONTEXTS = 127

    def __init__(self, config, output_dir="output_dir", extractor=None):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.config = config
        self.extractor = extractor or DicomMetadataExtractorToJson()
        # files_received is incremented by the C-STORE handler (may run in another thread)
        self.files_received = 0
        self._files_lock = threading.Lock()
        self._setup_ae()

    def _setup_ae(self):
        """Configure Application Entity (AE)"""
        self.ae = AE(ae_title=self.config.CALLING_AET)
        self.ae.acse_timeout = self.config.ACSE_TIMEOUT
        self.ae.dimse_timeout = self.config.DIMSE_TIMEOUT
        self.ae.add_requested_context(StudyRootQueryRetrieveInformationModelGet)
        # C-GET needs the storage contexts proposed by us, with the SCP role
        contexts = StoragePresentationContexts[:self.MAX_CONTEXTS - 1]
        for context in contexts:
            self.ae.add_requested_context(context.abstract_syntax)
        self.roles = [build_role(context.abstract_syntax, scp_role=True) for context in contexts]

    def _establish_connection(self):
        """DICOM Connection"""
        handlers = [(evt.EVT_C_STORE, self._handle_store)]
        self.assoc = self.ae.associate(
            self.config.HOST,
            self.config.PORT,
            ae_title=self.config.CALLED_AET,
            ext_neg=self.roles,
            evt_handlers=handlers
        )
        return self.assoc.is_established

    def _handle_store(self, event):
        """Handle incoming DICOM store request"""
        ds = event.dataset
        sop_instance_uid = getattr(ds, 'SOPInstanceUID', None)
        if not sop_instance_uid:
            logger.warning("Received instance without SOPInstanceUID, ignored")
            return self.CANNOT_UNDERSTAND_STATUS

        output_path = self.output_dir / f"{sop_instance_uid}.json"
        try:
            with open(output_path, 'wb') as f:
                self.extractor.extract_metadata(ds, f)
        except MetadataExtractionError as e:
            output_path.unlink(missing_ok=True)
            logger.error(f"Cannot convert instance {sop_instance_uid}: {e}")
            return self.CANNOT_UNDERSTAND_STATUS

        with self._files_lock:
            self.files_received += 1
            if self.files_received % 10 == 0:
                logger.info(f"Received {self.files_received} files...")

        return self.SUCCESS_STATUS

    def _build_query_dataset(self, search_criteria, query_level):
        """Build the DICOM query dataset based on search criteria"""
        ds = Dataset()
        ds.QueryRetrieveLevel = query_level
        ds.StudyInstanceUID = getattr(search_criteria, 'study_instance_uid', '') or ''
        if query_level == "SERIES":
            ds.SeriesInstanceUID = getattr(search_criteria, 'series_instance_uid', '') or ''
        return ds

    def _perform_get(self, query_dataset):
        """Perform the C-GET operation"""
        start_time = time.time()

        try:
            responses = self.assoc.send_c_get(query_dataset, StudyRootQueryRetrieveInformationModelGet)
            for (status, identifier) in responses:
                if status and status.Status == self.SUCCESS_STATUS:
                    break
        finally:
            self.assoc.release()

        # collect result and timing
        with self._files_lock:
            received = self.files_received
        elapsed = time.time() - start_time

        logger.info(f"C-GET completed in {elapsed:.1f}s - instances written: {received}")
        return received

    def retrieve_data(self, criteria: SearchCriteria):
        """Main entry point"""
        self.files_received = 0

        if not self._establish_connection():
            logger.error(
                f"Association with {self.config.CALLED_AET}@{self.config.HOST}:{self.config.PORT} failed"
            )
            return False
        query_ds = self._build_query_dataset(criteria, criteria.level)
        return self._perform_get(query_ds)
