import os


class ServerConfig:
    HOST = os.environ.get("DICOM_SERVER_HOST", "127.0.0.1")
    PORT = int(os.environ.get("DICOM_SERVER_PORT", "104"))
    CALLING_AET = os.environ.get("DICOM_CALLING_AET", "METADATA-SCU")
    CALLED_AET = os.environ.get("DICOM_CALLED_AET", "ANY-SCP")
    # Timeouts (in seconds)
    # DIMSE_TIMEOUT: timeout for DIMSE operations (C-GET, C-STORE)
    # ACSE_TIMEOUT: timeout for association (ACSE) establishment
    DIMSE_TIMEOUT = int(os.environ.get("DICOM_DIMSE_TIMEOUT", "600"))
    ACSE_TIMEOUT = int(os.environ.get("DICOM_ACSE_TIMEOUT", "30"))
