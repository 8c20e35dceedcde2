import os


class ExtractorConfig:
    # Folder created under the source folder when no destination is given
    DESTINATION_FOLDER = os.environ.get("DICOM_METADATA_DESTINATION_FOLDER", "MetadataToJson")
    DICOM_SUFFIX = ".dcm"
    OUTPUT_SUFFIX = ".json"

    # Number of files converted in parallel
    MAX_WORKERS = int(os.environ.get("DICOM_METADATA_MAX_WORKERS", "4"))

    # None writes compact JSON
    INDENT = None

    # False writes keys as 8 hex digit tags (gggg eeee) instead of keywords
    WRITE_TAGS_AS_KEYWORDS = True
