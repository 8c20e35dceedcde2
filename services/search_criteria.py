class SearchCriteria:
    def __init__(self, level="STUDY", study_instance_uid=None, series_instance_uid=None):
        self.level = level.upper()
        self.study_instance_uid = study_instance_uid
        self.series_instance_uid = series_instance_uid
