from config.server_config import ServerConfig
from services.get import Get
from services.search_criteria import SearchCriteria


class GetController:
    def __init__(self, config=None, output_dir="output_dir", extractor=None):
        self.config = config or ServerConfig
        self.get_service = Get(self.config, output_dir=output_dir, extractor=extractor)

    def get(self, search_criteria: SearchCriteria):
        return self.get_service.retrieve_data(search_criteria)
