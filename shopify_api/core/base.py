from shopify_api.config import ApiConfig
from shopify_api.utils.logger import get_logger


class BaseService:
    """Base service class with library configuration injection."""

    def __init__(self, config: ApiConfig):
        self.config = config
        self.logger = get_logger(self.__class__.__name__)
