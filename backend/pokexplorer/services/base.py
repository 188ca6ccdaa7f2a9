"""Base service class with common functionality."""
from loguru import logger
from pokexplorer.core.config import settings


class BaseService:
    """Base service providing a bound logger and settings to all services."""

    def __init__(self):
        self.logger = logger.bind(service=self.__class__.__name__)
        self.config = settings
