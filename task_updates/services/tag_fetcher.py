import logging

from task_updates.clients.image_registry_client import ImageRegistryClient
from task_updates.errors import FetchError, RegistryError
from task_updates.models import WatchedImage
from task_updates.utils.logging import setup_logger
from task_updates.utils.tag_filter import filter_tags


class TagFetcher:
    def __init__(self, registry: ImageRegistryClient | None = None):
        self.registry: ImageRegistryClient = registry or ImageRegistryClient()
        self.logger: logging.Logger = setup_logger("TagFetcher")

    def fetch(self, image: WatchedImage) -> list[str]:
        self.logger.info(f"Fetching tags for {image.name}")
        try:
            tags = self.registry.list_tags(image.name)
        except RegistryError as e:
            raise FetchError(image.name, str(e)) from e

        filtered = filter_tags(tags, image.include, image.exclude)
        self.logger.info(f"Kept {len(filtered)} of {len(tags)} tags for {image.name}")
        return filtered
