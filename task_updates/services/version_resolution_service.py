import logging
from collections.abc import Sequence

from task_updates.errors import VersionParseError
from task_updates.models import Version, WatchedImage
from task_updates.services.tag_fetcher import TagFetcher
from task_updates.utils.logging import setup_logger
from task_updates.utils.task_group import TaskGroup


class VersionResolutionService:
    """Resolves the available versions of every watched image concurrently.

    One task runs per watched image. The first fetch or parse failure fails
    the whole resolution and no partial mapping is returned.
    """

    def __init__(self, fetcher: TagFetcher | None = None):
        self.fetcher: TagFetcher = fetcher or TagFetcher()
        self.logger: logging.Logger = setup_logger("VersionResolutionService")

    def resolve(self, images: Sequence[WatchedImage]) -> dict[str, list[Version]]:
        if not images:
            return {}

        with TaskGroup(max_workers=len(images)) as group:
            for image in images:
                group.submit(self.resolve_image, image, group)
            results = group.join()

        versions = dict(results)
        self.logger.info(f"Resolved versions for {len(versions)} images")
        return versions

    def resolve_image(self, image: WatchedImage, group: TaskGroup | None = None) -> tuple[str, list[Version]]:
        tags = self.fetcher.fetch(image)
        if group is not None:
            group.raise_if_cancelled()

        versions = []
        for tag in tags:
            try:
                versions.append(Version.parse(tag))
            except VersionParseError as e:
                # a single unparsable tag fails the whole image
                raise VersionParseError(tag, image.name) from e
        return image.name, versions
