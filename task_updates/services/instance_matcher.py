import logging
from collections.abc import Mapping, Sequence

from task_updates.errors import VersionParseError
from task_updates.models import Instance, ReportRow, Version
from task_updates.services.version_selector import newest

logger = logging.getLogger(__name__)


def match(instances: Sequence[Instance], versions: Mapping[str, Sequence[Version]]) -> list[ReportRow]:
    rows = []
    for instance in instances:
        image = instance.image
        candidates = versions.get(image.name)
        if candidates is None:
            continue
        if not candidates:
            logger.debug(f"No candidate versions for {image.name}, skipping {instance.job}/{instance.task}")
            continue

        latest = newest(candidates)
        try:
            current = Version.parse(image.tag or "")
        except VersionParseError as e:
            raise VersionParseError(image.tag or "", image.name) from e

        rows.append(ReportRow(
            namespace=instance.namespace,
            job=instance.job,
            group=instance.group,
            task=instance.task,
            image_name=image.name,
            latest_version=str(latest),
            current_version=str(current),
            update_available=latest > current,
        ))
    return rows
