from collections.abc import Sequence

from task_updates.models import Version


def newest(versions: Sequence[Version]) -> Version:
    if not versions:
        raise ValueError("Cannot select the newest of an empty version list")

    newest_version = versions[0]
    for version in versions[1:]:
        if version > newest_version:
            newest_version = version
    return newest_version
