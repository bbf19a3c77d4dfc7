import re
from collections.abc import Iterable, Sequence


def is_included(tag: str, include: Sequence[re.Pattern]) -> bool:
    if not include:
        return True
    return any(pattern.search(tag) for pattern in include)


def is_excluded(tag: str, exclude: Sequence[re.Pattern]) -> bool:
    return any(pattern.search(tag) for pattern in exclude)


def filter_tags(tags: Iterable[str], include: Sequence[re.Pattern], exclude: Sequence[re.Pattern]) -> list[str]:
    """Keep the tags that pass the include patterns and match no exclude pattern.

    An empty include set admits every tag. Exclusion is applied after
    inclusion and always wins. The relative order of ``tags`` is preserved.
    """
    return [tag for tag in tags if is_included(tag, include) and not is_excluded(tag, exclude)]
