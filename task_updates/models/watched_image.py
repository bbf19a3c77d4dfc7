import re

from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class WatchedImage:
    name: str
    include: tuple[re.Pattern, ...] = ()
    exclude: tuple[re.Pattern, ...] = ()
