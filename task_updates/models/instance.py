from pydantic.dataclasses import dataclass

from .image_reference import ImageReference


@dataclass(frozen=True)
class Instance:
    namespace: str
    job: str
    group: str
    task: str
    image: ImageReference
