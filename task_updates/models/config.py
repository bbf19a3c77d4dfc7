from dataclasses import field

from pydantic.dataclasses import dataclass

from .watched_image import WatchedImage


@dataclass(frozen=True)
class Config:
    server: str = "http://127.0.0.1:4646"
    namespaces: list[str] = field(default_factory=lambda: ["*"])
    images: list[WatchedImage] = field(default_factory=list)
