from .config import Config
from .image_reference import ImageReference
from .instance import Instance
from .report_row import ReportRow
from .version import Version, parse_version
from .watched_image import WatchedImage

__all__ = [
    "Config",
    "ImageReference",
    "Instance",
    "ReportRow",
    "Version",
    "WatchedImage",
    "parse_version",
]
