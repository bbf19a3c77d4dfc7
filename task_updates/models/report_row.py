from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class ReportRow:
    namespace: str
    job: str
    group: str
    task: str
    image_name: str
    latest_version: str
    current_version: str
    update_available: bool
