from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class ImageReference:
    name: str
    tag: str | None = None
    digest: str | None = None

    def __str__(self) -> str:
        ref = self.name
        if self.tag:
            ref += f":{self.tag}"
        if self.digest:
            ref += f"@{self.digest}"
        return ref
