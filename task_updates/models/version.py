import re
from functools import total_ordering

from task_updates.errors import VersionParseError

_IDENTIFIER = r"[0-9A-Za-z\-~]+"
_VERSION_PATTERN = re.compile(
    r"^v?(?P<segments>[0-9]+(?:\.[0-9]+)*?)"
    rf"(?:-(?P<numeric_pre>[0-9]+[0-9A-Za-z\-~]*(?:\.{_IDENTIFIER})*)"
    rf"|-?(?P<alpha_pre>[A-Za-z\-~]+[0-9A-Za-z\-~]*(?:\.{_IDENTIFIER})*))?"
    rf"(?:\+(?P<metadata>{_IDENTIFIER}(?:\.{_IDENTIFIER})*))?$"
)
_NUMERIC = re.compile(r"^[0-9]+$")
_MIN_SEGMENTS = 3


@total_ordering
class Version:
    """A tag parsed into semantic version precedence.

    Numeric segments compare numerically (missing segments count as zero), a
    pre-release sorts before the release it precedes and build metadata is
    ignored for ordering and equality.
    """

    __slots__ = ("original", "segments", "prerelease", "metadata", "_key")

    def __init__(self, tag: str):
        match = _VERSION_PATTERN.fullmatch(tag)
        if not match:
            raise VersionParseError(tag)

        self.original: str = tag
        self.prerelease: str = match.group("numeric_pre") or match.group("alpha_pre") or ""
        self.metadata: str = match.group("metadata") or ""
        try:
            # int() refuses digit runs beyond the interpreter's conversion limit
            segments = [int(s) for s in match.group("segments").split(".")]
            segments.extend([0] * (_MIN_SEGMENTS - len(segments)))
            self.segments: tuple[int, ...] = tuple(segments)
            self._key = self._precedence_key()
        except ValueError as e:
            raise VersionParseError(tag) from e

    @classmethod
    def parse(cls, tag: str) -> "Version":
        return cls(tag)

    def _precedence_key(self) -> tuple:
        # trailing zeros are stripped so that 1.2 == 1.2.0 == 1.2.0.0
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        if not self.prerelease:
            return tuple(segments), 1, ()
        identifiers = tuple(
            (0, int(part), "") if _NUMERIC.match(part) else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return tuple(segments), 0, identifiers

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __hash__(self):
        return hash(self._key)

    def __str__(self):
        text = ".".join(str(s) for s in self.segments)
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    def __repr__(self):
        return f"Version('{self}')"


def parse_version(tag: str) -> Version:
    return Version.parse(tag)
