"""Docker image reference parsing and name normalization.

Follows the reference grammar used by the Docker distribution tooling:
``[domain/]path[:tag][@digest]`` where a reference without a registry
domain belongs to Docker Hub and single-component Docker Hub names live in
the ``library`` namespace.
"""

import re

from task_updates.models import ImageReference

DEFAULT_DOMAIN = "docker.io"
LEGACY_DEFAULT_DOMAIN = "index.docker.io"
OFFICIAL_REPO_PREFIX = "library/"
DEFAULT_TAG = "latest"

_DOMAIN_COMPONENT = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?"
_PATH_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|[-]*)[a-z0-9]+)*"
_TAG = r"[\w][\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9A-Fa-f]{32,}"

_REFERENCE_PATTERN = re.compile(
    rf"^(?P<name>{_DOMAIN}/{_PATH_COMPONENT}(?:/{_PATH_COMPONENT})*)"
    rf"(?::(?P<tag>{_TAG}))?"
    rf"(?:@(?P<digest>{_DIGEST}))?$",
    re.ASCII,
)
_IDENTIFIER_PATTERN = re.compile(r"^[a-f0-9]{64}$")


def split_domain(reference: str) -> tuple[str, str]:
    index = reference.find("/")
    head = reference[:index]
    if index == -1 or (
        not any(c in head for c in ".:") and head != "localhost" and head.lower() == head
    ):
        domain, remainder = DEFAULT_DOMAIN, reference
    else:
        domain, remainder = head, reference[index + 1:]

    if domain == LEGACY_DEFAULT_DOMAIN:
        domain = DEFAULT_DOMAIN
    if domain == DEFAULT_DOMAIN and "/" not in remainder:
        remainder = OFFICIAL_REPO_PREFIX + remainder
    return domain, remainder


def parse_normalized_reference(reference: str) -> ImageReference:
    """Parse ``reference`` into its canonical, fully-qualified form.

    Raises ValueError for references that are not valid image references.
    """
    if _IDENTIFIER_PATTERN.match(reference):
        raise ValueError(f"invalid repository name ({reference}), cannot specify 64-byte hexadecimal strings")

    domain, remainder = split_domain(reference)
    remote_name = re.split(r"[:@]", remainder, maxsplit=1)[0]
    if remote_name.lower() != remote_name:
        raise ValueError(f"invalid reference format: repository name ({reference}) must be lowercase")

    match = _REFERENCE_PATTERN.match(f"{domain}/{remainder}")
    if not match:
        raise ValueError(f"invalid reference format: {reference}")

    return ImageReference(name=match.group("name"), tag=match.group("tag"), digest=match.group("digest"))


def normalize_image_name(name: str) -> str:
    """Return the canonical repository name, dropping any tag or digest."""
    return parse_normalized_reference(name).name


def parse_docker_ref(reference: str) -> ImageReference:
    """Parse a running image reference, defaulting the tag to ``latest``.

    A reference that pins a digest keeps only the digest.
    """
    parsed = parse_normalized_reference(reference)
    if parsed.digest:
        return ImageReference(name=parsed.name, digest=parsed.digest)
    return ImageReference(name=parsed.name, tag=parsed.tag or DEFAULT_TAG)
