class TaskUpdatesError(Exception):
    pass


class ConfigError(TaskUpdatesError):
    pass


class SchedulerError(TaskUpdatesError):
    pass


class FetchError(TaskUpdatesError):
    def __init__(self, image_name: str, message: str):
        super().__init__(f"Failed to fetch tags for {image_name}: {message}")
        self.image_name: str = image_name


class ParseError(TaskUpdatesError):
    pass


class VersionParseError(ParseError):
    def __init__(self, tag: str, image_name: str | None = None):
        if image_name:
            message = f"Couldn't parse image tag version for {image_name}: {tag!r}"
        else:
            message = f"Malformed version: {tag!r}"
        super().__init__(message)
        self.tag: str = tag
        self.image_name: str | None = image_name


class RegistryError(TaskUpdatesError):
    pass


class RegistryTransportError(RegistryError):
    pass


class RegistryNotFoundError(RegistryError):
    pass


class RegistryUnauthorizedError(RegistryError):
    pass
