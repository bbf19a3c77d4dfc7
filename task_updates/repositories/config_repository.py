import os
from dataclasses import replace

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from task_updates.errors import ConfigError
from task_updates.models import Config
from task_updates.utils.image_reference import normalize_image_name
from task_updates.utils.yaml_loader import get_yaml_instance


class ConfigRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path
        self.yaml: YAML = get_yaml_instance()

    def load(self) -> Config:
        if not os.path.isfile(self.file_path):
            raise ConfigError(f"Config file {self.file_path} not found")
        with open(self.file_path, "r") as f:
            try:
                data = self.yaml.load(f)
            except YAMLError as e:
                raise ConfigError(f"Invalid {self.file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {self.file_path}: expected a mapping at the top level")
        try:
            config = Config(**data)
        except (ValidationError, TypeError) as e:
            raise ConfigError(f"Invalid {self.file_path} structure: {e}") from e

        images = []
        for image in config.images:
            try:
                images.append(replace(image, name=normalize_image_name(image.name)))
            except ValueError as e:
                raise ConfigError(f"Invalid image name {image.name!r}: {e}") from e
        return replace(config, images=images)
