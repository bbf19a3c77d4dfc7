import os
import re
import shutil

import pytest

from task_updates.errors import ConfigError
from task_updates.repositories.config_repository import ConfigRepository

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets")


@pytest.fixture
def config_file(tmp_path):
    source_file = os.path.join(ASSETS_DIR, "config.yaml")
    dest_file = tmp_path / "config.yaml"
    shutil.copy(source_file, dest_file)
    return dest_file


def test_config_repository_load(config_file):
    config = ConfigRepository(str(config_file)).load()

    assert config.server == "http://nomad.example.com:4646"
    assert config.namespaces == ["default", "monitoring"]
    assert [i.name for i in config.images] == [
        "docker.io/library/traefik",
        "docker.io/grafana/grafana",
        "ghcr.io/example/app",
    ]

    traefik = config.images[0]
    assert isinstance(traefik.include[0], re.Pattern)
    assert traefik.include[0].pattern == r"^v\d+\.\d+\.\d+$"
    assert traefik.exclude == ()

    grafana = config.images[1]
    assert grafana.exclude[0].search("9.5.2")
    assert config.images[2].include == ()


def test_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("images:\n  - name: redis\n")

    config = ConfigRepository(str(config_file)).load()
    assert config.server == "http://127.0.0.1:4646"
    assert config.namespaces == ["*"]
    assert config.images[0].name == "docker.io/library/redis"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigRepository(str(tmp_path / "missing.yaml")).load()


def test_invalid_regex(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("images:\n  - name: redis\n    include: ['[unclosed']\n")

    with pytest.raises(ConfigError, match="structure"):
        ConfigRepository(str(config_file)).load()


def test_invalid_image_name(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("images:\n  - name: Redis\n")

    with pytest.raises(ConfigError, match="Invalid image name 'Redis'"):
        ConfigRepository(str(config_file)).load()


def test_missing_image_name(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("images:\n  - include: ['^v']\n")

    with pytest.raises(ConfigError):
        ConfigRepository(str(config_file)).load()


@pytest.mark.parametrize("content", ["- just\n- a list\n", "images: [unclosed\n", ""])
def test_malformed_document(tmp_path, content):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content)

    with pytest.raises(ConfigError, match="Invalid"):
        ConfigRepository(str(config_file)).load()
