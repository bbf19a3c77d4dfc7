from .config_repository import ConfigRepository
from .instance_repository import InstanceRepository

__all__ = [
    'ConfigRepository',
    'InstanceRepository'
]
