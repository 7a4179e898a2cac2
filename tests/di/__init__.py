"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .config import ConfigOverrideProvider, make_settings
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "ConfigOverrideProvider",
    "build_test_container",
    "make_settings",
]
