from .catalog_loader import load_catalog_from_yaml
from .keys import StoreKeys
from .memory import InMemoryKeyValueStore
from .seeding import StoreSeeder

__all__ = [
    "load_catalog_from_yaml",
    "StoreKeys",
    "InMemoryKeyValueStore",
    "StoreSeeder",
]
