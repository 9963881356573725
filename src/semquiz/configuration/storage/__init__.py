"""Storage configurations."""

from semquiz.configuration.storage.local import LocalStorage
from semquiz.configuration.storage.memory import MemoryStorage

__all__ = ["LocalStorage", "MemoryStorage"]
