# Core modules

from .config import Settings, get_settings
from .storage import FileStorage, MemoryStorage, storage_slot

__all__ = ["Settings", "get_settings", "FileStorage", "MemoryStorage", "storage_slot"]
