"""
Storage backends and the Saver/Reader/Deleter contracts.
"""

from .base import BaseStorage, Deleter, Reader, Saver
from .storage import Storage
from .sqlite_storage import SQLiteStorage
from .storage_factory import get_storage

__all__ = ["BaseStorage", "Deleter", "Reader", "Saver", "Storage", "SQLiteStorage", "get_storage"]
