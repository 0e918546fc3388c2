"""Storage layer for document persistence."""

from .gist_storage import GistError, GistStorage
from .local_storage import LocalStorage
from .storage_manager import StorageManager

__all__ = ["GistStorage", "GistError", "LocalStorage", "StorageManager"]
