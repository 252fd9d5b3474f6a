"""
Alias allocation and the save/lookup/delete policy on top of storage.
"""

from .alias_generator import BASE62_ALPHABET, BaseAliasGenerator, RandomAliasGenerator
from .url_manager import SavedURL, UrlManager

__all__ = ["BASE62_ALPHABET", "BaseAliasGenerator", "RandomAliasGenerator", "SavedURL", "UrlManager"]
