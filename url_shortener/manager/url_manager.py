"""
UrlManager module for the URL shortener.

Responsibilities:
    - Validate target URLs and caller-supplied aliases
    - Allocate an alias when the caller does not supply one
    - Retry allocation on alias conflicts, within a bounded number of attempts
    - Delegate lookup and delete to the storage backend

Design notes:
    - Conflicts are detected only by the store's atomic insert. There is no
      "does this alias exist?" query before saving: between such a check and
      the insert another request could take the alias.
    - A caller-supplied alias is saved once. If it is taken, AliasExists goes
      back to the caller; regenerating would silently hand out a different alias.
    - A generated alias is regenerated on AliasExists up to `max_attempts`
      saves in total. Every other error is terminal for the request.
    - Storage, generator and logger are injected; nothing is global.

LLM Prompt Example:
    "Explain why random short codes with a unique index and a bounded retry
    loop are race-free, while check-then-insert allocation is not."
"""

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional
from urllib.parse import urlparse

from ..exceptions import AliasExists
from ..storage.base import BaseStorage
from .alias_generator import BaseAliasGenerator, RandomAliasGenerator

AliasPattern = re.compile(r"[0-9a-zA-Z]+")
MAX_ALIAS_LENGTH = 32
DEFAULT_MAX_ATTEMPTS = 5
# Path segments owned by fixed routes.
RESERVED_ALIASES = frozenset({"health", "docs", "redoc", "openapi", "url"})


@dataclass(frozen=True)
class SavedURL:
    """Outcome of a successful save."""
    id: int
    alias: str
    url: str


class UrlManager:
    """
    Coordinates alias allocation and storage for short URLs.

    LLM Prompt Example:
        "Show how DI lets the same manager run against an in-memory store in
        tests and a SQL store in production."
    """

    def __init__(
        self,
        storage: BaseStorage,
        generator: Optional[BaseAliasGenerator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
        reserved: Iterable[str] = RESERVED_ALIASES,
    ):
        """
        Args:
            storage (BaseStorage): Backend storage instance.
            generator (Optional[BaseAliasGenerator]): Alias source; Base62 length 6 when omitted.
            max_attempts (int): Total saves tried for a generated alias (>= 1).
            logger (Optional[logging.Logger]): Where retries are reported.
            reserved (Iterable[str]): Aliases that clash with fixed routes.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.storage = storage
        self.generator = generator or RandomAliasGenerator()
        self.max_attempts = max_attempts
        self.log = logger or logging.getLogger("url_shortener.manager")
        self.reserved: FrozenSet[str] = frozenset(reserved)

    # ---------------------------------------------------------------------
    # Validation Helpers
    # ---------------------------------------------------------------------
    def _validate_url(self, url: str) -> None:
        """
        Validate that a URL has an http/https scheme and a netloc.

        Raises:
            ValueError: If the URL is malformed.
        """
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("Invalid URL format")

    def _validate_alias(self, alias: str) -> None:
        """
        Validate alias characters and length (max 32, Base62 only).

        Raises:
            ValueError: If alias contains invalid characters, is too long or is reserved.
        """
        if not AliasPattern.fullmatch(alias):
            raise ValueError("Alias must contain only 0-9a-zA-Z")
        if len(alias) > MAX_ALIAS_LENGTH:
            raise ValueError("Alias too long")
        if alias in self.reserved:
            raise ValueError("Alias is reserved")

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def save_url(self, url: str, alias: Optional[str] = None) -> SavedURL:
        """
        Store `url` under `alias`, or under a freshly generated alias.

        Rules:
            - URL must be http/https with a host.
            - Alias provided: must be Base62, <= 32 chars and not reserved; saved once.
            - Alias empty/None: generate, save, regenerate on AliasExists
              or on a reserved candidate.

        Returns:
            SavedURL: id, alias and url of the new record.

        Raises:
            ValueError: Invalid URL or alias.
            AliasExists: Supplied alias taken, or all generated attempts collided.
            StorageUnavailable: Backend failure (never retried).
        """
        self._validate_url(url)

        if alias:
            self._validate_alias(alias)
            record_id = self.storage.save_url(url, alias)
            return SavedURL(id=record_id, alias=alias, url=url)

        last_conflict: Optional[AliasExists] = None
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator.generate()
            if candidate in self.reserved:
                self.log.info(
                    "generated alias is reserved, retrying (attempt %d/%d): %s",
                    attempt, self.max_attempts, candidate,
                )
                continue
            try:
                record_id = self.storage.save_url(url, candidate)
            except AliasExists as exc:
                self.log.info(
                    "generated alias already exists, retrying (attempt %d/%d): %s",
                    attempt, self.max_attempts, candidate,
                )
                last_conflict = exc
                continue
            self.log.debug("generated random alias: %s", candidate)
            return SavedURL(id=record_id, alias=candidate, url=url)

        self.log.warning("gave up allocating an alias after %d attempts", self.max_attempts)
        if last_conflict is not None:
            raise last_conflict
        raise AliasExists(candidate, operation="manager.save_url")

    def get_url(self, alias: str) -> str:
        """Return the target URL for `alias` (NotFound / StorageUnavailable propagate)."""
        return self.storage.get_url(alias)

    def delete_url(self, alias: str) -> None:
        """Delete the record for `alias` (NotFound / StorageUnavailable propagate)."""
        self.storage.delete_url(alias)
