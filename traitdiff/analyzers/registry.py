"""Dialect registry for the service markers traitdiff understands."""

import logging
from typing import Any

from pydantic import ValidationError

from .base import TARPC, ConfigurationError, Dialect

logger = logging.getLogger(__name__)

DEFAULT_DIALECT = TARPC.name


class DialectRegistry:
    """Registry of available dialects, keyed by name."""

    def __init__(self):
        self._dialects: dict[str, Dialect] = {}

    def register(self, dialect: Dialect) -> None:
        """Register a dialect, replacing any previous one with the same name."""
        if dialect.name in self._dialects:
            logger.debug("Replacing dialect %s", dialect.name)
        self._dialects[dialect.name] = dialect

    def get_dialect(self, name: str) -> Dialect:
        """Get dialect by name."""
        try:
            return self._dialects[name]
        except KeyError:
            known = ", ".join(sorted(self._dialects)) or "none"
            raise ConfigurationError(f"Unknown dialect '{name}' (known: {known})") from None

    def names(self) -> list[str]:
        return list(self._dialects)

    def register_from_config(self, config: dict[str, Any]) -> None:
        """Register every dialect listed under the ``dialects`` key."""
        entries = config.get("dialects") or {}
        if not isinstance(entries, dict):
            raise ConfigurationError("'dialects' must be a mapping of name to settings")

        for name, settings in entries.items():
            if not isinstance(settings, dict):
                raise ConfigurationError(f"Dialect '{name}' must be a mapping")
            try:
                dialect = Dialect(**{"name": name, **settings})
            except ValidationError as e:
                raise ConfigurationError(f"Invalid dialect '{name}': {e}") from e
            self.register(dialect)

    def select(self, config: dict[str, Any], override: str | None = None) -> Dialect:
        """Pick the dialect named on the command line, in config, or the default."""
        name = override or config.get("dialect") or DEFAULT_DIALECT
        return self.get_dialect(name)


def create_default_registry(config: dict[str, Any] | None = None) -> DialectRegistry:
    """Create registry with the built-in dialect plus any configured ones."""
    registry = DialectRegistry()
    registry.register(TARPC)

    if config:
        registry.register_from_config(config)

    return registry
