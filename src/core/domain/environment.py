"""Target environments for the versions API."""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Remote environments the editor can point at."""

    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_bool(cls, production: bool) -> "Environment":
        """Derive an environment from the `--production` flag."""

        return cls.PRODUCTION if production else cls.STAGING

    def label(self) -> str:
        return "production" if self is Environment.PRODUCTION else "staging"
