# ABOUTME: Configuration for connecting to the remote book collection.
# ABOUTME: Defaults target a local json-server; environment variables override them.

import os
from collections.abc import Mapping
from dataclasses import dataclass

from shelfsync.view.state import DEFAULT_ROWS_PER_PAGE

DEFAULT_BASE_URL = "http://localhost:3001"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 0

ENV_BASE_URL = "SHELFSYNC_BASE_URL"
ENV_TIMEOUT = "SHELFSYNC_TIMEOUT"
ENV_MAX_RETRIES = "SHELFSYNC_MAX_RETRIES"
ENV_ROWS_PER_PAGE = "SHELFSYNC_ROWS_PER_PAGE"


@dataclass(frozen=True)
class StoreConfig:
    """Connection and paging settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StoreConfig":
        """Build a config from SHELFSYNC_* variables, falling back to defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get(ENV_BASE_URL, DEFAULT_BASE_URL),
            timeout=float(env.get(ENV_TIMEOUT, DEFAULT_TIMEOUT)),
            max_retries=int(env.get(ENV_MAX_RETRIES, DEFAULT_MAX_RETRIES)),
            rows_per_page=int(env.get(ENV_ROWS_PER_PAGE, DEFAULT_ROWS_PER_PAGE)),
        )
