"""Foundation configuration dataclasses.

FetchConfig controls the HTTP fetch collaborator.
All behavior-controlling parameters live here, not as magic numbers in code.
"""

from __future__ import annotations

from dataclasses import dataclass

from seoinspector.core.errors import ConfigError


@dataclass(frozen=True)
class FetchConfig:
    """Configuration for page fetching.

    Only network errors and 5xx responses are retried. A 4xx response
    fails at once.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 3
    backoff_seconds: float = 0.5
    user_agent: str = "seoinspector/0.1"

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_retries < 1:
            raise ConfigError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.backoff_seconds < 0:
            raise ConfigError(f"backoff_seconds must not be negative, got {self.backoff_seconds}")
