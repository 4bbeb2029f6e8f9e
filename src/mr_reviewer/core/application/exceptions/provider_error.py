from __future__ import annotations

from dataclasses import dataclass

_RATE_LIMIT_MARKERS = ("429", "rate limit", "rate_limit")


@dataclass(eq=False)
class ProviderError(Exception):
    """Failure reported by an external provider (GitLab or a model vendor)."""

    provider: str
    message: str
    retryable: bool = False
    status_code: int | None = None
    error_code: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    @property
    def is_rate_limited(self) -> bool:
        if self.status_code == 429:
            return True
        lowered = self.message.lower()
        return any(marker in lowered for marker in _RATE_LIMIT_MARKERS)

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.provider}: {self.message}{code}"
