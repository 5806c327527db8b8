"""Domain errors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class IndexLoadError(RuntimeError):
    """Raised when the site index cannot be fetched, read or validated."""

    source: str
    reason: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"Failed to load site index from {self.source} ({self.status_code}): {self.reason}"
        return f"Failed to load site index from {self.source}: {self.reason}"
