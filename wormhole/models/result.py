"""Best-effort lookup result."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Lookup(Generic[T]):
    """Outcome of a secondary lookup that must not fail its caller.

    Either value is set, or error explains why it is missing.
    """

    value: T | None = None
    error: str | None = None

    @property
    def degraded(self) -> bool:
        """Check if the lookup failed and value is only a placeholder."""
        return self.error is not None
