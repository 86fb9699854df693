"""Transaction models for the pending transaction reconciler."""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class PendingTransaction:
    """
    A record awaiting confirmation of completion.

    Identified by a 64-bit signed integer. A pending record without an
    identifier is accepted but can never be reconciled.
    """
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"PT({self.id})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"id": self.id}


@dataclass(frozen=True)
class ProcessedTransaction:
    """
    An externally reported outcome of work.

    Both fields come from upstream data and are kept as text exactly as
    received; interpretation happens during reconciliation.
    """
    id: Optional[str] = None
    status: Optional[str] = None

    def __str__(self) -> str:
        return f"PR({self.id}, {self.status})"

    @property
    def has_status(self) -> bool:
        return self.status is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "status": self.status,
        }
