from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SnapshotDecodeError(Exception):
    """Raised when an audit snapshot cannot be read as a JSON object.

    The change differ catches this and degrades to an empty description;
    it never reaches callers of ``describe``.
    """

    reason: str
    raw: str | None = None

    def __str__(self) -> str:
        return self.reason
