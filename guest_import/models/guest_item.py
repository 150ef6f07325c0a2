from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""NormalizedImportItem: the canonical unit handed to persistence.

Items are produced only by the row validator, so the invariants below hold
for every instance that reaches an ImportResult:

- kind == SUBGUEST  => parent_key is a non-empty string
- kind == SUBGUEST  => phone is None and email is None
- first_name / last_name are trimmed and non-empty
"""

__all__ = [
    "ItemKind",
    "NormalizedImportItem",
]


class ItemKind(Enum):
    """Record type of an import row.

    - GUEST: top-level invitee with independent contact data
    - SUBGUEST: invitee attached to exactly one guest (plus-one, child)
    """
    GUEST = "guest"
    SUBGUEST = "subguest"


@dataclass(frozen=True)
class NormalizedImportItem:
    kind: ItemKind
    first_name: str
    last_name: str
    parent_key: str | None = None  # subguest only, verbatim (trimmed) ParentKey cell
    phone: str | None = None  # guest only
    email: str | None = None  # guest only
    relation: str | None = None
    side: str | None = None
    rsvp: str | None = None
    allergens: str | None = None
    notes: str | None = None
    row_number: int = 0  # source row, for diagnostics

    @property
    def display_name(self) -> str:
        """"FirstName LastName" as a sub-guest's ParentKey is expected to spell it."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_guest(self) -> bool:
        return self.kind is ItemKind.GUEST

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the create-guests request shape.

        Guests do not carry ``parent_key`` at all; row_number is internal and
        never sent.
        """
        payload: dict[str, Any] = {
            "type": self.kind.value,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "relation": self.relation,
            "side": self.side,
            "rsvp": self.rsvp,
            "allergens": self.allergens,
            "notes": self.notes,
        }
        if self.kind is ItemKind.SUBGUEST:
            payload["parent_key"] = self.parent_key
        return payload
