"""
feyna.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) stored on `request.state.user`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Verified token payload.

    Application data lives under the `data` claim; `role` is read from `data.role`.
    """

    claims: dict[str, Any] = field(hash=False)

    @property
    def data(self) -> dict[str, Any]:
        data = self.claims.get("data")
        return data if isinstance(data, dict) else {}

    @property
    def role(self) -> str | None:
        role = self.data.get("role")
        return role if isinstance(role, str) else None
