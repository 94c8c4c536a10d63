"""
feyna.auth.roles

Role hierarchy policy.

Responsibilities:
- Declare which roles also satisfy a required role (e.g. "Admin" satisfies "User").
- Expand a role requirement (comma-separated string or iterable) into the permitted set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class RolePolicy:
    # role -> roles that are also accepted wherever `role` is required.
    satisfied_by: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> RolePolicy:
        return cls(satisfied_by={k: frozenset(v) for k, v in mapping.items()})

    def permitted(self, role: str | Iterable[str]) -> frozenset[str]:
        permitted: set[str] = set()
        pending = list(split_roles(role))
        while pending:
            current = pending.pop()
            if current in permitted:
                continue
            permitted.add(current)
            # Closed transitively, so chains like Guest -> User -> Admin hold.
            pending.extend(self.satisfied_by.get(current, ()))
        return frozenset(permitted)


def split_roles(role: str | Iterable[str]) -> list[str]:
    names = role.split(",") if isinstance(role, str) else list(role)
    return [n.strip() for n in names if n and n.strip()]


DEFAULT_ROLE_POLICY = RolePolicy.from_mapping({"User": ["Admin"]})
