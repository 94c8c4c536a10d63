"""
feyna.routing.registry

Route metadata collected from decorated router classes.

Responsibilities:
- Carry per-method markers written by decorators (`RouteMarker`).
- Hold one `RouterEntry` per router class inside an explicit `RouterRegistry`.
- Collect markers into `RouteRegistration`s in declaration order.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from feyna.errors import RouterConfigError

MARKER_ATTR = "__feyna_route__"

HTTP_METHODS = frozenset({"get", "post", "put", "patch", "delete"})


@dataclass(slots=True)
class RouteMarker:
    # Written onto the function object; `http_method` stays None until a route decorator runs.
    http_method: str | None = None
    path: str | None = None
    middlewares: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class RouteRegistration:
    owner: type
    key: str
    http_method: str
    path: str
    handler: Callable[..., Any]
    middlewares: list[Any]


@dataclass(slots=True)
class RouterEntry:
    owner: type
    routes: dict[str, RouteRegistration] = field(default_factory=dict)
    app: Any = None
    base_path: str | None = None
    before: Callable[..., Any] | None = None
    after: Callable[..., Any] | None = None
    # Apps this router class has been mounted on.
    mounted_on: weakref.WeakSet = field(default_factory=weakref.WeakSet)

    @property
    def name(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}"


class RouterRegistry:
    """
    Mapping of router class -> `RouterEntry`.

    Entries are keyed by the class object, so two classes sharing a name in
    different modules never collide.
    """

    def __init__(self) -> None:
        self._entries: dict[type, RouterEntry] = {}

    def __contains__(self, owner: type) -> bool:
        return owner in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def entry_for(self, owner: type) -> RouterEntry:
        entry = self._entries.get(owner)
        if entry is None:
            entry = RouterEntry(owner=owner)
            self._entries[owner] = entry
        return entry

    def get(self, owner: type) -> RouterEntry | None:
        return self._entries.get(owner)

    def collect(self, owner: type) -> RouterEntry:
        """
        Build the entry for `owner` from the markers on its methods.

        Bases are walked first so inherited routes keep their position and a
        redefined method replaces the inherited route in place.
        """
        entry = self.entry_for(owner)
        routes: dict[str, RouteRegistration] = {}
        for klass in reversed(owner.__mro__):
            for key, value in vars(klass).items():
                marker = marker_of(value)
                if marker is None:
                    if key in routes:
                        # Overridden without decorators: the override is no longer routed.
                        del routes[key]
                    continue
                routes[key] = _registration(owner, key, value, marker)
        entry.routes = routes
        return entry


def marker_of(value: Any) -> RouteMarker | None:
    return getattr(value, MARKER_ATTR, None) if callable(value) else None


def ensure_marker(fn: Callable[..., Any]) -> RouteMarker:
    marker = getattr(fn, MARKER_ATTR, None)
    if marker is None:
        marker = RouteMarker()
        setattr(fn, MARKER_ATTR, marker)
    return marker


def flatten(items: Iterable[Any]) -> list[Any]:
    flat: list[Any] = []
    for item in items:
        if isinstance(item, list | tuple):
            flat.extend(flatten(item))
        elif item is not None:
            flat.append(item)
    return flat


def _registration(owner: type, key: str, fn: Callable[..., Any], marker: RouteMarker) -> RouteRegistration:
    if marker.http_method is None or marker.path is None:
        raise RouterConfigError(
            f"{owner.__qualname__}.{key} has middlewares attached but no route; "
            "add @get/@post/@put/@patch/@delete"
        )
    return RouteRegistration(
        owner=owner,
        key=key,
        http_method=marker.http_method,
        path=marker.path,
        handler=fn,
        middlewares=list(marker.middlewares),
    )


default_registry = RouterRegistry()


# --- Module Notes -----------------------------------------------------------
# Decorators only annotate functions; nothing is written into a registry until
# the class body is complete (`Router.__init_subclass__` calls `collect`).
