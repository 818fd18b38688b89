"""
Rendering-layer collaborators used by the mutation actions.

Actions never render anything themselves. After a successful write they mark
the invoice list stale through a `ViewCache` and hand control to a
`Navigator`. The protocols let a web framework plug in its own cache and
redirect mechanism; the in-process implementations below back the CLI and
the tests.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from invoice_dashboard.errors import InvoiceDashboardError
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class ViewCache(Protocol):
    def revalidate_path(self, path: str) -> None:
        """Mark the view rendered at `path` (and anything below it) stale."""
        ...


@runtime_checkable
class Navigator(Protocol):
    def redirect(self, path: str) -> None:
        """Transfer control to `path`. Implementations are not expected to return."""
        ...


class Redirect(InvoiceDashboardError):
    """Raised by `RaisingNavigator` to unwind the current request toward `location`."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Redirect to {location}")
        self.location = location


class RaisingNavigator:
    """Navigator that transfers control by raising `Redirect`."""

    def redirect(self, path: str) -> None:
        log.debug("Redirecting", extra={"location": path})
        raise Redirect(path)


def _normalize(path: str) -> str:
    return "/" + path.strip("/")


class InMemoryViewCache:
    """
    Rendered payloads keyed by route path.

    Revalidating a path drops it and every path nested under it, so the next
    render has to recompute from the store.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self.revalidated: List[str] = []

    def get(self, path: str) -> Optional[Any]:
        return self._entries.get(_normalize(path))

    def set(self, path: str, payload: Any) -> None:
        self._entries[_normalize(path)] = payload

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and _normalize(path) in self._entries

    def revalidate_path(self, path: str) -> None:
        target = _normalize(path)
        prefix = target.rstrip("/") + "/"
        stale = [key for key in self._entries if key == target or key.startswith(prefix)]
        for key in stale:
            del self._entries[key]
        self.revalidated.append(target)
        log.debug("View revalidated", extra={"path": target, "dropped": len(stale)})


__all__ = [
    "InMemoryViewCache",
    "Navigator",
    "RaisingNavigator",
    "Redirect",
    "ViewCache",
]
