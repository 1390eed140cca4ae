"""Service package public API definitions.

The store module imports the seed module, which in turn only needs the store
for type hints. Importing the implementations lazily keeps
``petshop.services.exceptions`` importable on its own without dragging the
whole store in.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "DashboardService",
    "DeletionResult",
    "PetShopStore",
    "build_store",
]

_SERVICE_MODULES = {
    "DashboardService": "dashboard",
    "DeletionResult": "store",
    "PetShopStore": "store",
    "build_store": "store",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .dashboard import DashboardService as DashboardService
    from .store import DeletionResult as DeletionResult
    from .store import PetShopStore as PetShopStore
    from .store import build_store as build_store
