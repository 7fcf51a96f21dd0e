"""
Client-side state store.

create_store builds a Store holding every slice; pass services to swap the
API clients (tests use the demo service or httpx.MockTransport clients).
"""

from typing import Any, Mapping

from company_console.services import Services, get_services
from company_console.store.actions import (
    Action,
    ActionCreator,
    AsyncThunk,
    ThunkRejected,
    async_thunk,
)
from company_console.store.slice import Slice
from company_console.store.slices import ALL_SLICES
from company_console.store.store import Store, ThunkContext


def create_store(
    services: Services | None = None, state: Mapping[str, Any] | None = None
) -> Store:
    """
    Build a store with every slice.

    Args:
        services: Services for thunks; defaults to the configured services.
        state: Optional preloaded slice states keyed by slice name.

    Returns:
        A new Store.
    """
    return Store(ALL_SLICES, services or get_services(), state)


__all__ = [
    "Action",
    "ActionCreator",
    "AsyncThunk",
    "Slice",
    "Store",
    "ThunkContext",
    "ThunkRejected",
    "async_thunk",
    "create_store",
]
