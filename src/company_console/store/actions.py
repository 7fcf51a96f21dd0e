"""
Action types for the client-side store.

An Action is an immutable record of something that happened. Plain
actions come from ActionCreator instances; asynchronous work is described
by AsyncThunk, which owns three creators for the pending, fulfilled and
rejected phases of one request.
"""

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

PENDING = "pending"
FULFILLED = "fulfilled"
REJECTED = "rejected"


class ThunkRejected(Exception):
    """Raised by thunks to reject with a message, and by Action.unwrap."""


@dataclass(frozen=True)
class Action:
    """
    A dispatched store action.

    Attributes:
        type: Namespaced action type, e.g. "company/createCompany/fulfilled".
        payload: Result data carried by the action.
        error: Rejection message, only set on rejected actions.
    """

    type: str
    payload: Any = None
    error: str | None = None

    @property
    def is_rejected(self) -> bool:
        return self.type.endswith(f"/{REJECTED}")

    @property
    def is_fulfilled(self) -> bool:
        return self.type.endswith(f"/{FULFILLED}")

    def unwrap(self) -> Any:
        """Return the payload, raising ThunkRejected for rejected actions."""
        if self.is_rejected:
            raise ThunkRejected(self.error or "Request failed")
        return self.payload


class ActionCreator:
    """Callable producing actions of a single type."""

    def __init__(self, type: str) -> None:
        self.type = type

    def __call__(self, payload: Any = None, error: str | None = None) -> Action:
        return Action(self.type, payload, error)

    def match(self, action: Action) -> bool:
        return action.type == self.type

    def __repr__(self) -> str:
        return f"ActionCreator({self.type!r})"


class AsyncThunk:
    """
    A named asynchronous operation run by Store.stream/Store.run.

    The payload creator receives a ThunkContext followed by the caller's
    arguments; its return value becomes the fulfilled payload and any
    ServiceError or ThunkRejected becomes the rejected error message.

    Attributes:
        type_prefix: Action type prefix, e.g. "company/fetchCompanies".
        error: Message used when a failure carries no message of its own.
    """

    def __init__(
        self,
        type_prefix: str,
        payload_creator: Callable[..., Awaitable[Any]],
        error: str,
    ) -> None:
        self.type_prefix = type_prefix
        self.payload_creator = payload_creator
        self.error = error
        self.pending = ActionCreator(f"{type_prefix}/{PENDING}")
        self.fulfilled = ActionCreator(f"{type_prefix}/{FULFILLED}")
        self.rejected = ActionCreator(f"{type_prefix}/{REJECTED}")
        functools.update_wrapper(self, payload_creator)

    def __repr__(self) -> str:
        return f"AsyncThunk({self.type_prefix!r})"


def async_thunk(type_prefix: str, error: str) -> Callable[..., AsyncThunk]:
    """
    Decorate an async payload creator as an AsyncThunk.

    Example:
        @async_thunk("company/fetchCompanies", error="Failed to fetch companies")
        async def fetch_companies(ctx):
            return await ctx.services.companies.list_companies(ctx.token)
    """

    def decorator(payload_creator: Callable[..., Awaitable[Any]]) -> AsyncThunk:
        return AsyncThunk(type_prefix, payload_creator, error)

    return decorator
