"""
Explicit, injectable state container.

A Store combines slices, holds their current states and runs thunks
against injected services. Nothing here is a singleton: each caller
(a Reflex event handler, a test) builds the store it needs and passes
it along.

Thunk lifecycle:

    pending    dispatched before the payload creator starts
    fulfilled  dispatched with the returned payload
    rejected   dispatched with the failure message

Concurrent runs are not serialized; each applies its phases in the
order they complete.
"""

from typing import Any, AsyncIterator, Callable, Iterable, Mapping

from company_console.lib import logs
from company_console.services import Services
from company_console.services.errors import ServiceError
from company_console.store.actions import Action, AsyncThunk, ThunkRejected
from company_console.store.slice import Slice

LOG = logs.logger(__file__)

Listener = Callable[[Action], None]


class ThunkContext:
    """
    Handed to every thunk payload creator.

    Gives access to services, the session token, slice states, dispatch
    and nested thunk runs.
    """

    def __init__(self, store: "Store") -> None:
        self._store = store

    @property
    def services(self) -> Services:
        if self._store.services is None:
            raise RuntimeError("Store was created without services")
        return self._store.services

    @property
    def token(self) -> str | None:
        """Bearer token of the current session, if any."""
        auth = self._store.state.get("auth")
        return getattr(auth, "access_token", None) or None

    def state(self, name: str) -> Any:
        return self._store.select(name)

    def has_slice(self, name: str) -> bool:
        return name in self._store.state

    def dispatch(self, action: Action) -> Action:
        return self._store.dispatch(action)

    async def run(self, thunk: AsyncThunk, *args: Any, **kwargs: Any) -> Action:
        return await self._store.run(thunk, *args, **kwargs)


class Store:
    """
    Holds slice states and applies actions to them.

    Attributes:
        services: Collaborators available to thunks.
    """

    def __init__(
        self,
        slices: Iterable[Slice],
        services: Services | None = None,
        state: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Args:
            slices: Slices making up the store.
            services: Services used by thunks.
            state: Optional preloaded slice states keyed by slice name.
        """
        self._slices: dict[str, Slice] = {slice_.name: slice_ for slice_ in slices}
        preloaded = dict(state or {})
        self._state: dict[str, Any] = {
            name: preloaded.get(name) if name in preloaded else slice_.initial()
            for name, slice_ in self._slices.items()
        }
        self._listeners: list[Listener] = []
        self.services = services

    @property
    def state(self) -> Mapping[str, Any]:
        """Current slice states keyed by slice name."""
        return dict(self._state)

    def select(self, name: str) -> Any:
        """Return the current state of one slice."""
        return self._state[name]

    def dispatch(self, action: Action) -> Action:
        """Reduce the action through every slice and notify listeners."""
        for name, slice_ in self._slices.items():
            self._state[name] = slice_.reduce(self._state[name], action)
        for listener in list(self._listeners):
            listener(action)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every dispatch; returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def stream(
        self, thunk: AsyncThunk, *args: Any, **kwargs: Any
    ) -> AsyncIterator[Action]:
        """
        Run a thunk, yielding the pending action and then the settled one.

        Lets callers render the loading state before the request finishes.
        Failures never escape as exceptions except for programming errors,
        which are re-raised after the rejected action is dispatched.
        """
        yield self.dispatch(thunk.pending())
        try:
            payload = await thunk.payload_creator(ThunkContext(self), *args, **kwargs)
        except (ServiceError, ThunkRejected) as exc:
            LOG.warning("%s rejected: %s", thunk.type_prefix, exc)
            yield self.dispatch(thunk.rejected(error=str(exc) or thunk.error))
            return
        except Exception:
            LOG.error("%s failed unexpectedly", thunk.type_prefix, exc_info=True)
            self.dispatch(thunk.rejected(error=thunk.error))
            raise
        yield self.dispatch(thunk.fulfilled(payload))

    async def run(self, thunk: AsyncThunk, *args: Any, **kwargs: Any) -> Action:
        """Run a thunk to completion and return its settled action."""
        settled = None
        async for action in self.stream(thunk, *args, **kwargs):
            settled = action
        return settled
