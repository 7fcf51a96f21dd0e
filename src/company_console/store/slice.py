"""
Slices: named partitions of the store state with their reducers.

Each slice owns one dataclass state and a table of reducers keyed by
action type. Reducers are pure and return a new state; unknown actions
leave the state untouched.
"""

from dataclasses import replace
from typing import Callable, Generic, TypeVar

from company_console.store.actions import Action, ActionCreator, AsyncThunk

S = TypeVar("S")
Reducer = Callable[[S, Action], S]


def _action_type(matcher: "str | ActionCreator") -> str:
    return matcher.type if isinstance(matcher, ActionCreator) else matcher


class Slice(Generic[S]):
    """
    A feature area of the store.

    Attributes:
        name: Key of the slice in the store state.
        initial: Factory for the slice's initial state.
    """

    def __init__(self, name: str, initial: Callable[[], S]) -> None:
        self.name = name
        self.initial = initial
        self._reducers: dict[str, Reducer] = {}

    def on(self, *matchers: "str | ActionCreator") -> Callable[[Reducer], Reducer]:
        """Register the decorated reducer for the given action types."""

        def register(reducer: Reducer) -> Reducer:
            for matcher in matchers:
                self._reducers[_action_type(matcher)] = reducer
            return reducer

        return register

    def track(
        self,
        *thunks: AsyncThunk,
        loading: str = "loading",
        error: str = "error",
    ) -> None:
        """
        Register the three-phase status reducers for thunks.

        pending sets the loading field and clears the error field;
        fulfilled clears loading; rejected clears loading and records the
        message. Register a fulfilled reducer with on() afterwards to also
        merge the payload.
        """
        for thunk in thunks:

            def pending(state: S, action: Action) -> S:
                return replace(state, **{loading: True, error: None})

            def fulfilled(state: S, action: Action) -> S:
                return replace(state, **{loading: False})

            def rejected(state: S, action: Action, thunk: AsyncThunk = thunk) -> S:
                return replace(state, **{loading: False, error: action.error or thunk.error})

            self._reducers[thunk.pending.type] = pending
            self._reducers[thunk.fulfilled.type] = fulfilled
            self._reducers[thunk.rejected.type] = rejected

    def reduce(self, state: S, action: Action) -> S:
        """Apply the reducer registered for the action, if any."""
        reducer = self._reducers.get(action.type)
        if reducer is None:
            return state
        return reducer(state, action)

    def handles(self, action_type: str) -> bool:
        return action_type in self._reducers

    def __repr__(self) -> str:
        return f"Slice({self.name!r})"
