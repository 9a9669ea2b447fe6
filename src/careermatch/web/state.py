from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Literal

from careermatch.types import AuthSession, SessionEvent

Step = Literal["landing", "auth", "profile", "dashboard"]

_AUTHENTICATED_STEPS = {"profile", "dashboard"}


@dataclass(frozen=True, slots=True)
class ViewState:
    step: Step = "landing"
    session: AuthSession | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None


def fold_session_event(state: ViewState, event: SessionEvent) -> ViewState:
    if event.kind == "SIGNED_OUT":
        return ViewState(step="landing", session=None)

    if event.kind == "SIGNED_IN":
        step = "profile" if state.step in {"landing", "auth"} else state.step
        return replace(state, step=step, session=event.session)

    # TOKEN_REFRESHED keeps the user where they are.
    return replace(state, session=event.session or state.session)


def navigate(state: ViewState, step: Step) -> ViewState:
    if step in _AUTHENTICATED_STEPS and not state.is_authenticated:
        return replace(state, step="auth")
    return replace(state, step=step)


class SessionTracker:
    """Keeps a ``ViewState`` in sync with a gateway's session events."""

    def __init__(self, gateway, initial: ViewState | None = None):
        self.state = initial or ViewState()
        self._unsubscribe: Callable[[], None] = gateway.on_session_change(self._apply)

    def _apply(self, event: SessionEvent) -> None:
        self.state = fold_session_event(self.state, event)

    def close(self) -> None:
        self._unsubscribe()
