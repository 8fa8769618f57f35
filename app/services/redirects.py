# app/services/redirects.py
#
# Redirect Router
# Decides where a page should send the browser, based only on the page itself
# and the current authentication state. The AuthContext publishes auth changes;
# a RedirectRouter subscribes to it and re-runs the policy on every change.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from app.services.session import (
    NoSession,
    Role,
    Session,
    SessionResult,
    has_stored_record,
    resolve_session,
)


LOGIN = "/login"


class Page(str, Enum):
    HOME = "/"
    DASHBOARD = "/dashboard"
    ADMIN = "/dashboard/admin"
    INFLUENCER = "/dashboard/influencer"


# ---- Auth state ----

@dataclass(frozen=True)
class AuthState:
    """
    Snapshot of what the app knows about the signed-in user.

    initialized=False means the persisted record has not been read yet; that is
    not the same as "nobody is signed in".
    """

    initialized: bool = False
    session: SessionResult = NoSession
    has_record: bool = False

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.session, Session)

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.session.user if isinstance(self.session, Session) else None

    @property
    def role(self) -> Optional[Role]:
        return self.session.role if isinstance(self.session, Session) else None

    @classmethod
    def from_record(cls, raw: Optional[str]) -> "AuthState":
        return cls(
            initialized=True,
            session=resolve_session(raw),
            has_record=has_stored_record(raw),
        )


Listener = Callable[[AuthState], None]


class AuthContext:
    """
    Publisher of AuthState. Listeners are called after every actual change.
    """

    def __init__(self, state: Optional[AuthState] = None):
        self._state = state or AuthState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, state: AuthState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def load(self, raw: Optional[str]) -> None:
        """Initialize from the persisted record (cookie value or None)."""
        self._set(AuthState.from_record(raw))

    def sign_in(self, user: Dict[str, Any]) -> None:
        self._set(
            AuthState(
                initialized=True,
                session=Session(role=Role.parse(user.get("role")), user=user),
                has_record=True,
            )
        )

    def sign_out(self) -> None:
        self._set(AuthState(initialized=True))


# ---- Policy ----

NAVIGATE = "navigate"
STAY = "stay"
PENDING = "pending"


@dataclass(frozen=True)
class Decision:
    kind: str
    destination: Optional[str] = None


STAY_DECISION = Decision(STAY)
PENDING_DECISION = Decision(PENDING)


def go(destination: str) -> Decision:
    return Decision(NAVIGATE, destination)


_ROLE_DASHBOARDS = {
    Role.ADMIN: Page.ADMIN.value,
    Role.INFLUENCER: Page.INFLUENCER.value,
}


def decide(page: Page, state: AuthState) -> Decision:
    """
    Pure redirect policy: (page, auth state) -> navigate / stay / pending.
    """
    if not state.initialized:
        return PENDING_DECISION

    if page is Page.HOME:
        # Optimistic: any stored record counts, its shape is checked on /dashboard
        return go(Page.DASHBOARD.value if state.has_record else LOGIN)

    if not state.is_authenticated:
        return go(LOGIN)

    if page is Page.DASHBOARD:
        target = _ROLE_DASHBOARDS.get(state.role)
        return go(target) if target else STAY_DECISION

    if page is Page.ADMIN and state.role is not Role.ADMIN:
        return go(Page.DASHBOARD.value)

    if page is Page.INFLUENCER and state.role is not Role.INFLUENCER:
        return go(Page.DASHBOARD.value)

    return STAY_DECISION


@dataclass
class RedirectRouter:
    """
    Observer that applies `decide` for one page whenever the auth state changes.

    navigate() is called at most once per distinct target, and never for the
    location the browser is already on.
    """

    page: Page
    navigate: Callable[[str], None]
    location: Optional[str] = None
    decision: Decision = PENDING_DECISION
    _last_target: Optional[str] = field(default=None, repr=False)
    _unsubscribe: Optional[Callable[[], None]] = field(default=None, repr=False)

    def __post_init__(self):
        if self.location is None:
            self.location = self.page.value

    def attach(self, context: AuthContext) -> "RedirectRouter":
        self._unsubscribe = context.subscribe(self.evaluate)
        self.evaluate(context.state)
        return self

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def evaluate(self, state: AuthState) -> Decision:
        decision = decide(self.page, state)
        self.decision = decision

        if decision.kind != NAVIGATE:
            self._last_target = None
            return decision

        target = decision.destination
        if target != self.location and target != self._last_target:
            self._last_target = target
            self.navigate(target)
        return decision
