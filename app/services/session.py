# app/services/session.py
#
# Session Resolver
# Reads the persisted user record (the auth cookie) and classifies it as
# "no session" or "session with a role". Also owns the cookie encoding so the
# login routes and the resolver agree on one format.

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    INFLUENCER = "influencer"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Map a stored role string to a Role; anything unknown is OTHER."""
        if value == cls.ADMIN.value:
            return cls.ADMIN
        if value == cls.INFLUENCER.value:
            return cls.INFLUENCER
        return cls.OTHER


class _NoSession:
    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoSession"


# Singleton result for "nobody is signed in"
NoSession = _NoSession()


@dataclass(frozen=True)
class Session:
    role: Role
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def authenticated(self) -> bool:
        return True


SessionResult = Union[Session, _NoSession]


# ---- Cookie codec ----

def encode_record(user: Dict[str, Any]) -> str:
    """
    Serialize a user record for the auth cookie.

    JSON, then percent-encoded so quotes and commas survive the Cookie header.
    """
    return quote(json.dumps(user, ensure_ascii=False, separators=(",", ":")), safe="")


def decode_record(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Inverse of encode_record. Returns None for anything that is not a JSON object.
    """
    if not raw:
        return None
    try:
        data = json.loads(unquote(raw))
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data


# ---- Resolution ----

def has_stored_record(raw: Optional[str]) -> bool:
    """
    True when *any* record is persisted, whatever its shape.

    The home page uses this optimistic check; /dashboard re-validates through
    resolve_session.
    """
    return bool(raw and raw.strip())


def resolve_session(raw: Optional[str]) -> SessionResult:
    """
    Classify a persisted record.

    Returns NoSession when the record is absent or malformed; never raises.
    """
    try:
        user = decode_record(raw)
    except Exception:
        logger.warning("Could not read stored session record", exc_info=True)
        return NoSession

    if user is None:
        return NoSession

    return Session(role=Role.parse(user.get("role")), user=user)
