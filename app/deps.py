# app/deps.py
# Role: Shared application-level dependencies and globals.
#       Provides the Jinja2 templates loader, the standard SQLAlchemy session
#       dependency, the data service dependency, and the per-request auth
#       context read from the session cookie.

"""
Shared dependencies and globals for the influencer dashboard.
"""

import os
from typing import Any, Dict, Generator, Optional

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.config import APP_TITLE, AUTH_COOKIE_NAME, THEME_COOKIE_NAME
from app.services.data_service import DataService
from app.services.redirects import PENDING, AuthContext, Page, RedirectRouter
from app.services.workflow import STATUS_LABELS
from db import SessionLocal

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

APP_DIR = os.path.dirname(os.path.abspath(__file__))

# Jinja2 templates loader (used by all HTML-rendering routes)
templates = Jinja2Templates(directory=os.path.join(APP_DIR, "templates"))

templates.env.globals["app_title"] = APP_TITLE

THEMES = ("light", "dark", "system")
DEFAULT_THEME = "dark"

ROLE_LABELS = {"admin": "管理者", "influencer": "インフルエンサー"}


def current_theme(request: Request) -> str:
    theme = request.cookies.get(THEME_COOKIE_NAME)
    return theme if theme in THEMES else DEFAULT_THEME


templates.env.globals["current_theme"] = current_theme
templates.env.globals["role_label"] = lambda role: ROLE_LABELS.get(role, role or "")
templates.env.globals["status_label"] = lambda status: STATUS_LABELS.get(status, status or "")

# -------------------------------------------------------------------
# Database & data service
# -------------------------------------------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session and ensures it is closed.

    Typical usage in routes:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_data_service(db: Session = Depends(get_db)) -> DataService:
    """
    The "dataService" collaborator. Tests replace it via app.dependency_overrides.
    """
    return DataService(db)


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as JSON. A body that is valid JSON but not an
    object reads as {}; invalid JSON raises, so callers parse inside their try.
    """
    payload = await request.json()
    return payload if isinstance(payload, dict) else {}


def text_field(payload: Dict[str, Any], name: str) -> Optional[str]:
    value = payload.get(name)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)

# -------------------------------------------------------------------
# Auth state
# -------------------------------------------------------------------

def get_auth_context(request: Request) -> AuthContext:
    """
    Build the auth context for this request from the session cookie.

    The cookie is already in hand, so the context is loaded straight away and
    pages never see the pending state here. The context is still built as a
    publisher so RedirectRouter observes it the same way it would a context
    whose state arrives later.
    """
    context = AuthContext()
    context.load(request.cookies.get(AUTH_COOKIE_NAME))
    return context


def guard_page(request: Request, page: Page, auth: AuthContext) -> Optional[Response]:
    """
    Apply the redirect policy for `page`.

    Returns a response when the page must not render its own content
    (redirect or loading view), or None when the page should render.
    """
    targets = []
    router = RedirectRouter(page, targets.append, location=request.url.path).attach(auth)
    router.detach()

    if targets:
        return RedirectResponse(url=targets[-1], status_code=302)

    if router.decision.kind == PENDING:
        return render_loading(request, refresh=True)

    return None


def render_loading(request: Request, message: str = "読み込み中...", refresh: bool = False):
    """Indeterminate loading view shown while a redirect decision is outstanding."""
    return templates.TemplateResponse(
        request,
        "loading.html",
        {"message": message, "refresh": refresh},
    )
