# routes_root.py
"""
Root / landing endpoints: home redirect and theme switching.
"""

from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from app.config import THEME_COOKIE_NAME
from app.deps import THEMES, current_theme, get_auth_context, guard_page, render_loading
from app.services.redirects import AuthContext, Page

router = APIRouter()


@router.get("/")
def home(request: Request, auth: AuthContext = Depends(get_auth_context)):
    """
    Send signed-in users to /dashboard and everyone else to /login.
    """
    response = guard_page(request, Page.HOME, auth)
    return response or render_loading(request)


@router.post("/theme")
def cycle_theme(request: Request):
    """
    Cycle light -> dark -> system and go back to the page the user was on.
    """
    theme = current_theme(request)
    next_theme = THEMES[(THEMES.index(theme) + 1) % len(THEMES)]

    # Only the path of the referer, never another host
    referer = urlsplit(request.headers.get("referer") or "/")
    back = referer.path if referer.path.startswith("/") and not referer.path.startswith("//") else "/"
    if referer.query:
        back = f"{back}?{referer.query}"

    response = RedirectResponse(url=back, status_code=303)
    response.set_cookie(THEME_COOKIE_NAME, next_theme, max_age=365 * 24 * 60 * 60, samesite="lax")
    return response
