# routes_auth.py
"""
Login / logout: the login page, the JSON auth API, and the session cookie.
"""

import hmac
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from app import config
from app.deps import get_data_service, read_json_object, templates, text_field
from app.services.data_service import DataService
from app.services.session import encode_record

logger = logging.getLogger(__name__)

router = APIRouter()

LOGIN_FAILED_MESSAGE = "IDまたはパスワードが正しくありません。"
LOGIN_ERROR_MESSAGE = "エラーが発生しました。もう一度お試しください。"


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def _builtin_admin(login_id: str, password: str) -> Optional[Dict[str, Any]]:
    if not (config.ADMIN_LOGIN_ID and config.ADMIN_PASSWORD):
        return None
    if login_id != config.ADMIN_LOGIN_ID:
        return None
    if not hmac.compare_digest(password.encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8")):
        return None
    return {
        "id": "admin",
        "name": "スピークチーム",
        "email": "admin@usespeak.com",
        "role": "admin",
    }


def authenticate(data_service: DataService, login_id: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Built-in team account first, then the stored users.

    Data service errors propagate to the caller.
    """
    user = _builtin_admin(login_id, password)
    if user is not None:
        logger.info("Built-in admin signed in")
        return user

    user = data_service.authenticate_user(login_id, password)
    if user is not None:
        logger.info("User %s signed in as %s", user["id"], user["role"])
    else:
        logger.info("Invalid credentials for ID %s", login_id)
    return user


def set_session_cookie(response: Response, user: Dict[str, Any]) -> None:
    response.set_cookie(
        config.AUTH_COOKIE_NAME,
        encode_record(user),
        max_age=config.AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=config.AUTH_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(config.AUTH_COOKIE_NAME)


# -------------------------------------------------------------------
# Login page
# -------------------------------------------------------------------

@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None, "login_id": ""})


@router.post("/login", response_class=HTMLResponse)
def login_submit(
    request: Request,
    login_id: str = Form("", alias="id"),
    password: str = Form(""),
    data_service: DataService = Depends(get_data_service),
):
    """
    Form login. On success: set the cookie and go to /dashboard.
    """
    login_id = login_id.strip()

    user = None
    error = LOGIN_FAILED_MESSAGE
    if login_id and password:
        try:
            user = authenticate(data_service, login_id, password)
        except Exception:
            logger.exception("Login failed for ID %s", login_id)
            error = LOGIN_ERROR_MESSAGE

    if user is None:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": error, "login_id": login_id},
            status_code=401,
        )

    response = RedirectResponse(url="/dashboard", status_code=303)
    set_session_cookie(response, user)
    return response


@router.get("/logout")
def logout_page():
    response = RedirectResponse(url="/login", status_code=302)
    clear_session_cookie(response)
    return response


# -------------------------------------------------------------------
# JSON auth API
# -------------------------------------------------------------------

@router.post("/api/auth/login")
async def api_login(request: Request, data_service: DataService = Depends(get_data_service)):
    """
    Body: {"id": "...", "password": "..."}. Non-string values are compared as text.
    """
    try:
        payload = await read_json_object(request)
        login_id = text_field(payload, "id")
        password = text_field(payload, "password")
        if not login_id or not password:
            return JSONResponse({"error": "ID and password are required"}, status_code=400)

        user = authenticate(data_service, login_id, password)
    except Exception:
        logger.exception("Authentication API error")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    if user is None:
        return JSONResponse({"error": "Invalid credentials"}, status_code=401)

    response = JSONResponse(user)
    set_session_cookie(response, user)
    return response


@router.post("/api/auth/logout")
def api_logout():
    response = JSONResponse({"message": "Logged out"})
    clear_session_cookie(response)
    return response
