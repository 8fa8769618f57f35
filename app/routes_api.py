# routes_api.py
"""
JSON data endpoints.

Each one is a straight passthrough to the data service: the result is returned
as-is with 200, any failure becomes a logged 500 with a fixed error message.
Request bodies are parsed inside the same try, so malformed JSON is reported
like any other failure. No retries and no auth checks at this layer.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.deps import get_data_service, read_json_object, text_field
from app.services.data_service import DataService
from app.services.workflow import ADMIN_ACTIONS, admin_action_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _missing(*values: Optional[str]) -> bool:
    return any(not v for v in values)


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


# -------------------------------------------------------------------
# Users / campaigns
# -------------------------------------------------------------------

@router.get("/users")
def list_users(data_service: DataService = Depends(get_data_service)):
    try:
        users = data_service.get_users()
    except Exception:
        logger.exception("Users API error")
        return JSONResponse({"error": "Failed to fetch users"}, status_code=500)
    return JSONResponse(users)


@router.get("/campaigns")
def list_campaigns(data_service: DataService = Depends(get_data_service)):
    try:
        campaigns = data_service.get_campaigns()
    except Exception:
        logger.exception("Campaigns API error")
        return JSONResponse({"error": "Failed to fetch campaigns"}, status_code=500)
    return JSONResponse(campaigns)


@router.post("/campaigns")
async def list_user_campaigns(request: Request, data_service: DataService = Depends(get_data_service)):
    """
    Campaigns of one influencer. Body: {"userId": "..."}.
    """
    try:
        payload = await read_json_object(request)
        campaigns = data_service.get_user_campaigns(text_field(payload, "userId") or "")
    except Exception:
        logger.exception("User campaigns API error")
        return JSONResponse({"error": "Failed to fetch user campaigns"}, status_code=500)
    return JSONResponse(campaigns)


# -------------------------------------------------------------------
# Workflow
# -------------------------------------------------------------------

@router.post("/campaigns/update")
async def update_campaign(request: Request, data_service: DataService = Depends(get_data_service)):
    """
    Influencer step. Body: {campaignId, influencerId, newStatus, submittedUrl?, urlType?}.
    """
    try:
        payload = await read_json_object(request)
        campaign_id = text_field(payload, "campaignId")
        influencer_id = text_field(payload, "influencerId")
        new_status = text_field(payload, "newStatus")
        if _missing(campaign_id, influencer_id, new_status):
            return JSONResponse(
                {"error": "campaignId, influencerId, and newStatus are required"},
                status_code=400,
            )

        campaign = data_service.update_campaign_status(
            campaign_id,
            influencer_id,
            new_status,
            submitted_url=text_field(payload, "submittedUrl"),
            url_type=text_field(payload, "urlType"),
        )
    except Exception:
        logger.exception("Campaign update API error")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    if campaign is None:
        return JSONResponse({"error": "Failed to update campaign"}, status_code=500)

    return JSONResponse({
        "success": True,
        "message": "Campaign updated successfully",
        "updatedAt": _now(),
    })


@router.post("/admin/actions")
async def admin_action(request: Request, data_service: DataService = Depends(get_data_service)):
    """
    Team decision on a submission. Body: {campaignId, influencerId, action, feedbackMessage?}.
    """
    try:
        payload = await read_json_object(request)
        campaign_id = text_field(payload, "campaignId")
        influencer_id = text_field(payload, "influencerId")
        action = text_field(payload, "action")
        if _missing(campaign_id, influencer_id, action):
            return JSONResponse(
                {"error": "campaignId, influencerId, and action are required"},
                status_code=400,
            )

        new_status = ADMIN_ACTIONS.get(action)
        if new_status is None:
            return JSONResponse({"error": "Invalid action type"}, status_code=400)

        # Feedback only travels with revision requests
        feedback = text_field(payload, "feedbackMessage") if action.startswith("revise") else None

        campaign = data_service.update_campaign_status(
            campaign_id, influencer_id, new_status, feedback=feedback
        )
    except Exception:
        logger.exception("Admin action API error")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    if campaign is None:
        return JSONResponse({"error": "Failed to execute admin action"}, status_code=500)

    return JSONResponse({
        "success": True,
        "message": admin_action_message(action, feedback),
        "newStatus": new_status,
        "updatedAt": _now(),
    })


@router.get("/updates")
def list_updates(data_service: DataService = Depends(get_data_service)):
    try:
        updates = data_service.get_updates()
    except Exception:
        logger.exception("Updates API error")
        return JSONResponse({"error": "Failed to fetch updates"}, status_code=500)
    return JSONResponse(updates)


@router.post("/updates")
async def create_update(request: Request, data_service: DataService = Depends(get_data_service)):
    """
    Free-form feed entry. Body: {campaignId, influencerId, influencerName, type, message}.
    """
    try:
        payload = await read_json_object(request)
        fields = [
            text_field(payload, name)
            for name in ("campaignId", "influencerId", "influencerName", "type", "message")
        ]
        if _missing(*fields):
            return JSONResponse(
                {"error": "campaignId, influencerId, influencerName, type, and message are required"},
                status_code=400,
            )

        update = data_service.create_update(*fields)
    except Exception:
        logger.exception("Create update API error")
        return JSONResponse({"error": "Failed to create update"}, status_code=500)

    return JSONResponse({"success": True, "update": update})
