# app/services/data_service.py
"""
Data service backing the JSON API and the dashboards.

Reads users and campaigns through SQLAlchemy and shapes them into the JSON
records the front end expects (camelCase keys, derived roles, no passwords).

Public API:
    DataService(db).get_users()                 -> list[dict]
    DataService(db).get_campaigns()             -> list[dict]
    DataService(db).get_user_campaigns(user_id) -> list[dict]
    DataService(db).authenticate_user(id, pw)   -> dict | None
    DataService(db).update_campaign_status(...) -> dict | None
    DataService(db).create_update(...)          -> dict
    DataService(db).get_updates(limit)          -> list[dict]
"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from sqlalchemy.orm import Session

from app.config import ADMIN_EMAIL_DOMAIN
from app.services.workflow import REVIEW_ACTIONS, status_update
from models import Campaign, Update, User

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "admin"

LINK_SCHEMES = ("http", "https")

# url type -> Campaign column holding the submitted link
URL_COLUMNS = {
    "plan": "url_plan",
    "draft": "url_draft",
    "content": "url_content",
}


def role_for_email(email: Optional[str]) -> str:
    if email and ADMIN_EMAIL_DOMAIN and ADMIN_EMAIL_DOMAIN in email:
        return "admin"
    return "influencer"


def role_for(user_id: Optional[str], email: Optional[str]) -> str:
    # The team account is admin whatever its e-mail says
    if user_id == ADMIN_USER_ID:
        return "admin"
    return role_for_email(email)


def _split_lines(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [line.strip() for line in value.splitlines() if line.strip()]


def is_safe_link(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in LINK_SCHEMES and bool(parts.netloc)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": role_for(user.id, user.email),
        "platform": user.platform,
        "channelUrl": user.channel_url,
        "statusDashboard": user.status_dashboard,
    }


def campaign_to_dict(campaign: Campaign) -> Dict[str, Any]:
    created = campaign.created_at
    updated = campaign.updated_at or created
    return {
        "id": campaign.id,
        "title": campaign.title,
        "influencerId": campaign.influencer_id,
        "influencerName": campaign.influencer_name or campaign.title,
        "platform": campaign.platform,
        "status": campaign.status,
        "contractedPrice": campaign.contracted_price,
        "currency": campaign.currency or "JPY",
        "schedules": {
            "meetingDate": campaign.meeting_date,
            "planSubmissionDate": campaign.plan_submission_date,
            "draftSubmissionDate": campaign.draft_submission_date,
            "liveDate": campaign.live_date,
        },
        "requirements": _split_lines(campaign.requirements),
        # Only web links; anything else (javascript:, data:, relative) is dropped
        "referenceLinks": [
            {"title": "Reference", "url": url}
            for url in _split_lines(campaign.reference_links)
            if is_safe_link(url)
        ],
        "submissions": {
            "plan": campaign.url_plan if is_safe_link(campaign.url_plan) else None,
            "draft": campaign.url_draft if is_safe_link(campaign.url_draft) else None,
            "content": campaign.url_content if is_safe_link(campaign.url_content) else None,
        },
        "feedback": campaign.message_dashboard,
        "notes": campaign.notes,
        "createdAt": _isoformat(created),
        "updatedAt": _isoformat(updated),
    }


def update_to_dict(update: Update) -> Dict[str, Any]:
    review = REVIEW_ACTIONS.get(update.current_status or "")
    return {
        "id": str(update.id),
        "campaignId": update.campaign_id,
        "influencerId": update.influencer_id,
        "influencerName": update.influencer_name,
        "type": update.type,
        "message": update.message,
        "currentStatus": update.current_status,
        "submissionUrl": update.submission_url if is_safe_link(update.submission_url) else None,
        "submissionType": update.submission_type,
        "requiresAdminAction": review is not None,
        "actionType": review[0] if review else None,
        "createdAt": _isoformat(update.created_at),
    }


class DataService:
    """
    Thin query layer over one database session.

    Errors from the database propagate; the API routes decide how to report them.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_users(self) -> List[Dict[str, Any]]:
        users = self.db.query(User).order_by(User.id).all()
        logger.debug("Loaded %d users", len(users))
        return [user_to_dict(u) for u in users]

    def get_campaigns(self) -> List[Dict[str, Any]]:
        campaigns = (
            self.db.query(Campaign)
            .order_by(Campaign.created_at.desc(), Campaign.id)
            .all()
        )
        logger.debug("Loaded %d campaigns", len(campaigns))
        return [campaign_to_dict(c) for c in campaigns]

    def get_user_campaigns(self, user_id: str) -> List[Dict[str, Any]]:
        campaigns = (
            self.db.query(Campaign)
            .filter(Campaign.influencer_id == user_id)
            .order_by(Campaign.created_at.desc(), Campaign.id)
            .all()
        )
        logger.debug("Loaded %d campaigns for user %s", len(campaigns), user_id)
        return [campaign_to_dict(c) for c in campaigns]

    def authenticate_user(self, user_id: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Return the public user record when id and password match, else None.
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None or user.password is None:
            return None
        if not hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8")):
            return None
        return user_to_dict(user)

    # ---------------------------------------------------------------
    # Workflow
    # ---------------------------------------------------------------

    def update_campaign_status(
        self,
        campaign_id: str,
        influencer_id: str,
        new_status: str,
        submitted_url: Optional[str] = None,
        url_type: Optional[str] = None,
        feedback: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Move one campaign to `new_status` and append the matching feed entry.

        The campaign must belong to `influencer_id`. A submitted link is stored
        in the column for `url_type`; revision feedback replaces the previous one.
        Returns the updated campaign record, or None when no such campaign exists.
        """
        campaign = (
            self.db.query(Campaign)
            .filter(Campaign.id == campaign_id, Campaign.influencer_id == influencer_id)
            .first()
        )
        if campaign is None:
            logger.info("Campaign %s not found for influencer %s", campaign_id, influencer_id)
            return None

        if submitted_url and url_type:
            column = URL_COLUMNS.get(url_type)
            if column is None:
                raise ValueError(f"Unknown url type: {url_type}")
            setattr(campaign, column, submitted_url.strip())

        if feedback:
            campaign.message_dashboard = feedback

        now = datetime.utcnow()
        previous = campaign.status
        campaign.status = new_status
        campaign.date_status_updated = now
        campaign.updated_at = now

        kind, message, submission_type = status_update(new_status, campaign.influencer_name)
        submission_url = getattr(campaign, URL_COLUMNS[submission_type]) if submission_type else None
        self.db.add(
            Update(
                campaign_id=campaign.id,
                influencer_id=campaign.influencer_id,
                influencer_name=campaign.influencer_name,
                type=kind,
                message=message,
                current_status=new_status,
                submission_url=submission_url,
                submission_type=submission_type,
                created_at=now,
            )
        )

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(campaign)
        logger.info("Campaign %s: %s -> %s", campaign.id, previous, new_status)
        return campaign_to_dict(campaign)

    def create_update(
        self,
        campaign_id: str,
        influencer_id: str,
        influencer_name: str,
        update_type: str,
        message: str,
    ) -> Dict[str, Any]:
        """
        Append a free-form entry to the activity feed.
        """
        campaign = self.db.query(Campaign).filter(Campaign.id == campaign_id).first()
        update = Update(
            campaign_id=campaign_id,
            influencer_id=influencer_id,
            influencer_name=influencer_name,
            type=update_type,
            message=message,
            current_status=campaign.status if campaign is not None else None,
            created_at=datetime.utcnow(),
        )
        self.db.add(update)

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(update)
        return update_to_dict(update)

    def get_updates(self, limit: int = 10) -> List[Dict[str, Any]]:
        updates = (
            self.db.query(Update)
            .order_by(Update.created_at.desc(), Update.id.desc())
            .limit(limit)
            .all()
        )
        logger.debug("Loaded %d updates", len(updates))
        return [update_to_dict(u) for u in updates]
