# models.py
# Role: SQLAlchemy ORM models for the influencer dashboard domain.
#       Defines the User (influencer / team member), Campaign and Update models,
#       mirroring the columns of the campaign management spreadsheet.

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from db import Base


class User(Base):
    """
    A person who can sign in to the dashboard.

    The role is not stored: the data service derives it from the e-mail domain
    (or the reserved "admin" id), so moving someone to the team address is enough
    to make them admin.
    """

    __tablename__ = "users"

    # Login ID (the campaign ID handed out to influencers)
    id = Column(String, primary_key=True, index=True)

    name = Column(String, nullable=False)

    email = Column(String, nullable=True)

    # Plain value as kept in the source spreadsheet; never returned by the API
    password = Column(String, nullable=True)

    # e.g. "youtube_long", "tiktok"
    platform = Column(String, nullable=True)

    channel_url = Column(String, nullable=True)

    status_dashboard = Column(String, nullable=True)


class Campaign(Base):
    """
    One sponsored content campaign with a single influencer.
    """

    __tablename__ = "campaigns"

    id = Column(String, primary_key=True, index=True)

    # Owner of the campaign (User.id); not a FK because imports arrive unordered
    influencer_id = Column(String, nullable=False, index=True)

    influencer_name = Column(String, nullable=True)

    title = Column(String, nullable=False)

    platform = Column(String, nullable=True)

    # Workflow status, e.g. "meeting_scheduled", "plan_submitted", "completed"
    status = Column(String, nullable=False, default="meeting_scheduled")

    contracted_price = Column(Float, nullable=True)

    currency = Column(String(3), nullable=False, default="JPY")

    # Schedule dates, stored as the ISO strings found in the sheet
    meeting_date = Column(String, nullable=True)
    plan_submission_date = Column(String, nullable=True)
    draft_submission_date = Column(String, nullable=True)
    live_date = Column(String, nullable=True)

    # Newline-separated lists
    requirements = Column(Text, nullable=True)
    reference_links = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)

    # Links submitted by the influencer at each step
    url_plan = Column(String, nullable=True)
    url_draft = Column(String, nullable=True)
    url_content = Column(String, nullable=True)

    # Latest revision feedback from the team
    message_dashboard = Column(Text, nullable=True)

    date_status_updated = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class Update(Base):
    """
    One entry of the activity feed shown to the team (status changes, submissions).
    """

    __tablename__ = "updates"

    id = Column(Integer, primary_key=True, index=True)

    campaign_id = Column(String, nullable=False, index=True)

    influencer_id = Column(String, nullable=False)

    influencer_name = Column(String, nullable=True)

    # "submission" | "status_change" | "approval" | "message"
    type = Column(String, nullable=False)

    message = Column(Text, nullable=False)

    # Campaign status right after the change
    current_status = Column(String, nullable=True)

    submission_url = Column(String, nullable=True)

    # "plan" | "draft" | "content"
    submission_type = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
