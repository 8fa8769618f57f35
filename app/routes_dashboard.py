# app/routes_dashboard.py

from typing import List

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.deps import get_auth_context, get_data_service, guard_page, render_loading, templates
from app.services.data_service import DataService, is_safe_link
from app.services.redirects import AuthContext, Page
from app.services.workflow import (
    ADMIN_ACTIONS,
    REVIEW_ACTIONS,
    STEP_CONFIRMATIONS,
    URL_SUBMISSIONS,
)

router = APIRouter()

# ?notice= values understood by the dashboards
NOTICES = {
    "updated": "ステータスを更新しました。",
    "invalid_url": "http(s):// で始まるURLを入力してください。",
    "invalid_step": "このキャンペーンは現在更新できません。",
    "invalid_action": "この操作は実行できません。",
}


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(request: Request, auth: AuthContext = Depends(get_auth_context)):
    """
    Generic landing page: forwards admins and influencers to their dashboards.

    Users with any other role stay here and keep seeing the loading view.
    """
    response = guard_page(request, Page.DASHBOARD, auth)
    return response or render_loading(request, message="ダッシュボードを読み込み中...")


@router.get("/dashboard/admin", response_class=HTMLResponse)
def admin_dashboard_page(
    request: Request,
    search: str | None = Query(None),
    status: List[str] = Query(default=[]),
    notice: str | None = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    data_service: DataService = Depends(get_data_service),
):
    response = guard_page(request, Page.ADMIN, auth)
    if response is not None:
        return response

    all_campaigns = data_service.get_campaigns()
    users = data_service.get_users()
    updates = data_service.get_updates()

    # Statuses for the filter dropdown, in first-seen order
    all_statuses: List[str] = []
    for c in all_campaigns:
        if c["status"] and c["status"] not in all_statuses:
            all_statuses.append(c["status"])

    # Submissions waiting for the team, regardless of filters
    reviews = [c for c in all_campaigns if c["status"] in REVIEW_ACTIONS]

    campaigns = all_campaigns

    # Search (title / influencer name)
    if search:
        needle = search.strip().lower()
        campaigns = [
            c for c in campaigns
            if needle in (c["title"] or "").lower() or needle in (c["influencerName"] or "").lower()
        ]

    if status:
        campaigns = [c for c in campaigns if c["status"] in status]

    contracted_total = sum(c["contractedPrice"] or 0.0 for c in campaigns)

    return templates.TemplateResponse(
        request,
        "dashboard_admin.html",
        {
            "user": auth.state.user,
            "campaigns": campaigns,
            "campaign_count": len(campaigns),
            "user_count": len(users),
            "contracted_total": float(contracted_total),
            "search": search or "",
            "all_statuses": all_statuses,
            "selected_statuses": status,
            "reviews": reviews,
            "review_actions": REVIEW_ACTIONS,
            "updates": updates,
            "notice": NOTICES.get(notice or ""),
        },
    )


@router.post("/dashboard/admin/campaigns/{campaign_id}/action")
def admin_campaign_action(
    request: Request,
    campaign_id: str,
    action: str = Form(""),
    influencer_id: str = Form(""),
    feedback: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    data_service: DataService = Depends(get_data_service),
):
    """
    Approve or send back a plan / draft, then return to the admin dashboard.
    """
    response = guard_page(request, Page.ADMIN, auth)
    if response is not None:
        return response

    new_status = ADMIN_ACTIONS.get(action)
    if new_status is None or not influencer_id:
        return RedirectResponse(url="/dashboard/admin?notice=invalid_action", status_code=303)

    feedback = feedback.strip() if action.startswith("revise") else ""
    campaign = data_service.update_campaign_status(
        campaign_id, influencer_id, new_status, feedback=feedback or None
    )

    notice = "updated" if campaign is not None else "invalid_action"
    return RedirectResponse(url=f"/dashboard/admin?notice={notice}", status_code=303)


@router.get("/dashboard/influencer", response_class=HTMLResponse)
def influencer_dashboard_page(
    request: Request,
    notice: str | None = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    data_service: DataService = Depends(get_data_service),
):
    response = guard_page(request, Page.INFLUENCER, auth)
    if response is not None:
        return response

    user = auth.state.user
    campaigns = data_service.get_user_campaigns(user.get("id") or "")

    return templates.TemplateResponse(
        request,
        "dashboard_influencer.html",
        {
            "user": user,
            "campaigns": campaigns,
            "url_submissions": URL_SUBMISSIONS,
            "step_confirmations": STEP_CONFIRMATIONS,
            "notice": NOTICES.get(notice or ""),
        },
    )


@router.post("/dashboard/influencer/campaigns/{campaign_id}/step")
def influencer_campaign_step(
    request: Request,
    campaign_id: str,
    submitted_url: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    data_service: DataService = Depends(get_data_service),
):
    """
    Advance one of the signed-in influencer's campaigns to its next step.

    Steps from a creating / revising / scheduling status need a link; the
    remaining ones are plain confirmations.
    """
    response = guard_page(request, Page.INFLUENCER, auth)
    if response is not None:
        return response

    influencer_id = auth.state.user.get("id") or ""
    campaign = next(
        (c for c in data_service.get_user_campaigns(influencer_id) if c["id"] == campaign_id),
        None,
    )
    if campaign is None:
        return RedirectResponse(url="/dashboard/influencer?notice=invalid_step", status_code=303)

    status = campaign["status"]
    if status in URL_SUBMISSIONS:
        new_status, url_type = URL_SUBMISSIONS[status]
        submitted_url = submitted_url.strip()
        if not is_safe_link(submitted_url):
            return RedirectResponse(url="/dashboard/influencer?notice=invalid_url", status_code=303)
        data_service.update_campaign_status(
            campaign_id, influencer_id, new_status, submitted_url=submitted_url, url_type=url_type
        )
    elif status in STEP_CONFIRMATIONS:
        new_status = STEP_CONFIRMATIONS[status][0]
        data_service.update_campaign_status(campaign_id, influencer_id, new_status)
    else:
        return RedirectResponse(url="/dashboard/influencer?notice=invalid_step", status_code=303)

    return RedirectResponse(url="/dashboard/influencer?notice=updated", status_code=303)
