# app/services/workflow.py
#
# Campaign Workflow
# Status labels, the team's approve/revise actions, the influencer's step
# submissions, and the feed message written for each status change.

from typing import Dict, Optional, Tuple

# Japanese labels shown in the dashboards and feed
STATUS_LABELS: Dict[str, str] = {
    "not_started": "未開始",
    "meeting_scheduling": "打ち合わせ予約中",
    "meeting_scheduled": "打ち合わせ予定",
    "contract_pending": "契約書待ち",
    "plan_creating": "構成案作成中",
    "plan_submitted": "構成案確認中",
    "plan_revising": "構成案修正中",
    "draft_creating": "初稿作成中",
    "draft_submitted": "初稿提出済み",
    "draft_revising": "初稿修正中",
    "scheduling": "投稿準備中",
    "scheduled": "投稿済み",
    "payment_processing": "送金手続き中",
    "completed": "完了",
    "cancelled": "キャンセル",
}

# ---- Team actions ----

ADMIN_ACTIONS: Dict[str, str] = {
    "approve_plan": "draft_creating",
    "revise_plan": "plan_revising",
    "approve_draft": "scheduling",
    "revise_draft": "draft_revising",
}

# Status waiting for a team decision -> (approve action, revise action)
REVIEW_ACTIONS: Dict[str, Tuple[str, str]] = {
    "plan_submitted": ("approve_plan", "revise_plan"),
    "draft_submitted": ("approve_draft", "revise_draft"),
}


def admin_action_message(action: str, feedback: Optional[str] = None) -> str:
    if action == "approve_plan":
        return "構成案が承認されました。初稿作成に進みます。"
    if action == "approve_draft":
        return "初稿が承認されました。投稿準備に進みます。"

    base = "構成案の修正を依頼しました。" if action == "revise_plan" else "初稿の修正を依頼しました。"
    if feedback:
        return f"{base}フィードバック: {feedback}"
    return base


# ---- Influencer steps ----

# Current status -> (next status, url type) for steps that submit a link
URL_SUBMISSIONS: Dict[str, Tuple[str, str]] = {
    "plan_creating": ("plan_submitted", "plan"),
    "plan_revising": ("plan_submitted", "plan"),
    "draft_creating": ("draft_submitted", "draft"),
    "draft_revising": ("draft_submitted", "draft"),
    "scheduling": ("scheduled", "content"),
}

# Current status -> (next status, button label) for steps without a link
STEP_CONFIRMATIONS: Dict[str, Tuple[str, str]] = {
    "scheduled": ("payment_processing", "送金手続きに進む"),
    "payment_processing": ("completed", "着金を確認しました"),
}


# ---- Feed messages ----

def status_update(status: str, influencer_name: Optional[str]) -> Tuple[str, str, Optional[str]]:
    """
    Feed entry for a campaign that just moved to `status`.

    Returns (type, message, submission type).
    """
    name = influencer_name or "Unknown"

    if status == "plan_submitted":
        return "submission", f"{name}さんから構成案が提出されました", "plan"
    if status == "plan_revising":
        return "approval", f"{name}さんの構成案を修正中です", None
    if status == "draft_submitted":
        return "submission", f"{name}さんから初稿が提出されました", "draft"
    if status == "draft_revising":
        return "approval", f"{name}さんの初稿を修正中です", None
    if status == "scheduling":
        return "status_change", f"{name}さんのコンテンツ投稿準備中です", None
    if status == "scheduled":
        return "status_change", f"{name}さんのコンテンツが投稿されました！", "content"
    if status == "completed":
        return "status_change", f"{name}さんのプロモーションが完了しました", None
    if status == "cancelled":
        return "status_change", f"{name}さんのプロモーションがキャンセルされました", None

    label = STATUS_LABELS.get(status, status)
    submission_type = "content" if status == "payment_processing" else None
    return "status_change", f"{name}さんのステータスが「{label}」に更新されました", submission_type
