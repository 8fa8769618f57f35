"""
Campaign workflow tables and feed messages.
"""

import pytest

from app.services.workflow import (
    ADMIN_ACTIONS,
    REVIEW_ACTIONS,
    STATUS_LABELS,
    STEP_CONFIRMATIONS,
    URL_SUBMISSIONS,
    admin_action_message,
    status_update,
)


class TestTables:

    def test_every_status_has_a_label(self):
        statuses = set(ADMIN_ACTIONS.values()) | set(REVIEW_ACTIONS)
        statuses |= {s for s, _ in URL_SUBMISSIONS.values()} | set(URL_SUBMISSIONS)
        statuses |= {s for s, _ in STEP_CONFIRMATIONS.values()} | set(STEP_CONFIRMATIONS)
        assert statuses <= set(STATUS_LABELS)

    def test_review_actions_are_known(self):
        for approve, revise in REVIEW_ACTIONS.values():
            assert approve in ADMIN_ACTIONS
            assert revise in ADMIN_ACTIONS

    def test_revisions_lead_back_to_a_submission_step(self):
        assert URL_SUBMISSIONS[ADMIN_ACTIONS["revise_plan"]] == ("plan_submitted", "plan")
        assert URL_SUBMISSIONS[ADMIN_ACTIONS["revise_draft"]] == ("draft_submitted", "draft")


class TestAdminActionMessage:

    def test_approvals(self):
        assert admin_action_message("approve_plan") == "構成案が承認されました。初稿作成に進みます。"
        assert admin_action_message("approve_draft") == "初稿が承認されました。投稿準備に進みます。"

    def test_revisions(self):
        assert admin_action_message("revise_plan") == "構成案の修正を依頼しました。"
        assert admin_action_message("revise_draft", "色味を調整") == "初稿の修正を依頼しました。フィードバック: 色味を調整"


class TestStatusUpdate:

    @pytest.mark.parametrize("status, expected", [
        ("plan_submitted", ("submission", "Aikoさんから構成案が提出されました", "plan")),
        ("draft_submitted", ("submission", "Aikoさんから初稿が提出されました", "draft")),
        ("plan_revising", ("approval", "Aikoさんの構成案を修正中です", None)),
        ("scheduled", ("status_change", "Aikoさんのコンテンツが投稿されました！", "content")),
        ("completed", ("status_change", "Aikoさんのプロモーションが完了しました", None)),
        ("payment_processing", ("status_change", "Aikoさんのステータスが「送金手続き中」に更新されました", "content")),
        ("contract_pending", ("status_change", "Aikoさんのステータスが「契約書待ち」に更新されました", None)),
    ])
    def test_messages(self, status, expected):
        assert status_update(status, "Aiko") == expected

    def test_unknown_status_uses_raw_value(self):
        assert status_update("on_hold", None)[1] == "Unknownさんのステータスが「on_hold」に更新されました"
