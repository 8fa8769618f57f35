"""
Spreadsheet import (data-migration/script.py).
"""

import importlib.util
from pathlib import Path

import pytest

from models import Campaign, User

SCRIPT = Path(__file__).resolve().parent.parent / "data-migration" / "script.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("sheet_import", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestImport:

    def test_users(self, script, db_session, tmp_path):
        path = tmp_path / "users.csv"
        path.write_text(
            "ID,Name,Email,Password\n"
            "inf-1,Aiko,aiko@example.com,pw-1\n"
            ",,,\n"
            "inf-2,,ken@example.com,pw-2\n",
            encoding="utf-8",
        )

        assert script.import_users(db_session, path) == 1
        db_session.commit()

        user = db_session.get(User, "inf-1")
        assert user.email == "aiko@example.com"
        assert user.platform is None

    def test_campaigns_are_upserted(self, script, db_session, tmp_path):
        path = tmp_path / "campaigns.csv"
        path.write_text(
            "id_campaign,id_influencer,title,contracted_price,requirements\n"
            'c1,inf-1,Spring Launch,"¥120,000","Mention the app, Show the lesson"\n',
            encoding="utf-8",
        )

        script.import_campaigns(db_session, path)
        db_session.commit()
        script.import_campaigns(db_session, path)
        db_session.commit()

        campaigns = db_session.query(Campaign).all()
        assert len(campaigns) == 1
        assert campaigns[0].contracted_price == 120000.0
        assert campaigns[0].currency == "JPY"
        assert campaigns[0].requirements == "Mention the app\nShow the lesson"

    def test_missing_columns(self, script, db_session, tmp_path):
        path = tmp_path / "campaigns.csv"
        path.write_text("id_campaign,title\nc1,Spring\n", encoding="utf-8")

        with pytest.raises(ValueError, match="influencer_id"):
            script.import_campaigns(db_session, path)

    def test_campaign_submission_links(self, script, db_session, tmp_path):
        path = tmp_path / "campaigns.csv"
        path.write_text(
            "id_campaign,id_influencer,title,status,url_plan,message_dashboard\n"
            "c1,inf-1,Spring Launch,plan_revising,https://docs.example.com/plan,冒頭を短く\n",
            encoding="utf-8",
        )

        script.import_campaigns(db_session, path)
        db_session.commit()

        campaign = db_session.get(Campaign, "c1")
        assert campaign.status == "plan_revising"
        assert campaign.url_plan == "https://docs.example.com/plan"
        assert campaign.url_draft is None
        assert campaign.message_dashboard == "冒頭を短く"
