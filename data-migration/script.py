"""
This script loads the campaign management spreadsheet into the dashboard database.

The spreadsheet is exported as two CSV files (one per sheet):
- users.csv      id, name, email, password, platform, channel_url, status_dashboard
- campaigns.csv  id_campaign, id_influencer, influencer_name, title, platform, status,
                 contracted_price, currency, meeting_date, plan_submission_date,
                 draft_submission_date, live_date, requirements, reference_links, notes,
                 url_plan, url_draft, url_content, message_dashboard

Headers are matched case-insensitively. Rows are upserted by id, so the script can be
re-run after every export.
"""


from __future__ import annotations

from pathlib import Path
import pandas as pd

from db import SessionLocal, engine, Base
from models import Campaign, User


SHEETS_DIR = Path("data-migration/sheets")

CAMPAIGN_COLUMN_ALIASES = {
    "id_campaign": "id",
    "id_influencer": "influencer_id",
}


def _none_if_nan(x):
    if pd.isna(x):
        return None
    s = str(x).strip()
    return None if s == "" or s.lower() == "nan" else s


def _float_or_none(x):
    s = _none_if_nan(x)
    if s is None:
        return None
    # "¥120,000" / "120000"
    cleaned = s.replace("¥", "").replace(",", "").replace(" ", "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def _lines(x):
    # Sheet cells hold lists separated by commas or newlines
    s = _none_if_nan(x)
    if s is None:
        return None
    parts = [p.strip() for p in s.replace(",", "\n").splitlines()]
    return "\n".join(p for p in parts if p) or None


def _read_sheet(path: Path, required: set[str], aliases: dict[str, str] | None = None) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str)

    # normalize headers
    df.columns = df.columns.str.strip().str.lower()
    if aliases:
        df = df.rename(columns=aliases)

    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"{path.name}: missing required columns: {sorted(missing)}")

    # drop fully empty rows
    return df.dropna(how="all").copy()


def _column(row, name):
    return getattr(row, name, None)


def import_users(session, path: Path) -> int:
    df = _read_sheet(path, {"id", "name"})

    count = 0
    for row in df.itertuples(index=False):
        user_id = _none_if_nan(_column(row, "id"))
        name = _none_if_nan(_column(row, "name"))
        if user_id is None or name is None:
            continue

        session.merge(
            User(
                id=user_id,
                name=name,
                email=_none_if_nan(_column(row, "email")),
                password=_none_if_nan(_column(row, "password")),
                platform=_none_if_nan(_column(row, "platform")),
                channel_url=_none_if_nan(_column(row, "channel_url")),
                status_dashboard=_none_if_nan(_column(row, "status_dashboard")),
            )
        )
        count += 1

    return count


def import_campaigns(session, path: Path) -> int:
    df = _read_sheet(path, {"id", "influencer_id", "title"}, CAMPAIGN_COLUMN_ALIASES)

    count = 0
    for row in df.itertuples(index=False):
        campaign_id = _none_if_nan(_column(row, "id"))
        influencer_id = _none_if_nan(_column(row, "influencer_id"))
        title = _none_if_nan(_column(row, "title"))
        if campaign_id is None or influencer_id is None or title is None:
            continue

        session.merge(
            Campaign(
                id=campaign_id,
                influencer_id=influencer_id,
                influencer_name=_none_if_nan(_column(row, "influencer_name")),
                title=title,
                platform=_none_if_nan(_column(row, "platform")),
                status=_none_if_nan(_column(row, "status")) or "meeting_scheduled",
                contracted_price=_float_or_none(_column(row, "contracted_price")),
                currency=_none_if_nan(_column(row, "currency")) or "JPY",
                meeting_date=_none_if_nan(_column(row, "meeting_date")),
                plan_submission_date=_none_if_nan(_column(row, "plan_submission_date")),
                draft_submission_date=_none_if_nan(_column(row, "draft_submission_date")),
                live_date=_none_if_nan(_column(row, "live_date")),
                requirements=_lines(_column(row, "requirements")),
                reference_links=_lines(_column(row, "reference_links")),
                notes=_none_if_nan(_column(row, "notes")),
                url_plan=_none_if_nan(_column(row, "url_plan")),
                url_draft=_none_if_nan(_column(row, "url_draft")),
                url_content=_none_if_nan(_column(row, "url_content")),
                message_dashboard=_none_if_nan(_column(row, "message_dashboard")),
            )
        )
        count += 1

    return count


def import_sheets_to_db(folder: Path = SHEETS_DIR):
    folder = Path(folder)
    users_csv = folder / "users.csv"
    campaigns_csv = folder / "campaigns.csv"
    if not users_csv.exists() and not campaigns_csv.exists():
        raise FileNotFoundError(f"No users.csv / campaigns.csv found in: {folder.resolve()}")

    Base.metadata.create_all(bind=engine)

    session = SessionLocal()

    try:
        if users_csv.exists():
            n = import_users(session, users_csv)
            session.commit()
            print(f"Imported {n} users from {users_csv.name}")

        if campaigns_csv.exists():
            n = import_campaigns(session, campaigns_csv)
            session.commit()
            print(f"Imported {n} campaigns from {campaigns_csv.name}")

    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    import_sheets_to_db()
