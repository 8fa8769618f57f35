# db.py
# Role: Database bootstrap for the influencer dashboard.
#       Defines the SQLAlchemy engine, session factory, and declarative Base.
#       Falls back to an on-disk SQLite database when DATABASE_URL is not set.

"""
Database setup for the influencer dashboard.

- Uses DATABASE_URL when configured (any SQLAlchemy URL)
- Otherwise uses SQLite at: <project_root>/database/dashboard.db
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import DATABASE_URL as CONFIGURED_DATABASE_URL

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

if CONFIGURED_DATABASE_URL:
    DATABASE_URL = CONFIGURED_DATABASE_URL
else:
    # Folder for SQLite DB (created on startup if missing)
    DB_DIR = os.path.join(BASE_DIR, "database")
    os.makedirs(DB_DIR, exist_ok=True)
    DATABASE_URL = f"sqlite:///{os.path.join(DB_DIR, 'dashboard.db')}"

# SQLite needs check_same_thread=False because FastAPI serves sync routes from a thread pool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

# Standard session factory used via dependency injection (see app/deps.py:get_db)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base class for ORM models
Base = declarative_base()
