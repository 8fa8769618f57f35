# main.py
# Role: Application entry point for the influencer dashboard.
#       Configures logging, creates database tables, initializes the FastAPI
#       app, mounts static assets, registers error handlers and all route modules.

"""
Main FastAPI app for the influencer campaign dashboard.

Here we only:
- configure logging
- create the FastAPI app
- set up static files
- create DB tables
- include route modules
"""

import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.config import APP_TITLE, LOG_LEVEL
from app.errors import register_error_handlers
from app.routes_api import router as api_router
from app.routes_auth import router as auth_router
from app.routes_dashboard import router as dashboard_router
from app.routes_root import router as root_router
from db import Base, engine

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

# -------------------------------------------------------------------
# App & DB setup
# -------------------------------------------------------------------

# Create database tables (only if they don't exist yet).
Base.metadata.create_all(bind=engine)

# FastAPI application instance
app = FastAPI(title=APP_TITLE)

# Serve static files (CSS) from /static
STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app", "static")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Error view + 404 page
register_error_handlers(app)

# -------------------------------------------------------------------
# Include routers
# -------------------------------------------------------------------

# Home redirect, theme switching
app.include_router(root_router)

# Login page, auth API, logout
app.include_router(auth_router)

# /dashboard and the role dashboards
app.include_router(dashboard_router)

# JSON data endpoints (/api/users, /api/campaigns)
app.include_router(api_router)
