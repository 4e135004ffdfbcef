# /grading_app/core/config.py

"""
Environment-driven settings for the grading backend.

Every value has a local-development default so the service runs without
any environment configuration.
"""

import os

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./grading.db")
AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- HTTP ---
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# --- Pending review badge ---
# Clients poll the pending count at this interval while the page is in the foreground.
PENDING_REVIEW_POLL_INTERVAL_SECONDS = int(os.getenv("PENDING_REVIEW_POLL_INTERVAL_SECONDS", "120"))
PENDING_BADGE_CAP = int(os.getenv("PENDING_BADGE_CAP", "99"))
