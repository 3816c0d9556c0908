"""
CLIENT CONFIGURATION

Purpose:
- Read runtime settings from the environment
- Provide defaults suitable for local development
- Install logging once per process

Requirements:
• Never hardcode secrets (use os.getenv)
• Storage keys are plain strings so they can be versioned
"""

import logging
import os

# Backend
API_URL = os.getenv("API_URL", "http://localhost:3000").rstrip("/")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))  # seconds

# Local persistence
LOCAL_STORAGE_PATH = os.getenv("LOCAL_STORAGE_PATH", "data/local_storage.json")
TOKEN_KEY = os.getenv("TOKEN_KEY", "token")
CART_KEY = os.getenv("CART_KEY", "restaurant_deals_cart")

# Payment processor publishable key (confirms intents, never a secret key)
STRIPE_PUBLISHABLE_KEY = os.getenv("STRIPE_PUBLISHABLE_KEY", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_logging_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once (Streamlit reruns the script on every event)."""
    global _logging_configured
    if _logging_configured:
        return

    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    _logging_configured = True
