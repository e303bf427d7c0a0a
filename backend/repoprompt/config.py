import os
from typing import List

from dotenv import load_dotenv # For local development with .env file

load_dotenv() # Load .env file if present (for local development)

# --- GitHub API Configuration ---
GITHUB_API_BASE_URL = os.getenv("GITHUB_API_BASE_URL", "https://api.github.com").rstrip("/")
# Fallback token from backend environment if the request doesn't carry one
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or None

# --- HTTP client ---
HTTP_TIMEOUT_SECONDS = float(os.getenv("REPOPROMPT_HTTP_TIMEOUT", "30"))
# 0 means no cap: every selected file is fetched at once
MAX_CONCURRENT_FETCHES = int(os.getenv("REPOPROMPT_MAX_CONCURRENT_FETCHES", "0"))

# --- CORS Configuration ---
ALLOWED_ORIGINS_STRING = os.getenv("ALLOWED_ORIGINS", "*")
ALLOWED_ORIGINS: List[str] = [origin.strip() for origin in ALLOWED_ORIGINS_STRING.split(",") if origin.strip()]
if not ALLOWED_ORIGINS:
    ALLOWED_ORIGINS = ["*"]

# --- Listener ---
HOST = os.getenv("REPOPROMPT_HOST", "0.0.0.0")
PORT = int(os.getenv("REPOPROMPT_PORT", "7777"))
LOG_LEVEL = os.getenv("REPOPROMPT_LOG_LEVEL", "INFO").upper()
