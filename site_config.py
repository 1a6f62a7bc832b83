"""
Configuration for the cabbages.info email renderer.

Everything site-specific lives here. Secrets (the preview token) should
come from environment variables or a .env file, never from this file.
"""

import os

# ---------------------------------------------------------------------------
# SITE IDENTITY
# ---------------------------------------------------------------------------

SITE_NAME = os.environ.get("SITE_NAME", "cabbages.info")

# Canonical base URL; entry permalinks are {SITE_URL}/#{entry_id}
SITE_URL = os.environ.get("SITE_URL", "https://cabbages.info").rstrip("/")

# ---------------------------------------------------------------------------
# PREVIEW SERVER
# ---------------------------------------------------------------------------

DEFAULT_PREVIEW_TOKEN = "CHANGE_ME_TO_A_LONG_RANDOM_STRING"
PREVIEW_TOKEN = os.environ.get("PREVIEW_TOKEN", DEFAULT_PREVIEW_TOKEN)
PORT = int(os.environ.get("PORT", "8473"))

# ---------------------------------------------------------------------------
# RENDER CLI
# ---------------------------------------------------------------------------

# Where render_entry.py writes one file per entry when rendering a list
OUTPUT_DIR = os.environ.get("OUTPUT_DIR", "dist/email")
