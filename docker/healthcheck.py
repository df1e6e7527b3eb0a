"""Container healthcheck: exit 0 when the completion API answers /health."""

from __future__ import annotations

import os
import sys

import httpx

port = os.environ.get("COPILOT_API_PORT", "8080")

try:
    resp = httpx.get(f"http://localhost:{port}/health", timeout=5)
except httpx.HTTPError:
    sys.exit(1)

sys.exit(0 if resp.status_code == 200 else 1)
