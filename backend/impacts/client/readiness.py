"""
Remote fetch and local save of the readiness assessment.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from impacts.client.storage import KeyValueStore, default_data, storage_key
from impacts.config import get_settings

logger = logging.getLogger(__name__)

READINESS_PATH = "/api/readiness-assessment"


def fetch_readiness_assessment(
    token: Optional[str] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> dict:
    """
    GET the caller's readiness assessment from the API.
    Any failure is logged and yields an empty assessment.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    base_url = base_url or get_settings().api_base_url
    try:
        with httpx.Client(base_url=base_url, headers=headers, transport=transport, timeout=10.0) as client:
            response = client.get(READINESS_PATH)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError):
        logger.error("Error fetching readiness assessment", exc_info=True)
        return {}


def save_readiness_assessment(store: KeyValueStore, assessment: dict, user_email: str) -> None:
    """Store `assessment` in the user's local document, keeping the other collections."""
    try:
        if not user_email:
            raise ValueError("No user email provided")

        key = storage_key(user_email)
        raw = store.get_item(key)
        existing = json.loads(raw) if raw else default_data()
        store.set_item(key, json.dumps({**existing, "readinessAssessment": assessment}, default=str))
    except (ValueError, OSError):
        logger.error("Error saving readiness assessment", exc_info=True)
        raise
