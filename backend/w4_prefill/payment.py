"""
Payment proof verification against the Whop membership API.

Verification is opt-in: without an API key every non-empty proof is accepted.
"""

from __future__ import annotations

import logging
import os
from typing import FrozenSet, Optional

import requests

logger = logging.getLogger(__name__)

WHOP_API_BASE = os.getenv("WHOP_API_BASE", "https://api.whop.com/api/v2")
VALID_MEMBERSHIP_STATUSES: FrozenSet[str] = frozenset({"active", "trialing", "past_due"})


class MembershipVerifier:
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: str = WHOP_API_BASE,
        valid_statuses: FrozenSet[str] = VALID_MEMBERSHIP_STATUSES,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.valid_statuses = valid_statuses
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def verify(self, membership_id: str) -> bool:
        if not self.enabled:
            logger.warning("WHOP_API_KEY not set - skipping verification")
            return True

        try:
            response = requests.get(
                f"{self.api_base}/memberships/{membership_id}",
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Whop API error: %s", exc)
            return False

        if not response.ok:
            logger.warning("Whop verification failed: %s", response.status_code)
            return False

        try:
            membership = response.json()
        except ValueError:
            logger.warning("Whop verification returned a non-JSON body")
            return False
        if not isinstance(membership, dict):
            return False
        return membership.get("status") in self.valid_statuses
