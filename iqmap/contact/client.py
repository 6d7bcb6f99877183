"""
Contact relay client.

Posts a validated submission as JSON to the relay endpoint (a mail script,
a CMS REST route or a hosted form service) and expects
``{"success": bool, "message": str}`` back.  One attempt only: any
transport or server failure becomes a localized error result.

Usage
-----
    client = ContactClient("https://api.web3forms.com/submit", access_key="...")
    sub = ContactSubmission.from_form(name="Maria", email="m@example.com",
                                      message="Transfer to the port?")
    result = client.submit(sub, lang="en")
    print(result.success, result.message)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..i18n import DEFAULT_LANGUAGE, translate
from .form import ContactSubmission, ContactValidationError

log = logging.getLogger(__name__)

_PLACEHOLDER_KEY = "YOUR_ACCESS_KEY"
_FROM_NAME = "IQ Travel Website"


@dataclass(frozen=True)
class ContactResult:
    success: bool
    message: str
    status_code: Optional[int] = None


class ContactClient:
    """Sends contact submissions to a relay endpoint."""

    def __init__(
        self,
        endpoint: Optional[str],
        timeout: float = 15.0,
        access_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self._endpoint = endpoint
        self._timeout = timeout
        self._access_key = access_key
        self._session = session or requests.Session()

    @property
    def configured(self) -> bool:
        if not self._endpoint:
            return False
        if self._access_key is not None and _PLACEHOLDER_KEY in self._access_key:
            return False
        return True

    def build_payload(self, submission: ContactSubmission) -> dict:
        payload = submission.to_payload()
        if self._access_key:
            # Hosted form services key the inbox by access_key
            payload["access_key"] = self._access_key
            payload["from_name"] = _FROM_NAME
        return payload

    def submit(self, submission: ContactSubmission, lang: str = DEFAULT_LANGUAGE) -> ContactResult:
        """Validate and post *submission*.

        Validation problems and an unconfigured endpoint are reported as
        unsuccessful results without touching the network.
        """
        try:
            submission.validate()
        except ContactValidationError as exc:
            log.info("Contact form rejected: %s", exc)
            return ContactResult(False, translate(exc.reason, lang))

        if not self.configured:
            log.warning("Contact endpoint not configured, submission dropped")
            return ContactResult(False, translate("contact.not_configured", lang))

        resp = None
        try:
            resp = self._session.post(
                self._endpoint,
                json=self.build_payload(submission),
                timeout=self._timeout,
            )
            data = resp.json()
            if not isinstance(data, dict):
                raise ValueError("relay response is not a JSON object")
            if not resp.ok or not data.get("success", False):
                raise RuntimeError(data.get("message") or f"HTTP {resp.status_code}")
        except (requests.RequestException, ValueError, RuntimeError) as exc:
            log.error("Contact form error: %s", exc)
            status = resp.status_code if resp is not None else None
            return ContactResult(False, translate("contact.error", lang), status)

        log.info("Contact form sent for %s", submission.email)
        return ContactResult(True, translate("contact.success", lang), resp.status_code)
