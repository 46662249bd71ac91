"""
Profile service client.

Submits finished drafts to POST /api/profile and reads stored profiles back.
"""

import logging
from typing import Any

import httpx

from .errors import ProfileFetchFailed, SubmissionFailed
from .payload import build_payload_from_draft
from .sequencer import StepSequencer
from .session import Identity, current_identity
from .state import ProfileDraft

logger = logging.getLogger(__name__)

DEFAULT_SUBMIT_ERROR = "Failed to save profile"
DEFAULT_FETCH_ERROR = "Failed to fetch profile"


class ProfileClient:
    """HTTP client for the profile endpoints."""

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, **kwargs)

    async def submit(self, draft: ProfileDraft, identity: Identity) -> dict[str, Any]:
        """
        Upsert the profile built from a draft.

        Returns the stored profile document. The draft is only read.

        Raises:
            SubmissionFailed: network error, non-2xx response or unreadable
                body, carrying the server's error message when it sent one.
        """
        payload = build_payload_from_draft(draft, identity)

        try:
            response = await self._request("POST", "/api/profile", json=payload.to_dict())
        except httpx.HTTPError as e:
            logger.error(f"Profile submission failed: {e}")
            raise SubmissionFailed(str(e) or DEFAULT_SUBMIT_ERROR) from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"Profile submission returned an unreadable body: {e}")
                raise SubmissionFailed(DEFAULT_SUBMIT_ERROR, status_code=response.status_code) from e

        message = _error_message(response)
        logger.warning(f"Profile submission rejected ({response.status_code}): {message}")
        raise SubmissionFailed(message, status_code=response.status_code)

    async def fetch(self, user_id: str) -> dict[str, Any] | None:
        """
        Get a stored profile, or None if the user has none.

        Raises:
            ProfileFetchFailed: network error, non-2xx (other than 404) or an
                unreadable response body.
        """
        try:
            response = await self._request("GET", f"/api/profile/{user_id}")
        except httpx.HTTPError as e:
            logger.error(f"Profile fetch failed: {e}")
            raise ProfileFetchFailed(str(e) or DEFAULT_FETCH_ERROR) from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            message = _error_message(response, DEFAULT_FETCH_ERROR)
            raise ProfileFetchFailed(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ProfileFetchFailed(DEFAULT_FETCH_ERROR, status_code=response.status_code) from e


def _error_message(response: httpx.Response, default: str = DEFAULT_SUBMIT_ERROR) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


def start_onboarding(client: ProfileClient, identity: Identity | None = None) -> StepSequencer:
    """
    Create a fresh draft and a sequencer that submits it for the signed-in user.

    Called right after sign-up. The identity defaults to the process identity.
    """
    identity = identity or current_identity()

    async def submit(draft: ProfileDraft) -> dict[str, Any]:
        return await client.submit(draft, identity)

    return StepSequencer(ProfileDraft(), submit)
