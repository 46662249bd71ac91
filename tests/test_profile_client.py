"""
Tests for the profile service client and start_onboarding.
"""

import asyncio
import json

import httpx
import pytest

from onboarding import session
from onboarding.errors import NotSignedIn, OnboardingError, ProfileFetchFailed, SubmissionFailed
from onboarding.service import ProfileClient, start_onboarding
from onboarding.session import Identity
from onboarding.state import IngredientRef, ProfileDraft
from onboarding.steps import Step


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


IDENTITY = Identity(id="user-1", email="ada@example.com")


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self.response = response
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def _client(recorder: Recorder) -> ProfileClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return ProfileClient("http://api.test", http_client=http_client)


@pytest.fixture(autouse=True)
def signed_out():
    session.sign_out()
    yield
    session.sign_out()


class TestSubmit:

    def test_posts_camel_case_body(self):
        stored = {"userId": "user-1", "displayName": "Ada"}
        recorder = Recorder(httpx.Response(200, json=stored))
        draft = ProfileDraft(display_name="Ada")
        draft.add_ingredient("favorites", IngredientRef(id="ing-1", name="Spinach"))

        result = _run(_client(recorder).submit(draft, IDENTITY))

        assert result == stored
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://api.test/api/profile"
        body = json.loads(request.content)
        assert body["userId"] == "user-1"
        assert body["email"] == "ada@example.com"
        assert body["preferences"]["favoriteIngredients"] == ["ing-1"]

    def test_server_error_message_is_surfaced(self):
        recorder = Recorder(httpx.Response(400, json={"error": "Missing required fields"}))
        draft = ProfileDraft(display_name="Ada")
        before = draft.to_dict()

        with pytest.raises(SubmissionFailed) as exc_info:
            _run(_client(recorder).submit(draft, IDENTITY))

        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.status_code == 400
        assert draft.to_dict() == before

    def test_generic_message_without_error_body(self):
        recorder = Recorder(httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(SubmissionFailed) as exc_info:
            _run(_client(recorder).submit(ProfileDraft(display_name="Ada"), IDENTITY))
        assert exc_info.value.message == "Failed to save profile"
        assert exc_info.value.status_code == 502

    def test_transport_error(self):
        recorder = Recorder(error=httpx.ConnectError("connection refused"))
        with pytest.raises(SubmissionFailed) as exc_info:
            _run(_client(recorder).submit(ProfileDraft(display_name="Ada"), IDENTITY))
        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    def test_non_json_success_body(self):
        recorder = Recorder(httpx.Response(200, text="<html>proxy</html>"))
        draft = ProfileDraft(display_name="Ada")
        before = draft.to_dict()

        with pytest.raises(SubmissionFailed) as exc_info:
            _run(_client(recorder).submit(draft, IDENTITY))

        assert isinstance(exc_info.value, OnboardingError)
        assert exc_info.value.message == "Failed to save profile"
        assert exc_info.value.status_code == 200
        assert draft.to_dict() == before

    def test_non_json_success_body_leaves_sequencer_retryable(self):
        recorder = Recorder(httpx.Response(200, text="<html>proxy</html>"))
        sequencer = start_onboarding(_client(recorder), identity=IDENTITY)
        sequencer.draft.set_display_name("Ada")
        while not sequencer.is_last:
            _run(sequencer.advance())

        with pytest.raises(SubmissionFailed):
            _run(sequencer.advance())
        assert not sequencer.submitting
        assert not sequencer.completed

        recorder.response = httpx.Response(200, json={"userId": "user-1"})
        _run(sequencer.advance())
        assert sequencer.completed
        assert sequencer.result == {"userId": "user-1"}


class TestFetch:

    def test_returns_profile(self):
        recorder = Recorder(httpx.Response(200, json={"userId": "user-1"}))
        assert _run(_client(recorder).fetch("user-1")) == {"userId": "user-1"}
        assert str(recorder.requests[0].url) == "http://api.test/api/profile/user-1"

    def test_missing_profile_is_none(self):
        recorder = Recorder(httpx.Response(404, json={"error": "Profile not found"}))
        assert _run(_client(recorder).fetch("nobody")) is None

    def test_server_error_raises(self):
        recorder = Recorder(httpx.Response(500, json={"error": "Database unavailable"}))
        with pytest.raises(ProfileFetchFailed) as exc_info:
            _run(_client(recorder).fetch("user-1"))
        assert exc_info.value.message == "Database unavailable"
        assert exc_info.value.status_code == 500

    def test_server_error_without_body_uses_fetch_message(self):
        recorder = Recorder(httpx.Response(503, text="Service Unavailable"))
        with pytest.raises(ProfileFetchFailed) as exc_info:
            _run(_client(recorder).fetch("user-1"))
        assert exc_info.value.message == "Failed to fetch profile"

    def test_transport_error(self):
        recorder = Recorder(error=httpx.ConnectError("connection refused"))
        with pytest.raises(ProfileFetchFailed):
            _run(_client(recorder).fetch("user-1"))

    def test_non_json_success_body(self):
        recorder = Recorder(httpx.Response(200, text="<html>proxy</html>"))
        with pytest.raises(ProfileFetchFailed) as exc_info:
            _run(_client(recorder).fetch("user-1"))
        assert exc_info.value.message == "Failed to fetch profile"
        assert exc_info.value.status_code == 200


class TestStartOnboarding:

    def test_requires_signed_in_user(self):
        client = _client(Recorder(httpx.Response(200, json={})))
        with pytest.raises(NotSignedIn):
            start_onboarding(client)

    def test_fresh_sequencer_submits_for_current_identity(self):
        session.sign_in("user-9", "grace@example.com")
        recorder = Recorder(httpx.Response(200, json={"userId": "user-9"}))
        sequencer = start_onboarding(_client(recorder))

        assert sequencer.current_step == Step.NAME
        assert sequencer.draft == ProfileDraft()

        sequencer.draft.set_display_name("Grace")
        while not sequencer.completed:
            _run(sequencer.advance())

        body = json.loads(recorder.requests[0].content)
        assert body["userId"] == "user-9"
        assert body["email"] == "grace@example.com"
        assert body["displayName"] == "Grace"
        assert sequencer.result == {"userId": "user-9"}

    def test_explicit_identity(self):
        recorder = Recorder(httpx.Response(200, json={}))
        sequencer = start_onboarding(_client(recorder), identity=IDENTITY)
        sequencer.draft.set_display_name("Ada")
        while not sequencer.completed:
            _run(sequencer.advance())
        assert json.loads(recorder.requests[0].content)["userId"] == "user-1"
