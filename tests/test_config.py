"""
Tests for settings loading.
"""

import os

import pytest
from pydantic import ValidationError

from mindful_meals.config import MissingConfiguration, load_settings


class TestLoadSettings:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "http://db.test")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "secret")
        monkeypatch.setenv("PORT", "7000")
        monkeypatch.setenv("APP_ENV", "production")

        settings = load_settings(_env_file=None)

        assert settings.supabase_url == "http://db.test"
        assert settings.port == 7000
        assert settings.is_production
        assert not settings.is_development

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("HOST", raising=False)
        settings = load_settings(_env_file=None)
        assert settings.port == 6000
        assert settings.host == "0.0.0.0"

    def test_missing_supabase_settings(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

        with pytest.raises(MissingConfiguration) as exc_info:
            load_settings(_env_file=None)

        assert exc_info.value.missing == ["supabase_url", "supabase_service_role_key"]
        assert "SUPABASE_URL" in str(exc_info.value)

    def test_only_key_missing(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        with pytest.raises(MissingConfiguration) as exc_info:
            load_settings(_env_file=None)
        assert exc_info.value.missing == ["supabase_service_role_key"]

    def test_bad_value_is_not_missing_configuration(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")
        with pytest.raises(ValidationError):
            load_settings(_env_file=None)


class TestSupabaseClient:

    def test_client_is_created_once(self, monkeypatch):
        from mindful_meals.db import client as db

        created = []
        monkeypatch.setattr(db, "create_client", lambda url, key: created.append((url, key)) or object())
        db.reset_client()
        try:
            first = db.get_client()
            assert db.get_client() is first
            assert created == [(os.environ["SUPABASE_URL"], os.environ["SUPABASE_SERVICE_ROLE_KEY"])]
        finally:
            db.reset_client()
