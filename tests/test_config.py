"""Tests for hnintel.config."""

from hnintel.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    s = Settings(_env_file=None)
    assert s.port == 3000
    assert s.hn_api_base == "https://hacker-news.firebaseio.com/v0"
    assert s.agent_name == "hn-intel"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    s = Settings(_env_file=None)
    assert s.port == 8080
