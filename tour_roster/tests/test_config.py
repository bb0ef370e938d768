"""Tests for environment-driven runtime configuration."""

from __future__ import annotations

import pytest

from tour_roster.config import load_tour_taxonomy, runtime_config

ENV_VARS = (
    "TOUR_ROSTER_FEED_URL",
    "TOUR_ROSTER_LOCAL_TZ",
    "TOUR_ROSTER_ARTIFACT_DIR",
    "TOUR_ROSTER_TAXONOMY_FILE",
    "TOUR_ROSTER_FETCH_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TOUR_ROSTER_ARTIFACT_DIR", str(tmp_path / "artifacts"))


class TestRuntimeConfig:
    def test_defaults(self, tmp_path):
        cfg = runtime_config()
        assert cfg.feed_url is None
        assert cfg.local_tz.key == "America/New_York"
        assert cfg.artifact_root == (tmp_path / "artifacts").resolve()
        assert cfg.artifact_root.is_dir()
        assert cfg.taxonomy_file is None
        assert cfg.fetch_timeout_s == 30.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TOUR_ROSTER_FEED_URL", "https://calendar.example.com/feed.ics")
        monkeypatch.setenv("TOUR_ROSTER_LOCAL_TZ", "America/Denver")
        monkeypatch.setenv("TOUR_ROSTER_FETCH_TIMEOUT", "5")
        cfg = runtime_config()
        assert cfg.feed_url == "https://calendar.example.com/feed.ics"
        assert cfg.local_tz.key == "America/Denver"
        assert cfg.fetch_timeout_s == 5.0

    def test_unknown_zone(self, monkeypatch):
        monkeypatch.setenv("TOUR_ROSTER_LOCAL_TZ", "Mars/Olympus_Mons")
        with pytest.raises(ValueError, match="TOUR_ROSTER_LOCAL_TZ"):
            runtime_config()

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("TOUR_ROSTER_FETCH_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            runtime_config()

    def test_taxonomy_file(self, monkeypatch, tmp_path):
        path = tmp_path / "tours.json"
        path.write_text('{"Canopy Walk": {"course": "Canopy"}}', encoding="utf-8")
        monkeypatch.setenv("TOUR_ROSTER_TAXONOMY_FILE", str(path))
        taxonomy = load_tour_taxonomy(runtime_config())
        assert taxonomy.names() == ["Canopy Walk"]
