"""환경변수 → Settings"""

from pathlib import Path

from backend.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("COMPANION_DATA_DIR", "VISION_MODEL", "VISION_MAX_TOKENS", "VISION_TIMEOUT", "FRONT_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings()
    assert s.data_dir == Path("data")
    assert s.vision_model == "gpt-4o-mini"
    assert s.max_tokens == 300
    assert s.request_timeout is None
    assert s.allow_origins == ["*"]


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("COMPANION_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("VISION_TIMEOUT", "12.5")
    monkeypatch.setenv("FRONT_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.test/v1/")
    s = load_settings()
    assert s.entries_path == tmp_path / "entries.json"
    assert s.uploads_dir == tmp_path / "uploads"
    assert s.processed_dir == tmp_path / "processed"
    assert s.request_timeout == 12.5
    assert s.allow_origins == ["http://a.test", "http://b.test"]
    assert s.openai_base_url == "https://proxy.test/v1"


def test_settings_model_is_plain_data():
    s = Settings(data_dir=Path("/srv/companion"))
    assert s.entries_path == Path("/srv/companion/entries.json")
