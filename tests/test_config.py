from pathlib import Path

from kigaers.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ARXIV_PAGE_SIZE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.arxiv_page_size == 10
    assert settings.arxiv_default_category == "cat:cs.AI"
    assert settings.redis_enabled is False


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ARXIV_PAGE_SIZE", "25")
    monkeypatch.setenv("LIKED_STORE_PATH", str(tmp_path / "liked.json"))
    monkeypatch.setenv("REDIS_ENABLED", "true")

    settings = Settings(_env_file=None)

    assert settings.arxiv_page_size == 25
    assert settings.liked_store_path == Path(tmp_path / "liked.json")
    assert settings.redis_enabled is True
