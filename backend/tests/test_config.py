"""Tests for application settings."""
from pathlib import Path

from gamecalc.config import REPO_ROOT, Settings


def test_cors_origins_list():
    settings = Settings(cors_origins="http://a.test, http://b.test,,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_is_production():
    assert Settings(environment=" Production ").is_production
    assert not Settings(environment="development").is_production


def test_knowledge_path_relative_to_repo_root():
    assert Settings(knowledge_dir="knowledge").knowledge_path == REPO_ROOT / "knowledge"
    assert (REPO_ROOT / "knowledge" / "pokemon" / "games.json").exists()


def test_knowledge_path_absolute(tmp_path):
    assert Settings(knowledge_dir=str(tmp_path)).knowledge_path == Path(tmp_path)


def test_default_verdict_threshold():
    assert Settings().verdict_threshold == 0.5
