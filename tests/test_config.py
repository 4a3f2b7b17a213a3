from config import Settings
from storage.memory import MemStorage
from utils.deps import build_storage


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("TAX_RATE", "0.1")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SEED_DEFAULT_CATEGORIES", "false")

    settings = Settings(_env_file=None)

    assert settings.TAX_RATE == 0.1
    assert settings.SEED_DEFAULT_CATEGORIES is False


def test_build_storage_seeds_categories():
    storage = build_storage(Settings(_env_file=None, STORAGE_BACKEND="memory", SEED_DEFAULT_CATEGORIES=True))

    assert isinstance(storage, MemStorage)
    assert len(storage.get_all_categories()) == 4


def test_build_storage_without_seed():
    storage = build_storage(Settings(_env_file=None, STORAGE_BACKEND="memory", SEED_DEFAULT_CATEGORIES=False))

    assert storage.get_all_categories() == []
