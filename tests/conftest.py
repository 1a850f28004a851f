import pytest

from price_watch.models import Item

ENV_VARS = [
    "CATALOG_URL",
    "FETCH_TIMEOUT_SECONDS",
    "WATCHLIST_PATH",
    "LATEST_PATH",
    "BEST_PATH",
    "CHECK_INTERVAL_SECONDS",
    "RUN_MODE",
    "KEEP_NEW_CODES",
    "NOTIFY_CHANNELS",
    "CURRENCY",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_TO",
    "SMTP_HOST",
    "SMTP_PORT",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def car():
    return Item(42, 99.99, "Car")


@pytest.fixture
def data_paths(tmp_path, monkeypatch):
    paths = {
        "watchlist": tmp_path / "wanted-sets.txt",
        "latest": tmp_path / "latest.txt",
        "best": tmp_path / "best.txt",
    }
    monkeypatch.setenv("WATCHLIST_PATH", str(paths["watchlist"]))
    monkeypatch.setenv("LATEST_PATH", str(paths["latest"]))
    monkeypatch.setenv("BEST_PATH", str(paths["best"]))
    return paths
