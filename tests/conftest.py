import os

import pytest

from lexideck.application.catalog import make_item_id
from lexideck.domain.models import Item


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep LEXIDECK_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("LEXIDECK_"):
            monkeypatch.delenv(name)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/progress files
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def catalog():
    words = [("สวัสดี", "Bonjour"), ("ขอบคุณ", "Merci"), ("ใช่", "Oui")]
    return [Item(id=make_item_id(front, back), front=front, back=back) for front, back in words]


@pytest.fixture
def catalog_csv(tmp_path):
    """A small word list on disk, in the French,Thai column layout."""
    path = tmp_path / "words.csv"
    path.write_text("French,Thai\nBonjour,สวัสดี\nMerci,ขอบคุณ\nOui,ใช่\n", encoding="utf-8")
    return path
