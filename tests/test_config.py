"""環境變數設定測試。"""

import importlib

import pytest

from upcoming_book_releases import config


@pytest.fixture
def reload_config(monkeypatch):
    """以目前的環境變數重新載入設定模組，結束後還原環境並再載入一次。"""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestCategoryFilter:
    """CATEGORY_FILTER 解析測試。"""

    def test_default(self, reload_config, monkeypatch):
        monkeypatch.delenv("CATEGORY_FILTER", raising=False)
        assert reload_config().CATEGORY_FILTER == ("Taschenbuch", "Buch")

    def test_empty_disables_filter(self, reload_config, monkeypatch):
        monkeypatch.setenv("CATEGORY_FILTER", "")
        assert reload_config().CATEGORY_FILTER is None

    def test_only_separators_disables_filter(self, reload_config, monkeypatch):
        monkeypatch.setenv("CATEGORY_FILTER", " , ,")
        assert reload_config().CATEGORY_FILTER is None

    def test_tokens_are_trimmed(self, reload_config, monkeypatch):
        monkeypatch.setenv("CATEGORY_FILTER", " Taschenbuch , Buch ")
        assert reload_config().CATEGORY_FILTER == ("Taschenbuch", "Buch")


class TestNumericSettings:
    """數值型設定的轉換測試。"""

    def test_request_settings(self, reload_config, monkeypatch):
        monkeypatch.setenv("REQUEST_INTERVAL", "2.5")
        monkeypatch.setenv("MAX_BLOCKS_PER_AUTHOR", "5")

        reloaded = reload_config()
        assert reloaded.REQUEST_INTERVAL == 2.5
        assert reloaded.MAX_BLOCKS_PER_AUTHOR == 5
