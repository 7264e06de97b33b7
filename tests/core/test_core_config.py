"""core 配置测试 -- 整数类环境变量的校验与回退"""

import pytest
from taskmirror.core.config import get_bind_port, get_loading_refresh_seconds


class TestLoadingRefreshSeconds:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("TASKMIRROR_LOADING_REFRESH_SECONDS", raising=False)
        assert get_loading_refresh_seconds() == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TASKMIRROR_LOADING_REFRESH_SECONDS", "5")
        assert get_loading_refresh_seconds() == 5

    @pytest.mark.parametrize("value", ["soon", "0", "-2", "1.5"])
    def test_invalid_value_falls_back(self, monkeypatch, value):
        """非法值不阻塞启动，回退默认值"""
        monkeypatch.setenv("TASKMIRROR_LOADING_REFRESH_SECONDS", value)
        assert get_loading_refresh_seconds() == 1


class TestBindPort:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("TASKMIRROR_PORT", raising=False)
        assert get_bind_port() == 3000

    def test_invalid_value_falls_back(self, monkeypatch):
        monkeypatch.setenv("TASKMIRROR_PORT", "http")
        assert get_bind_port() == 3000
