"""Tests for the application factory and configuration."""
from unittest.mock import MagicMock

import pytest

import app as app_module
from app import create_app
from config import TestingConfig, _env_flag, config
from services.tle_service import SatelliteDataService, get_tle_service


class TestCreateApp:

    def test_builds_service_from_config(self):
        app = create_app('testing')

        service = get_tle_service(app)
        assert isinstance(service, SatelliteDataService)
        assert service.registry.base_url == TestingConfig.CELESTRAK_BASE_URL
        assert service.ttl_ms == 86_400_000

    def test_uses_injected_service(self, service):
        app = create_app('testing', tle_service=service)

        assert get_tle_service(app) is service

    def test_each_app_owns_its_cache(self):
        first = get_tle_service(create_app('testing'))
        second = get_tle_service(create_app('testing'))

        assert first.cache is not second.cache

    def test_flask_env_selects_config(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'testing')

        assert create_app().config['TESTING'] is True


class TestConfig:

    def test_defaults(self):
        assert TestingConfig.TLE_CACHE_TTL == 86400
        assert TestingConfig.TLE_SERVE_STALE_ON_ERROR is False
        assert TestingConfig.TLE_PREWARM_ENABLED is False
        assert TestingConfig.TLE_PREWARM_HOURS == '3,9,15,21'
        assert TestingConfig.TLE_PREWARM_MINUTE == 17

    def test_mapping(self):
        assert set(config) == {'development', 'production', 'testing', 'default'}

    @pytest.mark.parametrize('raw, expected', [
        ('1', True), ('true', True), ('Yes', True), (' on ', True),
        ('0', False), ('false', False), ('', False),
    ])
    def test_env_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv('SOME_FLAG', raw)

        assert _env_flag('SOME_FLAG') is expected

    def test_env_flag_default(self, monkeypatch):
        monkeypatch.delenv('SOME_FLAG', raising=False)

        assert _env_flag('SOME_FLAG', True) is True


class TestStartScheduler:

    def test_disabled_prewarm_does_not_start(self, app, monkeypatch):
        initialize = MagicMock()
        monkeypatch.setattr('services.scheduler_service.initialize_scheduler', initialize)

        app_module.start_scheduler(app)

        initialize.assert_not_called()

    def test_enabled_prewarm_starts_scheduler(self, app, monkeypatch):
        initialize = MagicMock()
        register = MagicMock()
        monkeypatch.setattr('services.scheduler_service.initialize_scheduler', initialize)
        monkeypatch.setattr('app.atexit.register', register)
        app.config['TLE_PREWARM_ENABLED'] = True

        app_module.start_scheduler(app)

        initialize.assert_called_once_with(app)
        register.assert_called_once()
