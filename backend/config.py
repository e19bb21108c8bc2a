"""
Configuration management for the Satellite TLE API backend.
"""
import os


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'satellite-tle-api-secret-key')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # CORS - the chart and globe front-ends are served from another origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # CelesTrak GP query API (TLE format)
    # Reference: https://celestrak.org/NORAD/documentation/gp-data-formats.php
    CELESTRAK_BASE_URL = os.environ.get(
        'CELESTRAK_BASE_URL',
        'https://celestrak.org/NORAD/elements/gp.php'
    )
    USER_AGENT = os.environ.get('USER_AGENT', 'satellite-tle-api/1.0')

    # TLE cache settings (seconds)
    TLE_CACHE_TTL = int(os.environ.get('TLE_CACHE_TTL', 86400))  # 24 hours
    TLE_FETCH_TIMEOUT = float(os.environ.get('TLE_FETCH_TIMEOUT', 30))

    # Serve the last good entry (flagged stale) when CelesTrak is down
    TLE_SERVE_STALE_ON_ERROR = _env_flag('TLE_SERVE_STALE_ON_ERROR', False)

    # Background cache pre-warm
    # CelesTrak updates GP data every 2 hours; avoid :00 and :30 peaks
    TLE_PREWARM_ENABLED = _env_flag('TLE_PREWARM_ENABLED', False)
    TLE_PREWARM_HOURS = os.environ.get('TLE_PREWARM_HOURS', '3,9,15,21')
    TLE_PREWARM_MINUTE = int(os.environ.get('TLE_PREWARM_MINUTE', 17))


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TLE_PREWARM_ENABLED = _env_flag('TLE_PREWARM_ENABLED', True)


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = False
    CELESTRAK_BASE_URL = 'https://celestrak.test/NORAD/elements/gp.php'
    TLE_PREWARM_ENABLED = False
    TLE_SERVE_STALE_ON_ERROR = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
