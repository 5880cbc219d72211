#!/usr/bin/env python3
"""Modular configuration system for album_service

Configuration hierarchy:
- infra_config: Infrastructure services (PostgreSQL, NATS)
- service_config: album_service binding and authorization settings
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .service_config import AlbumServiceConfig
from .settings import ServiceSettings

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = ServiceSettings.from_env()

def get_settings() -> ServiceSettings:
    """Get global settings instance"""
    return settings

def reload_settings() -> ServiceSettings:
    """Reload settings from environment"""
    global settings
    settings = ServiceSettings.from_env()
    return settings

__all__ = [
    # Main config
    'ServiceSettings',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'InfraConfig',
    'AlbumServiceConfig',
]
