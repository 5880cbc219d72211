#!/usr/bin/env python3
"""
Core Module for Microservices Architecture

Shared infrastructure components for the album microservice.

COMPONENTS:
    - config/: Dataclass configuration loaded from the environment
    - logger.py: Service logger setup
    - postgres_client.py: asyncpg connection pool wrapper
    - nats_client.py: Event envelope and NATS publisher
    - auth_dependencies.py: Authorization gate and FastAPI dependency
    - http_errors.py: Uniform JSON error responses

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger(settings.service.service_name)
"""

__version__ = "2.0.0"
