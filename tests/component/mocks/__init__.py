"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (database, event bus).
"""

from .db_mock import MockPostgresClient
from .nats_mock import MockEventBus

# Service-specific mocks should be in tests/component/{golden,tdd}/{service}/mocks.py

__all__ = [
    'MockPostgresClient',
    'MockEventBus',
]
