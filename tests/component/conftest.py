"""
Component Test Layer Configuration (Layer 3)

Structure:
    tests/component/
    ├── golden/      🔒 Characterization (never modify)
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/golden -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("NATS_URL", None)
os.environ.pop("NATS_HOST", None)

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.auth_dependencies import AuthorizationGate
from microservices.album_service.album_service import AlbumService
from microservices.album_service.events import EventNotifier

from tests.component.mocks import (
    MockPostgresClient,
    MockEventBus,
)
from tests.component.golden.album_service.mocks import (
    INTERNAL_SECRET,
    SESSION_TOKEN,
    MockAlbumRepository,
    RecordingSubscriber,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )
    config.addinivalue_line(
        "markers", "golden: safety net tests - DO NOT MODIFY"
    )


# =============================================================================
# Database Mocks
# =============================================================================

@pytest.fixture
def mock_db() -> MockPostgresClient:
    """Mock PostgreSQL client"""
    return MockPostgresClient()


# =============================================================================
# Event Bus Mocks
# =============================================================================

@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock event bus"""
    return MockEventBus()


@pytest.fixture
def notifier() -> EventNotifier:
    """Fresh event notifier"""
    return EventNotifier()


@pytest.fixture
def recorder(notifier: EventNotifier) -> RecordingSubscriber:
    """Subscriber recording every event the notifier delivers"""
    subscriber = RecordingSubscriber()
    notifier.subscribe(subscriber, name="recorder")
    return subscriber


# =============================================================================
# Album Repository / Service
# =============================================================================

@pytest.fixture
def mock_album_repository() -> MockAlbumRepository:
    """Mock Album Repository with protocol implementation"""
    return MockAlbumRepository()


@pytest.fixture
def album_service(mock_album_repository: MockAlbumRepository, notifier: EventNotifier) -> AlbumService:
    """AlbumService over the mock repository, publishing to the notifier"""
    return AlbumService(repository=mock_album_repository, event_bus=notifier)


@pytest.fixture
def authorization_gate() -> AuthorizationGate:
    """Gate accepting SESSION_TOKEN and the internal service secret"""
    return AuthorizationGate(
        public_mode=False,
        session_tokens=[SESSION_TOKEN],
        internal_service_secret=INTERNAL_SECRET,
    )


@pytest.fixture
def auth_headers() -> dict:
    """Headers passing the authorization gate with a session token"""
    return {"X-Session-Token": SESSION_TOKEN}


@pytest.fixture
def internal_headers() -> dict:
    """Headers passing the authorization gate as an internal service"""
    return {"X-Internal-Service": "true", "X-Internal-Service-Secret": INTERNAL_SECRET}
