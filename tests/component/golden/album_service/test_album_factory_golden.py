"""
Album Factory Component Golden Tests

Factory wiring and protocol conformance of the injected components.

Usage:
    pytest tests/component/golden/album_service/test_album_factory_golden.py -v
"""
import pytest

from core.auth_dependencies import AuthorizationGate
from core.config import AlbumServiceConfig, InfraConfig, ServiceSettings
from microservices.album_service.album_repository import AlbumRepository
from microservices.album_service.album_service import AlbumService
from microservices.album_service.events import EventNotifier
from microservices.album_service.factory import create_album_repository, create_album_service
from microservices.album_service.protocols import (
    AlbumRepositoryProtocol,
    AuthorizationGateProtocol,
    EventBusProtocol,
)
from tests.component.golden.album_service.mocks import MockAlbumRepository
from tests.fixtures import make_album

pytestmark = [pytest.mark.component, pytest.mark.golden]


@pytest.fixture
def settings():
    return ServiceSettings(
        version="9.9.9",
        infrastructure=InfraConfig(postgres_host="db.internal"),
        service=AlbumServiceConfig(public_mode=True),
    )


class TestProtocols:
    """GOLDEN: Concrete and mock components satisfy the protocols"""

    def test_repositories(self):
        assert isinstance(MockAlbumRepository(), AlbumRepositoryProtocol)
        assert isinstance(AlbumRepository(db=object()), AlbumRepositoryProtocol)

    def test_event_bus(self):
        assert isinstance(EventNotifier(), EventBusProtocol)

    def test_authorization_gate(self):
        assert isinstance(AuthorizationGate(), AuthorizationGateProtocol)


class TestFactory:
    """GOLDEN: create_album_service wiring"""

    def test_repository_from_settings_is_not_connected(self, settings):
        repository = create_album_repository(settings)

        assert isinstance(repository, AlbumRepository)
        assert repository.db.host == "db.internal"
        assert repository.db._pool is None

    def test_service_uses_injected_repository(self, settings):
        repository = MockAlbumRepository()
        notifier = EventNotifier()

        service = create_album_service(settings, event_bus=notifier, repository=repository)

        assert isinstance(service, AlbumService)
        assert service.repo is repository
        assert service.event_bus is notifier

    @pytest.mark.asyncio
    async def test_config_builder_carries_settings(self, settings):
        repository = MockAlbumRepository()
        repository.set_album(make_album(name="Trip", favorite=True))
        service = create_album_service(settings, repository=repository)

        config = await service.config_builder.build()

        assert config.version == "9.9.9"
        assert config.public is True
        assert config.count.favorites == 1
        assert [a.name for a in config.albums] == ["Trip"]
