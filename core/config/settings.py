#!/usr/bin/env python3
"""Album service main configuration

Combines all sub-configs into a single settings object.
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .service_config import AlbumServiceConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class ServiceSettings:
    """Main configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False
    version: str = "1.0.0"

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    infrastructure: InfraConfig = field(default_factory=InfraConfig)
    service: AlbumServiceConfig = field(default_factory=AlbumServiceConfig)

    @classmethod
    def from_env(cls) -> 'ServiceSettings':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            version=os.getenv("ALBUM_SERVICE_VERSION", "1.0.0"),

            logging=LoggingConfig.from_env(),
            infrastructure=InfraConfig.from_env(),
            service=AlbumServiceConfig.from_env(),
        )
