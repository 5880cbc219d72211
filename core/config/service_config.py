#!/usr/bin/env python3
"""Album service configuration

HTTP binding and authorization settings for album_service.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _list(val: Optional[str]) -> List[str]:
    if not val:
        return []
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class AlbumServiceConfig:
    """album_service settings"""

    service_name: str = "album_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8219

    # ===========================================
    # Authorization
    # ===========================================
    # Public mode authorizes every caller (single-user installs)
    public_mode: bool = False
    session_tokens: List[str] = field(default_factory=list)
    internal_service_secret: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'AlbumServiceConfig':
        """Load album service configuration from environment variables"""
        return cls(
            service_name=os.getenv("SERVICE_NAME", "album_service"),
            service_host=os.getenv("ALBUM_SERVICE_HOST") or os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv("ALBUM_SERVICE_PORT", "8219"), 8219),
            public_mode=_bool(os.getenv("ALBUM_PUBLIC_MODE", "false")),
            session_tokens=_list(os.getenv("ALBUM_SESSION_TOKENS")),
            internal_service_secret=os.getenv("INTERNAL_SERVICE_SECRET"),
        )
