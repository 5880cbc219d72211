"""
Event Data Models for Album Service

Defines Pydantic models for events published by album_service
Broker subjects: events.album_service.<type>
"""

from pydantic import BaseModel, Field


# ====================
# Outbound Event Models (Published by album_service)
# ====================

class SuccessEventData(BaseModel):
    """Data for notify.success event"""
    message: str = Field(..., description="Human-readable success message")


__all__ = [
    "SuccessEventData",
]
