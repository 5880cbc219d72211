"""
Album Service Events

Event notifier and publishers for album_service
"""

from .notifier import EventNotifier, Subscription
from .publishers import AlbumEventPublishers
from . import models

__all__ = [
    'EventNotifier',
    'Subscription',
    'AlbumEventPublishers',
    'models'
]
