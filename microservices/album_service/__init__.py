"""
Album Service

Album management microservice.
Handles album search, naming and favorites, and broadcasts the resulting
client configuration to connected clients.

Port: 8219
"""

__version__ = "1.0.0"
__service_name__ = "album_service"
__service_port__ = 8219
