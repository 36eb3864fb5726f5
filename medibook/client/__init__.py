"""Python client for the MediBook API: HTTP layer, session state and route guards."""
from .api import ApiClient, ApiError, SessionExpired
from .booking import BookingClient
from .session import AuthSession
from .storage import AuthStore, FileStorage, MemoryStorage

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthSession",
    "AuthStore",
    "BookingClient",
    "FileStorage",
    "MemoryStorage",
    "SessionExpired",
]
