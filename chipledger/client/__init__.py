"""Client for the club backend's REST API."""
from .api import ApiClient, ApiError, ApiResponse, SessionExpiredError
from .cashier import CashierService
from .session import SessionGuard

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "SessionExpiredError",
    "CashierService",
    "SessionGuard",
]
