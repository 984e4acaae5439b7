"""HTTP client for the club backend."""
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from chipledger.client.session import SessionGuard
from chipledger.config import config
from chipledger.utils.logger import get_logger

logger = get_logger(__name__)

# Failures on these never count as an expired session.
PUBLIC_ENDPOINTS = (
    "/login",
    "/signup",
    "/send-otp",
    "/verify-otp",
    "/forgot-password",
    "/reset-password",
)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
NO_TOKEN_MESSAGE = "No authentication token. Please login first."


class ApiError(Exception):
    """A request to the backend failed."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(ApiError):
    """The backend rejected the token (HTTP 401)."""
    
    def __init__(self):
        super().__init__(SESSION_EXPIRED_MESSAGE, 401)


class ApiResponse(BaseModel):
    """Response envelope: ``{"success": ..., "data": ..., "message": ...}``."""
    success: bool = True
    data: Any = None
    message: Optional[str] = None
    
    @classmethod
    def from_body(cls, body: Any) -> "ApiResponse":
        """Wrap a decoded body; bodies without a ``data`` member become the data.
        
        Raises:
            ApiError: If the envelope is malformed.
        """
        if not (isinstance(body, dict) and "data" in body):
            return cls(data=body)
        try:
            return cls.model_validate(body)
        except ValidationError as e:
            raise ApiError(f"Malformed response: {e.error_count()} invalid field(s)") from e


class ApiClient:
    """Thin JSON client over httpx with bearer-token auth."""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        guard: Optional[SessionGuard] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.
        
        Args:
            base_url: API root, e.g. ``http://localhost:5000/api``.
            token: Bearer token sent with every request.
            guard: Session guard notified on 401 responses.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (tests).
        """
        self.base_url = (base_url or config.api_base_url).rstrip("/")
        self.token = token if token is not None else config.api_token
        self.guard = guard or SessionGuard()
        self.timeout = timeout or config.api_timeout_seconds
        self._transport = transport
    
    def _headers(self, token: Optional[str]) -> dict:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
    
    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        token: Optional[str] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.
        
        Args:
            method: HTTP method.
            endpoint: Path below the API root, starting with ``/``.
            body: JSON-serializable request body.
            token: Overrides the client's token for this request.
            
        Returns:
            Decoded response body.
            
        Raises:
            SessionExpiredError: On 401 from a non-public endpoint.
            ApiError: On any other failure.
        """
        url = f"{self.base_url}{endpoint}"
        headers = self._headers(token or self.token)
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, json=body, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ApiError(f"Request failed: {e}") from e
        
        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = None
            if isinstance(error_data, dict):
                message = error_data.get("message")
            message = message or f"HTTP {response.status_code}"
            
            logger.warning(f"{method} {endpoint} -> {response.status_code}: {message}")
            
            if any(ep in endpoint for ep in PUBLIC_ENDPOINTS):
                raise ApiError(message, response.status_code)
            
            if response.status_code == 401:
                self.guard.handle_expired()
                raise SessionExpiredError()
            
            raise ApiError(message, response.status_code)
        
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {endpoint}", response.status_code) from e
    
    async def get(self, endpoint: str, token: Optional[str] = None) -> Any:
        return await self.request("GET", endpoint, token=token)
    
    async def post(self, endpoint: str, data: Any, token: Optional[str] = None) -> Any:
        return await self.request("POST", endpoint, body=data, token=token)
    
    async def put(self, endpoint: str, data: Any, token: Optional[str] = None) -> Any:
        return await self.request("PUT", endpoint, body=data, token=token)
    
    async def delete(self, endpoint: str, token: Optional[str] = None) -> Any:
        return await self.request("DELETE", endpoint, token=token)
