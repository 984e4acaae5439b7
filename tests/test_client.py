"""Tests for the backend HTTP client."""
import httpx
import pytest
from unittest.mock import MagicMock

from chipledger.client.api import (
    ApiClient,
    ApiError,
    ApiResponse,
    NO_TOKEN_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    SessionExpiredError,
)
from chipledger.client.cashier import CashierService
from chipledger.client.session import SessionGuard


def make_client(handler, token="tok123", guard=None) -> ApiClient:
    """Create a client backed by a mock transport."""
    return ApiClient(
        base_url="http://backend.test/api",
        token=token,
        guard=guard,
        transport=httpx.MockTransport(handler),
    )


class TestSessionGuard:
    """Test the one-time session expiry guard."""
    
    def test_handles_once(self):
        """Test callbacks run only on the first expiry."""
        guard = SessionGuard()
        callback = MagicMock()
        guard.on_expired(callback)
        
        assert guard.handle_expired() is True
        assert guard.handle_expired() is False
        assert guard.handled
        callback.assert_called_once()
    
    def test_reset(self):
        """Test reset re-arms the guard."""
        guard = SessionGuard()
        callback = MagicMock()
        guard.on_expired(callback)
        
        guard.handle_expired()
        guard.reset()
        assert not guard.handled
        assert guard.handle_expired() is True
        assert callback.call_count == 2


class TestApiResponse:
    """Test response envelope parsing."""
    
    def test_envelope(self):
        """Test a full envelope."""
        response = ApiResponse.from_body({"success": True, "data": {"movements": []}})
        assert response.success
        assert response.data == {"movements": []}
    
    def test_empty_data_is_kept(self):
        """Test an envelope with empty data is not re-wrapped."""
        response = ApiResponse.from_body({"success": True, "data": []})
        assert response.data == []
    
    def test_malformed_envelope(self):
        """Test a malformed envelope surfaces as ApiError."""
        with pytest.raises(ApiError) as exc_info:
            ApiResponse.from_body({"success": True, "data": [], "message": {"text": "x"}})
        assert "Malformed response" in str(exc_info.value)
    
    def test_bare_body(self):
        """Test bodies without data become the data."""
        response = ApiResponse.from_body([{"id": 1}])
        assert response.data == [{"id": 1}]


class TestApiClient:
    """Test request handling and error mapping."""
    
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        """Test the token and JSON body are sent."""
        seen = {}
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(200, json={"success": True})
        
        client = make_client(handler)
        result = await client.post("/dealers/tips", {"chip_amount": 500})
        
        assert result == {"success": True}
        assert seen["auth"] == "Bearer tok123"
        assert seen["url"] == "http://backend.test/api/dealers/tips"
        assert b'"chip_amount"' in seen["body"]
    
    @pytest.mark.asyncio
    async def test_error_message_from_body(self):
        """Test the backend's message is surfaced."""
        def handler(request):
            return httpx.Response(400, json={"message": "Insufficient float"})
        
        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).get("/cashier/float-summary")
        
        assert exc_info.value.message == "Insufficient float"
        assert exc_info.value.status_code == 400
    
    @pytest.mark.asyncio
    async def test_error_without_body(self):
        """Test the status is used when the body has no message."""
        def handler(request):
            return httpx.Response(404, text="not found")
        
        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).get("/missing")
        
        assert str(exc_info.value) == "HTTP 404"
    
    @pytest.mark.asyncio
    async def test_401_expires_session_once(self):
        """Test repeated 401s trigger the expiry side effect once."""
        guard = SessionGuard()
        callback = MagicMock()
        guard.on_expired(callback)
        
        def handler(request):
            return httpx.Response(401, json={"message": "jwt expired"})
        
        client = make_client(handler, guard=guard)
        for _ in range(2):
            with pytest.raises(SessionExpiredError) as exc_info:
                await client.get("/transactions")
            assert str(exc_info.value) == SESSION_EXPIRED_MESSAGE
        
        callback.assert_called_once()
    
    @pytest.mark.asyncio
    async def test_401_on_public_endpoint(self):
        """Test a failed login does not count as an expired session."""
        guard = SessionGuard()
        
        def handler(request):
            return httpx.Response(401, json={"message": "Invalid credentials"})
        
        with pytest.raises(ApiError) as exc_info:
            await make_client(handler, guard=guard).post("/auth/login", {"username": "x"})
        
        assert not isinstance(exc_info.value, SessionExpiredError)
        assert exc_info.value.message == "Invalid credentials"
        assert not guard.handled
    
    @pytest.mark.asyncio
    async def test_network_failure(self):
        """Test transport errors become ApiError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        
        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).get("/transactions")
        
        assert "connection refused" in str(exc_info.value)


class TestCashierService:
    """Test cashier endpoints."""
    
    @pytest.mark.asyncio
    async def test_get_chip_ledger(self):
        """Test a day's movements are parsed into transactions."""
        def handler(request):
            assert request.url.path == "/api/cashier/chip-ledger/date/2024-01-15"
            return httpx.Response(200, json={
                "success": True,
                "data": {
                    "has_data": True,
                    "movements": [
                        {"transaction_type": "buy_in", "chips_500": 2,
                         "created_at": "2024-01-15T12:00:00Z"},
                        {"transaction_type": "cash_payout", "chips_100": 3,
                         "created_at": "2024-01-15T13:00:00Z"},
                    ],
                },
            })
        
        service = CashierService(make_client(handler))
        transactions = await service.get_chip_ledger("2024-01-15")
        
        assert [t.kind for t in transactions] == ["buy_in", "cash_payout"]
        assert transactions[0].breakdown.total() == 1000
    
    @pytest.mark.asyncio
    async def test_get_transactions_bare_list(self):
        """Test a bare list body."""
        def handler(request):
            return httpx.Response(200, json=[{"transaction_type": "settle_credit", "amount": 5000}])
        
        transactions = await CashierService(make_client(handler)).get_transactions()
        
        assert len(transactions) == 1
        assert transactions[0].amount == 5000
    
    @pytest.mark.asyncio
    async def test_get_float_history_for_session(self):
        """Test the session id is part of the path."""
        def handler(request):
            assert request.url.path == "/api/cashier/float-history/s-9"
            return httpx.Response(200, json={"data": [{"float_amount": "1000"}]})
        
        additions = await CashierService(make_client(handler)).get_float_history("s-9")
        
        assert additions == [{"float_amount": "1000"}]
    
    @pytest.mark.asyncio
    async def test_requires_token(self):
        """Test requests without a token fail before hitting the network."""
        handler = MagicMock()
        service = CashierService(make_client(handler, token=""))
        
        with pytest.raises(ApiError) as exc_info:
            await service.get_transactions()
        
        assert str(exc_info.value) == NO_TOKEN_MESSAGE
        handler.assert_not_called()
