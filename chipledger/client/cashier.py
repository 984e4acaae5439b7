"""Cashier endpoints that feed the chip ledger."""
from datetime import date
from typing import Any, Mapping, Optional, Union

from chipledger.client.api import ApiClient, ApiError, ApiResponse, NO_TOKEN_MESSAGE
from chipledger.ledger.transactions import Transaction
from chipledger.utils.logger import get_logger

logger = get_logger(__name__)


def _records(data: Any, key: str) -> list[Mapping]:
    """Pull a list of records out of ``data`` or ``data[key]``."""
    if isinstance(data, Mapping):
        data = data.get(key) or []
    if not isinstance(data, list):
        return []
    return [r for r in data if isinstance(r, Mapping)]


class CashierService:
    """Fetches ledger data for the cashier dashboards."""
    
    def __init__(self, api: ApiClient):
        self.api = api
    
    def _require_token(self) -> None:
        if not self.api.token:
            raise ApiError(NO_TOKEN_MESSAGE)
    
    async def get_chip_ledger(self, day: Union[date, str]) -> list[Transaction]:
        """Get the chip movements recorded on one day.
        
        Args:
            day: The business day, as a date or ``YYYY-MM-DD``.
            
        Returns:
            Transactions in the order the backend returned them.
        """
        self._require_token()
        day_str = day.isoformat() if isinstance(day, date) else day
        body = await self.api.get(f"/cashier/chip-ledger/date/{day_str}")
        
        movements = _records(ApiResponse.from_body(body).data, "movements")
        logger.info(f"Fetched {len(movements)} chip movements for {day_str}")
        return [Transaction.from_record(m) for m in movements]
    
    async def get_transactions(self) -> list[Transaction]:
        """Get all transactions of the current session."""
        self._require_token()
        body = await self.api.get("/transactions")
        records = _records(ApiResponse.from_body(body).data, "transactions")
        return [Transaction.from_record(r) for r in records]
    
    async def get_float_history(self, session_id: Optional[str] = None) -> list[dict]:
        """Get float additions, optionally for a single session."""
        self._require_token()
        endpoint = "/cashier/float-history"
        if session_id:
            endpoint += f"/{session_id}"
        body = await self.api.get(endpoint)
        return [dict(r) for r in _records(ApiResponse.from_body(body).data, "additions")]
