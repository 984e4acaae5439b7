"""One-time handling of an expired login session."""
from typing import Callable

from chipledger.utils.logger import get_logger

logger = get_logger(__name__)


class SessionGuard:
    """Owns the "session expired" side effect so it runs once per login.
    
    Several requests can fail with 401 at the same time; only the first one
    should clear credentials and notify the user.
    """
    
    def __init__(self):
        self._handled = False
        self._callbacks: list[Callable[[], None]] = []
    
    @property
    def handled(self) -> bool:
        """Whether expiry has already been handled since the last reset."""
        return self._handled
    
    def on_expired(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback to run when the session expires.
        
        Can be used as a decorator.
        """
        self._callbacks.append(callback)
        return callback
    
    def handle_expired(self) -> bool:
        """Run the expiry callbacks unless they already ran.
        
        Returns:
            True if this call handled the expiry, False if it was a repeat.
        """
        if self._handled:
            return False
        self._handled = True
        
        logger.warning("Session expired, clearing credentials")
        for callback in self._callbacks:
            callback()
        return True
    
    def reset(self) -> None:
        """Re-arm the guard after a fresh login."""
        self._handled = False
