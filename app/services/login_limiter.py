import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class _Attempts:
    count: int
    last_attempt: float


class LoginRateLimiter:
    """
    Per-username failed login counter. Created once per process (app lifespan)
    and shared by the login route through a dependency.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.clock = clock
        self._attempts: Dict[str, _Attempts] = {}
        self._lock = threading.Lock()

    def is_allowed(self, username: str) -> bool:
        with self._lock:
            attempts = self._attempts.get(username)
            if not attempts or attempts.count < self.max_attempts:
                return True
            if self.clock() - attempts.last_attempt < self.lockout_seconds:
                return False
            # Lockout expired
            del self._attempts[username]
            return True

    def record(self, username: str, success: bool) -> None:
        with self._lock:
            if success:
                self._attempts.pop(username, None)
                return
            now = self.clock()
            self._prune(now)
            attempts = self._attempts.setdefault(username, _Attempts(0, 0.0))
            attempts.count += 1
            attempts.last_attempt = now

    def _prune(self, now: float) -> None:
        """Drop counters whose last failure is older than the lockout window."""
        expired = [
            name
            for name, attempts in self._attempts.items()
            if now - attempts.last_attempt >= self.lockout_seconds
        ]
        for name in expired:
            del self._attempts[name]
