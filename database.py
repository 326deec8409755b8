import logging
import threading
from typing import Dict, List, Optional, Protocol

from fastapi import Request

from schemas import User

# This file acts as a simulated, in-memory database.
# In a real-world application, you would replace InMemoryUserStore with a
# store backed by a persistent database like PostgreSQL, MySQL, or MongoDB.

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Storage operations the /user endpoints rely on."""

    def create(self, user: User) -> None:
        ...

    def list(self) -> List[User]:
        ...

    def get(self, email: str) -> Optional[User]:
        ...

    def update(self, email: str, user: User) -> None:
        ...

    def delete(self, email: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        ...


class InMemoryUserStore:
    """User records keyed by email, kept for the lifetime of the process.

    Every operation is a single dictionary access guarded by a lock, so
    concurrent requests never see a half-written map. There is no locking
    across operations: two writers on the same key end with the last one.
    """

    def __init__(self) -> None:
        logger.warning("Using the in-memory user store, all users are lost on restart.")
        self._lock = threading.Lock()
        # The keys are user emails, the values are the stored records
        self._users: Dict[str, User] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def create(self, user: User) -> None:
        # A duplicate email silently replaces the existing record
        with self._lock:
            self._users[user.email] = user
        logger.debug("Stored user %s", user.email)

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def get(self, email: str) -> Optional[User]:
        with self._lock:
            return self._users.get(email)

    def update(self, email: str, user: User) -> None:
        # Keyed by the given email, not by user.email
        with self._lock:
            self._users[email] = user
        logger.debug("Replaced user %s", email)

    def delete(self, email: str) -> None:
        with self._lock:
            removed = self._users.pop(email, None)
        if removed is not None:
            logger.debug("Deleted user %s", email)

    def clear(self) -> None:
        with self._lock:
            self._users.clear()


# Dependency function returning the store owned by the running app
def get_store(request: Request) -> UserStore:
    return request.app.state.store
