import enum
import time
from collections.abc import Callable
from dataclasses import dataclass


class Level(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    level: Level
    expires_at: float


class NotificationCenter:
    """Transient banner notifications that dismiss themselves after a timeout."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._items: list[Notification] = []

    def post(self, message: str, level: Level = Level.INFO, ttl: float = 3.0) -> Notification:
        notification = Notification(message, level, self._clock() + ttl)
        self._items.append(notification)
        return notification

    def active(self) -> list[Notification]:
        """Notifications still on screen; expired ones are dropped."""
        now = self._clock()
        self._items = [n for n in self._items if n.expires_at > now]
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()
