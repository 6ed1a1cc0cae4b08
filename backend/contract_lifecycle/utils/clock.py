"""비즈니스 로직이 벽시계 대신 참조하는 Clock 협력 객체입니다."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a naive UTC datetime."""

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.utcnow()


class FixedClock(Clock):
    """Deterministic clock for tests and replayed sweeps."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current
