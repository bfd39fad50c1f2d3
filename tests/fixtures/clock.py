from datetime import datetime, timedelta


class FrozenClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime = datetime(2026, 1, 1, 12, 0, 0)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now
