from ghprs.core.time.abc import Time
from ghprs.core.time.fake import FakeTime
from ghprs.core.time.real import RealTime

__all__ = [
    "FakeTime",
    "RealTime",
    "Time",
]
