from ghprs.core.notifier.abc import Notifier
from ghprs.core.notifier.fake import FakeNotifier
from ghprs.core.notifier.real import RealNotifier

__all__ = [
    "FakeNotifier",
    "Notifier",
    "RealNotifier",
]
