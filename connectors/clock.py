"""Time source used by simulated backends."""

import threading
import time
from datetime import datetime, timezone
from typing import Optional


class SystemClock:
    """Wall clock whose sleeps can be aborted through a threading.Event."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float, cancel: Optional[threading.Event] = None) -> bool:
        """Sleep for `seconds`.

        Returns:
            True if the sleep ran to completion, False if `cancel` was set
        """
        if seconds <= 0:
            return not (cancel is not None and cancel.is_set())
        if cancel is None:
            time.sleep(seconds)
            return True
        return not cancel.wait(seconds)
