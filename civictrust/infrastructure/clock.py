"""Wall clock for production — epoch seconds, the same unit as a block timestamp."""

import time


class SystemClock:
    def now(self) -> int:
        return int(time.time())
