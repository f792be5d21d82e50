from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

logger = logging.getLogger("trustlink.retry")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry with exponential backoff.

    Attempt n (1-based) that fails and is not the last one is followed by
    base_delay * 2**(n-1) seconds of sleep. The last failure is re-raised as-is.
    """

    max_attempts: int = 3
    base_delay: float = 2.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2 ** (attempt - 1))

    def call(self, fn: Callable[..., T], *args, label: str = "operation", **kwargs) -> T:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                if attempt == self.max_attempts:
                    logger.error("%s failed on final attempt %d/%d: %s", label, attempt, self.max_attempts, e)
                    raise

                delay = self.delay_for(attempt)
                logger.warning(
                    "%s attempt %d/%d failed: %s (retrying in %.1fs)",
                    label, attempt, self.max_attempts, e, delay,
                )
                self.sleep(delay)

        # unreachable: the loop either returns or raises
        raise RuntimeError(f"{label}: retry loop exited without result")
