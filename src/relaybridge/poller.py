"""Bounded status polling.

Blocks the caller until a remote resource reports "success", the deadline
passes, or a status check fails.

Poll flow:
1. Record the start time
2. Check immediately (no initial delay)
3. Return the payload on success
4. Raise PollTimeoutError if the deadline has passed
5. Otherwise sleep one interval and check again

Checks are strictly sequential: the next sleep starts only after the
previous check has returned. The deadline is evaluated at check time, so
the worst-case overshoot is one interval.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from relaybridge.exceptions import PollTimeoutError, RelayApiError
from relaybridge.models import SUCCESS_STATUS

logger = logging.getLogger(__name__)

StatusCheck = Callable[[], Awaitable[dict]]


async def wait_for_success(
    check: StatusCheck,
    interval: float = 2.0,
    timeout: float = 60.0,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> dict:
    """Poll `check` until it reports success.

    Args:
        check: Async callable returning the status payload
        interval: Seconds between checks
        timeout: Seconds after which polling gives up
        sleep: Awaitable used to wait between checks
        clock: Monotonic time source in seconds

    Returns:
        The full status payload that reported success

    Raises:
        PollTimeoutError: If the deadline passed without success
        Exception: Whatever the status check raised, unchanged
    """
    start = clock()
    attempts = 0
    last: Optional[dict] = None

    while True:
        last = await check()
        attempts += 1
        if not isinstance(last, dict):
            raise RelayApiError("status", f"Malformed status response: {last!r}", body=last)
        status = last.get("status")
        logger.info(f"Checking status: {status} (attempt {attempts})")

        if status == SUCCESS_STATUS:
            return last

        elapsed = clock() - start
        if elapsed > timeout:
            logger.warning(f"Status still {status} after {elapsed:.1f}s, giving up")
            raise PollTimeoutError(timeout, attempts, last)

        await sleep(interval)
