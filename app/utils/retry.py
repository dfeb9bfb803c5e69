"""
SEA Catering API - Storage Retry Helper.

Retries a unit of database work when the failure looks transient (timeouts,
dropped connections). Anything else is re-raised on the first attempt.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy import exc as sa_exc

from app.utils.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_MESSAGE_MARKERS = ("timeout", "timed out", "connect", "econnreset", "connection reset")


def is_transient_error(error: BaseException) -> bool:
    """
    Decide whether a storage error is worth retrying.

    Args:
        error: Exception raised by the unit of work.

    Returns:
        bool: True for timeouts and connection resets.
    """
    if isinstance(error, (sa_exc.TimeoutError, sa_exc.DisconnectionError)):
        return True
    if isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated:
        return True
    if isinstance(error, (sa_exc.OperationalError, TimeoutError, ConnectionError)):
        message = str(error).lower()
        return any(marker in message for marker in TRANSIENT_MESSAGE_MARKERS) or isinstance(
            error, (TimeoutError, ConnectionError)
        )
    return False


def run_with_retry(
    operation: Callable[[], T],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    description: str = "database operation",
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Run ``operation`` with exponential backoff on transient storage errors.

    Args:
        operation: Zero-argument callable performing one whole transaction.
        max_attempts: Total attempts including the first one.
        base_delay: Delay before the second attempt, doubled afterwards.
        description: Label used in log lines.
        sleep: Injected sleep function (tests pass a no-op).

    Returns:
        Whatever ``operation`` returns.

    Raises:
        StorageUnavailableError: When every attempt failed transiently.
        Exception: Any non-transient error, unchanged and without retry.
    """
    sleep = sleep or time.sleep
    delay = base_delay

    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except Exception as e:
            if not is_transient_error(e):
                raise
            if attempt == max_attempts:
                logger.error(f"{description} failed after {max_attempts} attempts: {e}")
                raise StorageUnavailableError() from e

            logger.warning(
                f"{description} failed (attempt {attempt}/{max_attempts}), retrying in {delay:.2f}s: {e}"
            )
            sleep(delay)
            delay *= 2

    # max_attempts < 1
    raise StorageUnavailableError()
