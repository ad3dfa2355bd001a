"""
Doctor Directory Loader.

Fetches doctor accounts for the booking workflow. A failed fetch is not
fatal: the user is told the list is degraded, the fetch is retried once
after a fixed delay, and if that fails too the directory's local answer is
used. load() never raises.

The retry is bound to a CancellationToken owned by the workflow. Once the
workflow is torn down its token is cancelled and any result that arrives
afterwards is dropped without touching workflow state.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from workflow_status import StatusTracker

from ..domain.models import AccountRecord
from .directory import DirectoryService

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class CancellationToken:
    """Flag tied to the lifetime of one workflow."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled


class RetryCancelled(Exception):
    """The owner of a scheduled retry went away before it finished."""


class ScheduledRetry:
    """
    Runs an operation once after a fixed delay, unless cancelled.

    The token is checked both when the delay expires and when the operation
    returns, so a result that lands after cancellation is discarded.
    """

    def __init__(self, delay: float, token: CancellationToken, sleep: Sleep = asyncio.sleep):
        self.delay = delay
        self.token = token
        self._sleep = sleep

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Wait for the delay, then run the operation.

        Raises:
            RetryCancelled: If the token was cancelled before or during the run
        """
        await self._sleep(self.delay)
        if self.token.is_cancelled:
            raise RetryCancelled()
        result = await operation()
        if self.token.is_cancelled:
            raise RetryCancelled()
        return result


class DoctorDirectoryLoader:
    """Loads doctor accounts with one delayed retry and a local fallback."""

    def __init__(
        self,
        directory: DirectoryService,
        status: StatusTracker,
        retry_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the loader.

        Args:
            directory: The directory service to query
            status: Tracker that receives degraded notices
            retry_delay: Seconds to wait before the single retry
            sleep: Awaitable sleep used for the delay
        """
        self._directory = directory
        self._status = status
        self._retry_delay = retry_delay
        self._sleep = sleep

    async def load(self, token: Optional[CancellationToken] = None) -> List[AccountRecord]:
        """
        Load every doctor account.

        Args:
            token: Cancellation token of the owning workflow

        Returns:
            The loaded records; the local fallback if both attempts failed;
            an empty list if the token was cancelled along the way
        """
        token = token or CancellationToken()

        try:
            records = await self._directory.get_all_doctors()
        except Exception as e:
            if token.is_cancelled:
                return []
            logger.warning(f"Doctor directory load failed, retrying in {self._retry_delay}s: {e}")
            self._status.report_key("directory_degraded")
        else:
            if token.is_cancelled:
                return []
            return records

        retry = ScheduledRetry(self._retry_delay, token, sleep=self._sleep)
        try:
            records = await retry.run(self._directory.get_all_doctors)
        except RetryCancelled:
            logger.info("Doctor directory retry discarded: workflow was closed")
            return []
        except Exception as e:
            if token.is_cancelled:
                return []
            logger.error(f"Doctor directory retry failed, using local data: {e}")
            self._status.report_key("directory_local_fallback")
            return self._directory.resolve_local()

        logger.info(f"Doctor directory retry succeeded ({len(records)} doctors)")
        self._status.clear()
        return records
