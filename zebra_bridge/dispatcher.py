"""
Job Dispatcher
==============

Fire-and-forget print submission. The HTTP handler gets a job id back as soon
as the job is queued; the write to the printer happens later on a shared
worker pool and its outcome is only logged.

Jobs carry no ordering guarantee: concurrent submissions may reach the
printer in any order. PrinterLink still keeps each payload contiguous on the
wire.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future, wait as wait_futures
from typing import Optional, Set

from .connection import PrinterLink
from .exceptions import BridgeError, DispatcherClosedError
from .models import PrintJob
from .config import DISPATCH_WORKERS

logger = logging.getLogger(__name__)


class JobDispatcher:
    """Hands print payloads to the printer link off the request thread."""

    def __init__(self, link: PrinterLink, max_workers: int = DISPATCH_WORKERS):
        self.link = link
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='print-job')
        self._pending: Set[Future] = set()
        self._pending_lock = threading.Lock()
        self._closed = False

    @property
    def pending_count(self) -> int:
        with self._pending_lock:
            return len(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, payload: bytes, source_ip: Optional[str] = None) -> str:
        """
        Queue a payload for printing and return its job id immediately.

        Raises:
            DispatcherClosedError: The dispatcher was shut down
        """
        job = PrintJob(payload=payload, source_ip=source_ip)

        with self._pending_lock:
            if self._closed:
                raise DispatcherClosedError()
            future = self._executor.submit(self._run, job)
            self._pending.add(future)
        future.add_done_callback(self._discard)

        logger.debug("Queued %s (%d bytes) from %s", job.id, job.size, job.source_ip or "unknown")
        return job.id

    def _discard(self, future: Future):
        with self._pending_lock:
            self._pending.discard(future)

    def _run(self, job: PrintJob):
        job.start()
        try:
            self.link.send_bytes(job.payload)
        except BridgeError as e:
            job.fail(str(e))
            logger.error("Print job %s failed: %s", job.id, e)
        except Exception as e:
            job.fail(str(e))
            logger.exception("Print job %s failed unexpectedly", job.id)
        else:
            job.complete()
            logger.info("Print job %s sent (%d bytes in %.2fs)", job.id, job.size, job.duration or 0.0)
        return job

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the currently pending jobs. Returns False on timeout."""
        with self._pending_lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = wait_futures(pending, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = False):
        """Stop accepting jobs and cancel those not yet started."""
        with self._pending_lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending)
        # cancel() runs the done callbacks, which take the pending lock
        cancelled = sum(1 for f in pending if f.cancel())
        if cancelled:
            logger.warning("Cancelled %d queued print job(s)", cancelled)
        self._executor.shutdown(wait=wait, cancel_futures=True)
