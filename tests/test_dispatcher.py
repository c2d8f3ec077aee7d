"""
Tests for fire-and-forget job dispatch.
"""

import logging
import threading

import pytest

from zebra_bridge.dispatcher import JobDispatcher
from zebra_bridge.exceptions import DispatcherClosedError


class TestJobDispatcher:
    """Submission never waits for the printer."""

    def test_submit_returns_job_id_before_write(self, dispatcher, transport, gate):
        transport.gate = gate

        job_id = dispatcher.submit(b"label")

        assert job_id.startswith("JOB-")
        assert transport.writes == []
        assert dispatcher.pending_count == 1

        gate.set()
        assert dispatcher.join(timeout=5)
        assert transport.writes == [b"label"]
        assert dispatcher.pending_count == 0

    def test_job_ids_are_unique(self, dispatcher):
        ids = {dispatcher.submit(b"x") for _ in range(20)}
        assert len(ids) == 20

    def test_concurrent_submissions_all_reach_transport(self, dispatcher, transport):
        payloads = [f"label-{i}".encode() for i in range(25)]

        threads = [threading.Thread(target=dispatcher.submit, args=(p,)) for p in payloads]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert dispatcher.join(timeout=10)
        assert len(transport.writes) == len(payloads)
        assert sorted(transport.writes) == sorted(payloads)

    def test_connect_failure_is_logged_not_raised(self, dispatcher, transport, caplog):
        transport.fail_connect = True

        with caplog.at_level(logging.ERROR, logger="zebra_bridge"):
            dispatcher.submit(b"label")
            assert dispatcher.join(timeout=5)

        assert transport.writes == []
        assert any("failed" in r.getMessage() for r in caplog.records)

    def test_unconfigured_printer_fails_at_dispatch(self, unconfigured_link, transport, caplog):
        dispatcher = JobDispatcher(unconfigured_link, max_workers=1)
        try:
            with caplog.at_level(logging.ERROR, logger="zebra_bridge"):
                dispatcher.submit(b"label")
                assert dispatcher.join(timeout=5)
        finally:
            dispatcher.shutdown(wait=True)

        assert transport.connects == []
        assert any("No printer configured" in r.getMessage() for r in caplog.records)

    def test_unexpected_error_is_logged(self, link, caplog):
        def explode(payload):
            raise RuntimeError("boom")

        link.send_bytes = explode
        dispatcher = JobDispatcher(link, max_workers=1)
        try:
            with caplog.at_level(logging.ERROR, logger="zebra_bridge"):
                dispatcher.submit(b"label")
                assert dispatcher.join(timeout=5)
        finally:
            dispatcher.shutdown(wait=True)

        assert any("unexpectedly" in r.getMessage() for r in caplog.records)

    def test_failed_job_does_not_stop_later_jobs(self, dispatcher, transport):
        transport.fail_writes = True
        dispatcher.submit(b"first")
        assert dispatcher.join(timeout=5)

        transport.fail_writes = False
        dispatcher.submit(b"second")
        assert dispatcher.join(timeout=5)

        assert transport.writes == [b"second"]

    def test_submit_after_shutdown_raises(self, dispatcher):
        dispatcher.shutdown()
        assert dispatcher.closed is True
        with pytest.raises(DispatcherClosedError):
            dispatcher.submit(b"label")

    def test_shutdown_is_idempotent(self, dispatcher):
        dispatcher.shutdown()
        dispatcher.shutdown()

    def test_shutdown_cancels_queued_jobs(self, link, transport, gate):
        transport.gate = gate
        dispatcher = JobDispatcher(link, max_workers=1)
        for i in range(3):
            dispatcher.submit(f"label-{i}".encode())

        dispatcher.shutdown(wait=False)
        gate.set()
        assert dispatcher.join(timeout=5)

        # At most the job already running when we shut down gets through
        assert len(transport.writes) <= 1
