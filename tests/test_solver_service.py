import multiprocessing
import queue
import threading
import time

import pytest

from breach_solver.lib.s4_aggregator import SolveResult
from breach_solver.lib.s5_progress import ProgressEvent
from breach_solver.services import SolveRequestError, SolverService, run_solve, worker_main
from breach_solver.services.s2_solver_service import SolveTask
from breach_solver.services.s1_solve_worker import (
    MSG_COMPLETE,
    MSG_ERROR,
    MSG_PROGRESS,
    MSG_START,
    QueueProgressSink,
)

TIMEOUT = 60


class TestWorkerProtocol:
    """Messages du worker, exécuté dans le processus de test."""

    def test_run_solve_posts_complete_message(self, make_request, two_daemon_rows):
        outbox = queue.Queue()
        request = make_request(two_daemon_rows, 2, [["1C", "55"], ["BD", "E9"]])
        run_solve(request.to_dict(), outbox)

        kind, payload = outbox.get_nowait()
        assert kind == MSG_COMPLETE
        assert len(payload["solutions"]) == 2
        assert outbox.empty()

    def test_run_solve_reports_errors(self):
        outbox = queue.Queue()
        run_solve({"grid": [1]}, outbox)
        kind, payload = outbox.get_nowait()
        assert kind == MSG_ERROR
        assert "TypeError" in payload

    def test_worker_main_waits_for_start_message(self, make_request, two_daemon_rows):
        inbox, outbox = queue.Queue(), queue.Queue()
        request = make_request(two_daemon_rows, 2, [["1C", "55"]], progress_interval=1)
        inbox.put((MSG_START, request.to_dict()))
        worker_main(inbox, outbox)

        kinds = []
        while not outbox.empty():
            kinds.append(outbox.get_nowait()[0])
        assert kinds[-1] == MSG_COMPLETE
        assert set(kinds[:-1]) <= {MSG_PROGRESS}

    def test_worker_main_rejects_unknown_message(self):
        inbox, outbox = queue.Queue(), queue.Queue()
        inbox.put(("bogus", None))
        worker_main(inbox, outbox)
        assert outbox.get_nowait()[0] == MSG_ERROR

    def test_progress_sink_drops_when_full(self):
        outbox = queue.Queue(maxsize=1)
        sink = QueueProgressSink(outbox)
        event = ProgressEvent(0.1, 10, 100, 0, 1, 0.0)
        sink(event)
        sink(event)
        assert sink.dropped == 1
        assert outbox.qsize() == 1


class TestSolverService:
    """Worker en processus séparé piloté par le service."""

    def test_solve_round_trip(self, make_request, two_daemon_rows):
        completions = []
        service = SolverService(on_complete=completions.append)
        try:
            result = service.solve(make_request(two_daemon_rows, 2, [["1C", "55"], ["BD", "E9"]]), timeout=TIMEOUT)
        finally:
            service.reset()

        assert result is not None
        assert [s.completed for s in result.solutions] == [(0,), (1,)]
        assert completions == [result]

    def test_progress_events_are_forwarded(self, make_request, large_rows):
        events = []
        service = SolverService(on_progress=events.append)
        request = make_request(
            large_rows, 8, [["1C", "B2"]],
            max_iterations=3000, progress_interval=500, prune_dead_branches=False,
        )
        try:
            result = service.solve(request, timeout=TIMEOUT)
        finally:
            service.reset()

        assert result.iterations_processed == 3000
        assert [e.iterations_processed for e in events] == [500, 1000, 1500, 2000, 2500]

    def test_cancel_discards_running_solve(self, make_request, large_rows):
        completions = []
        service = SolverService(on_complete=completions.append)
        big = make_request(large_rows, 8, [["8E", "8E", "8E"]], max_iterations=50_000_000, prune_dead_branches=False)

        service.start(big)
        time.sleep(0.5)
        assert service.is_running

        assert service.cancel() is True
        assert service.is_running is False
        assert service.wait(timeout=1) is None
        assert service.cancel() is False
        assert completions == []

    def test_new_solve_replaces_running_one(self, make_request, large_rows, two_daemon_rows):
        completions = []
        service = SolverService(on_complete=completions.append)
        big = make_request(large_rows, 8, [["8E", "8E", "8E"]], max_iterations=50_000_000, prune_dead_branches=False)
        small = make_request(two_daemon_rows, 2, [["1C", "55"]])

        try:
            first = service.start(big)
            result = service.solve(small, timeout=TIMEOUT)
        finally:
            service.reset()

        assert first == 1
        assert result is not None
        assert result.best.path_coordinates == [(0, 0), (1, 0)]
        assert completions == [result]

    def test_invalid_request_is_rejected_before_start(self, make_request, two_daemon_rows):
        service = SolverService()
        with pytest.raises(SolveRequestError):
            service.start(make_request(two_daemon_rows, 0, [["1C"]]))
        assert service.is_running is False

    def test_debug_logs_are_written(self, tmp_path, make_request, two_daemon_rows):
        service = SolverService(log_dir=str(tmp_path))
        try:
            service.solve(make_request(two_daemon_rows, 2, [["1C", "55"]]), timeout=TIMEOUT)
        finally:
            service.reset()

        logs = list(tmp_path.glob("solves_*.jsonl"))
        assert len(logs) == 1
        assert service.debug_logger.get_summary()["solves"] == 1


class _IdleProcess:
    """Processus déjà terminé (tests du dispatch sans worker réel)."""
    exitcode = 0

    def is_alive(self):
        return False

    def join(self, timeout=None):
        pass

    def terminate(self):
        pass


class TestCallbackDispatch:
    """Aucun callback ne doit partir après le retour de cancel()."""

    def _attach_task(self, service, request):
        task = SolveTask(
            generation=1,
            request=request,
            process=_IdleProcess(),
            inbox=multiprocessing.Queue(),
            outbox=multiprocessing.Queue(),
        )
        service._task = task
        return task

    def test_finish_after_cancel_does_not_dispatch(self, make_request, two_daemon_rows):
        completions = []
        service = SolverService(on_complete=completions.append)
        task = self._attach_task(service, make_request(two_daemon_rows, 2, [["1C", "55"]]))

        assert service.cancel() is True
        service._finish(task, result=SolveResult(total_targets=1))

        assert completions == []
        assert task.result is None

    def test_cancel_waits_for_running_completion_callback(self, make_request, two_daemon_rows):
        order = []
        entered = threading.Event()
        release = threading.Event()

        def on_complete(result):
            entered.set()
            release.wait(TIMEOUT)
            order.append("complete")

        service = SolverService(on_complete=on_complete)
        task = self._attach_task(service, make_request(two_daemon_rows, 2, [["1C", "55"]]))

        finisher = threading.Thread(target=service._finish, args=(task,), kwargs={"result": SolveResult()})
        finisher.start()
        assert entered.wait(TIMEOUT)

        cancelled = []

        def cancel():
            cancelled.append(service.cancel())
            order.append("cancel")

        canceller = threading.Thread(target=cancel)
        canceller.start()
        time.sleep(0.2)
        assert canceller.is_alive()

        release.set()
        canceller.join(TIMEOUT)
        finisher.join(TIMEOUT)

        assert order == ["complete", "cancel"]
        assert cancelled == [False]
        assert task.done_event.is_set()
