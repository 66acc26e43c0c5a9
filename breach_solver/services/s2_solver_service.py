"""Service de résolution : pilotage du worker en arrière-plan.

Un seul worker actif par service. Un nouveau `start()` ou un `reset()`
termine brutalement le processus en cours (aucun résultat partiel).
"""

from __future__ import annotations

import multiprocessing
from multiprocessing.process import BaseProcess
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from breach_solver.config import WORKER_CONFIG
from breach_solver.lib.s3_search import SolveRequest
from breach_solver.lib.s4_aggregator import SolveResult
from breach_solver.lib.s5_progress import ProgressEvent
from breach_solver.lib.s7_debug import DebugLogger
from .s0_request_service import describe_request, validate_request
from .s1_solve_worker import MSG_COMPLETE, MSG_ERROR, MSG_PROGRESS, MSG_START, worker_main


class SolverWorkerError(RuntimeError):
    """Erreur remontée par le worker de résolution."""


ProgressCallback = Callable[[ProgressEvent], None]
CompleteCallback = Callable[[SolveResult], None]
ErrorCallback = Callable[[str], None]


@dataclass
class SolveTask:
    """Résolution en cours (processus + files + listener)."""
    generation: int
    request: SolveRequest
    process: BaseProcess
    inbox: object
    outbox: object
    listener: Optional[threading.Thread] = None
    stop_event: threading.Event = field(default_factory=threading.Event)
    done_event: threading.Event = field(default_factory=threading.Event)
    dispatch_lock: threading.RLock = field(default_factory=threading.RLock)
    result: Optional[SolveResult] = None
    error: Optional[str] = None
    cancelled: bool = False


class SolverService:
    """Lance, annule et suit les résolutions exécutées dans un processus séparé."""

    def __init__(
        self,
        *,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        log_dir: Optional[str] = None,
        verbose: bool = False,
        config: Optional[dict] = None,
    ):
        self.config = {**WORKER_CONFIG, **(config or {})}
        self.on_progress = on_progress
        self.on_complete = on_complete
        self.on_error = on_error
        self.verbose = verbose
        self.debug_logger = DebugLogger(log_dir) if log_dir else None
        self._context = multiprocessing.get_context(self.config["start_method"])
        self._lock = threading.Lock()
        self._task: Optional[SolveTask] = None
        self._generation = 0

    @property
    def is_running(self) -> bool:
        task = self._task
        return task is not None and not task.done_event.is_set()

    def start(self, request: SolveRequest) -> int:
        """Valide la requête, annule la résolution en cours et démarre le worker."""
        validate_request(request)
        self.cancel()

        with self._lock:
            self._generation += 1
            inbox = self._context.Queue(maxsize=1)
            outbox = self._context.Queue(maxsize=self.config["progress_queue_size"])
            process = self._context.Process(
                target=worker_main,
                args=(inbox, outbox),
                name=f"breach-solver-{self._generation}",
                daemon=True,
            )
            task = SolveTask(
                generation=self._generation,
                request=request,
                process=process,
                inbox=inbox,
                outbox=outbox,
            )
            process.start()
            inbox.put((MSG_START, request.to_dict()))

            task.listener = threading.Thread(
                target=self._listen,
                args=(task,),
                name=f"breach-solver-listener-{task.generation}",
                daemon=True,
            )
            self._task = task
            task.listener.start()

        if self.verbose:
            print(f"[SOLVER] Démarrage #{task.generation} {describe_request(request)}")
        return task.generation

    def cancel(self) -> bool:
        """Termine brutalement la résolution en cours. Retourne True si une tâche a été annulée."""
        with self._lock:
            task = self._task
            self._task = None

        if task is None:
            return False
        with task.dispatch_lock:
            if task.done_event.is_set():
                self._close_queues(task)
                return False
            task.cancelled = True
            task.stop_event.set()

        if task.process.is_alive():
            task.process.terminate()
        task.process.join(timeout=self.config["join_timeout"])
        if task.listener is not None and task.listener is not threading.current_thread():
            task.listener.join(timeout=self.config["join_timeout"])
        task.done_event.set()
        self._close_queues(task)

        if self.debug_logger:
            self.debug_logger.log_solve(
                task.request.width, task.request.height, task.request.buffer_size,
                None, cancelled=True, metadata={"generation": task.generation},
            )
        if self.verbose:
            print(f"[SOLVER] Résolution #{task.generation} annulée")
        return True

    def reset(self) -> None:
        """Annule toute résolution en cours."""
        self.cancel()

    def wait(self, timeout: Optional[float] = None) -> Optional[SolveResult]:
        """Attend la fin de la résolution courante ; None si annulée ou délai dépassé."""
        task = self._task
        if task is None:
            return None
        if not task.done_event.wait(timeout):
            return None
        if task.cancelled:
            return None
        return task.result

    def solve(self, request: SolveRequest, timeout: Optional[float] = None) -> Optional[SolveResult]:
        """Résolution bloquante. Lève SolverWorkerError si le worker échoue."""
        self.start(request)
        task = self._task
        result = self.wait(timeout)
        if task is not None and task.error is not None:
            raise SolverWorkerError(task.error)
        return result

    def _listen(self, task: SolveTask) -> None:
        """Boucle du listener : décode les messages du worker et appelle les callbacks."""
        poll = self.config["poll_interval"]
        while not task.stop_event.is_set():
            try:
                kind, payload = task.outbox.get(timeout=poll)
            except queue.Empty:
                if not task.process.is_alive() and task.outbox.empty():
                    self._finish(task, error=f"Worker arrêté (exitcode={task.process.exitcode})")
                    return
                continue
            except (EOFError, OSError):
                # Files fermées par cancel()
                return

            if task.stop_event.is_set():
                return

            if kind == MSG_PROGRESS:
                event = ProgressEvent.from_dict(payload)
                with task.dispatch_lock:
                    if task.stop_event.is_set():
                        return
                    if self.debug_logger:
                        self.debug_logger.log_progress(event)
                    if self.on_progress:
                        self.on_progress(event)
            elif kind == MSG_COMPLETE:
                self._finish(task, result=SolveResult.from_dict(payload))
                return
            elif kind == MSG_ERROR:
                self._finish(task, error=str(payload))
                return

    def _finish(
        self,
        task: SolveTask,
        result: Optional[SolveResult] = None,
        error: Optional[str] = None,
    ) -> None:
        # cancel() prend le même verrou : aucun callback après son retour
        with task.dispatch_lock:
            if task.stop_event.is_set():
                return
            task.result = result
            task.error = error
            task.process.join(timeout=self.config["join_timeout"])
            try:
                if result is not None:
                    if self.debug_logger:
                        self.debug_logger.log_solve(
                            task.request.width, task.request.height, task.request.buffer_size,
                            result, metadata={"generation": task.generation},
                        )
                    if self.verbose:
                        print(
                            f"[SOLVER] Terminé #{task.generation}: {len(result.solutions)} solution(s), "
                            f"{result.iterations_processed} itérations, {result.elapsed_seconds:.2f}s"
                        )
                    if self.on_complete:
                        self.on_complete(result)
                elif error is not None:
                    if self.verbose:
                        print(f"[ERREUR] Worker #{task.generation}: {error}")
                    if self.on_error:
                        self.on_error(error)
            finally:
                task.done_event.set()

    @staticmethod
    def _close_queues(task: SolveTask) -> None:
        for q in (task.inbox, task.outbox):
            q.cancel_join_thread()
            q.close()
