"""Worker de résolution : processus isolé, messages uniquement par files.

Protocole :
- entrant  : ("start", request_dict), un seul message
- sortant  : ("progress", event_dict), nombreux, best-effort
             ("complete", result_dict), un seul, terminal
             ("error", message), un seul, terminal (exception inattendue)
"""

from __future__ import annotations

import queue
import traceback
from typing import Any, Tuple

from breach_solver.lib.s3_search import SearchEngine, SolveRequest
from breach_solver.lib.s5_progress import ProgressEvent

MSG_START = "start"
MSG_PROGRESS = "progress"
MSG_COMPLETE = "complete"
MSG_ERROR = "error"

Message = Tuple[str, Any]


class QueueProgressSink:
    """Publie les ProgressEvent dans la file sortante sans jamais bloquer le moteur."""

    def __init__(self, outbox):
        self.outbox = outbox
        self.dropped = 0

    def __call__(self, event: ProgressEvent) -> None:
        try:
            self.outbox.put_nowait((MSG_PROGRESS, event.to_dict()))
        except queue.Full:
            self.dropped += 1


def run_solve(request_data: dict, outbox) -> None:
    """Exécute une résolution et publie le message terminal."""
    try:
        request = SolveRequest.from_dict(request_data)
        result = SearchEngine(request, on_progress=QueueProgressSink(outbox)).run()
    except Exception as e:
        outbox.put((MSG_ERROR, f"{type(e).__name__}: {e}\n{traceback.format_exc()}"))
        return
    outbox.put((MSG_COMPLETE, result.to_dict()))


def worker_main(inbox, outbox) -> None:
    """Point d'entrée du processus : attend le message de démarrage puis résout."""
    kind, payload = inbox.get()
    if kind != MSG_START:
        outbox.put((MSG_ERROR, f"Message inattendu: {kind!r}"))
        return
    run_solve(payload, outbox)
