"""Logger structuré pour le debug."""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any

from breach_solver.config import PATHS
from breach_solver.lib.s4_aggregator import SolveResult
from breach_solver.lib.s5_progress import ProgressEvent


@dataclass
class SolveLog:
    """Log d'une résolution."""
    timestamp: str
    grid_size: str
    buffer_size: int
    total_targets: int
    iterations: int
    duration: float
    best_count: int
    solutions_count: int
    cancelled: bool
    metadata: Dict[str, Any]


@dataclass
class ProgressLog:
    """Log d'une notification de progression."""
    timestamp: str
    percent: float
    iterations: int
    completions: int
    elapsed: float


class DebugLogger:
    """Logger structuré pour le debug."""

    def __init__(self, log_dir: str = PATHS["logs"]):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.solves: List[SolveLog] = []
        self.progress: List[ProgressLog] = []

    def log_solve(
        self,
        width: int,
        height: int,
        buffer_size: int,
        result: Optional[SolveResult],
        cancelled: bool = False,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log une résolution (terminée ou annulée)."""
        log = SolveLog(
            timestamp=datetime.now().isoformat(),
            grid_size=f"{width}x{height}",
            buffer_size=buffer_size,
            total_targets=result.total_targets if result else 0,
            iterations=result.iterations_processed if result else 0,
            duration=result.elapsed_seconds if result else 0.0,
            best_count=result.best.completion_count if result and result.best else 0,
            solutions_count=len(result.solutions) if result else 0,
            cancelled=cancelled,
            metadata=metadata or {},
        )
        self.solves.append(log)
        self._write_log("solves", asdict(log))

    def log_progress(self, event: ProgressEvent) -> None:
        """Log une notification de progression."""
        log = ProgressLog(
            timestamp=datetime.now().isoformat(),
            percent=round(event.percent, 2),
            iterations=event.iterations_processed,
            completions=event.completions_found_so_far,
            elapsed=event.elapsed_seconds,
        )
        self.progress.append(log)
        self._write_log("progress", asdict(log))

    def save_session(self) -> str:
        """Sauvegarde la session complète."""
        session_file = self.log_dir / f"session_{self.session_id}.json"
        data = {
            "session_id": self.session_id,
            "total_solves": len(self.solves),
            "total_progress_events": len(self.progress),
            "solves": [asdict(s) for s in self.solves],
            "progress": [asdict(p) for p in self.progress],
        }
        with open(session_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return str(session_file)

    def get_summary(self) -> Dict[str, Any]:
        """Retourne un résumé de la session."""
        finished = [s for s in self.solves if not s.cancelled]
        return {
            "session_id": self.session_id,
            "solves": len(self.solves),
            "cancelled": len(self.solves) - len(finished),
            "total_iterations": sum(s.iterations for s in finished),
            "total_duration": sum(s.duration for s in finished),
            "success_rate": sum(1 for s in finished if s.best_count > 0) / max(1, len(finished)),
        }

    def _write_log(self, log_type: str, data: Dict[str, Any]) -> None:
        """Écrit un log dans un fichier."""
        log_file = self.log_dir / f"{log_type}_{self.session_id}.jsonl"
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")


# === API fonctionnelle ===

_logger: Optional[DebugLogger] = None


def _get_logger() -> DebugLogger:
    global _logger
    if _logger is None:
        _logger = DebugLogger()
    return _logger


def log_solve(
    width: int,
    height: int,
    buffer_size: int,
    result: Optional[SolveResult],
    **kwargs,
) -> None:
    """Log une résolution."""
    _get_logger().log_solve(width, height, buffer_size, result, **kwargs)


def log_progress(event: ProgressEvent) -> None:
    """Log une notification de progression."""
    _get_logger().log_progress(event)
