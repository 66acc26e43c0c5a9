"""Services du solveur Breach Protocol."""

from .s0_request_service import (
    SolveRequestError,
    build_request,
    load_request,
    validate_request,
    describe_request,
)
from .s1_solve_worker import worker_main, run_solve
from .s2_solver_service import SolverService, SolverWorkerError

__all__ = [
    "SolveRequestError",
    "build_request",
    "load_request",
    "validate_request",
    "describe_request",
    "worker_main",
    "run_solve",
    "SolverService",
    "SolverWorkerError",
]
