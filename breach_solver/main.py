import argparse
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from breach_solver.config import SOLVER_CONFIG
from breach_solver.lib.s3_search import SolveRequest
from breach_solver.lib.s4_aggregator import Solution, SolveResult
from breach_solver.lib.s5_progress import ProgressEvent
from breach_solver.services import SolveRequestError, SolverService, load_request, validate_request


def format_duration(seconds: float) -> str:
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    millis = int((seconds % 1) * 1000)
    return f"{minutes}m {secs}s {millis}ms"


def format_progress(event: ProgressEvent) -> str:
    minutes = int(event.elapsed_seconds // 60)
    seconds = int(event.elapsed_seconds % 60)
    return (
        f"[PROGRESS] {event.percent:.1f}% - {minutes}m {seconds}s - "
        f"chemins {event.iterations_processed}/{event.iterations_cap} - "
        f"daemons {event.completions_found_so_far}/{event.total_targets}"
    )


def format_solution_grid(request: SolveRequest, solution: Solution) -> str:
    """Grille texte : symbole de chaque case, numéro d'étape sur le chemin."""
    symbols = request.symbols
    steps = {cell: i + 1 for i, cell in enumerate(solution.path_coordinates)}
    lines = []
    for row in range(request.height):
        cells = []
        for col in range(request.width):
            value = request.grid[row * request.width + col]
            symbol = symbols.symbol_for(value) if value else None
            label = symbol or "--"
            step = steps.get((row, col))
            cells.append(f"[{label}:{step}]" if step else f" {label}  ")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_solution(request: SolveRequest, solution: Solution, rank: int = 1) -> str:
    lines = [
        f"Solution {rank}: {solution.completion_count}/{request.total_targets} daemon(s), "
        f"longueur {solution.path_length}",
        f"  Chemin: {solution.format_coords()}",
        "  Daemons débloqués:",
    ]
    for index in solution.completed:
        lines.append(f"    {index + 1}. {','.join(request.daemon_sequences[index])}")
    locked = [i for i in range(request.total_targets) if i not in solution.completed]
    if locked:
        lines.append("  Daemons verrouillés:")
        for index in locked:
            lines.append(f"    {index + 1}. {','.join(request.daemon_sequences[index])}")
    lines.append(format_solution_grid(request, solution))
    return "\n".join(lines)


def format_result(request: SolveRequest, result: SolveResult) -> str:
    if not result.has_solutions:
        lines = ["Aucun daemon ne peut être complété avec cette taille de buffer."]
    else:
        lines = [format_solution(request, s, rank) for rank, s in enumerate(result.solutions, 1)]
    lines.append(
        "Statistiques: "
        f"grille {request.width}x{request.height}, buffer {request.buffer_size}, "
        f"chemins explorés {result.iterations_processed}, "
        f"temps {format_duration(result.elapsed_seconds)}"
    )
    return "\n".join(lines)


def _run(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Solveur Breach Protocol (recherche de chemin)")

    parser.add_argument("puzzle", help="Fichier JSON du puzzle (grid, buffer_size, daemons)")
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Nombre maximum d'états traités (défaut: %d)" % SOLVER_CONFIG["max_iterations"],
    )
    parser.add_argument(
        "--reorder-interval",
        type=int,
        help="Cadence de re-tri de la file, 0 pour désactiver (défaut: %d)" % SOLVER_CONFIG["reorder_interval"],
    )
    parser.add_argument(
        "--max-solutions",
        type=int,
        help="Nombre de solutions affichées (défaut: %d)" % SOLVER_CONFIG["max_solutions"],
    )
    parser.add_argument(
        "--single-best",
        action="store_true",
        help="S'arrêter dès que tous les daemons sont complétés",
    )
    parser.add_argument(
        "--no-pruning",
        action="store_true",
        help="Désactiver l'heuristique d'élagage (recherche plus lente mais plus complète)",
    )
    parser.add_argument("--log-dir", help="Dossier des logs JSONL de debug")
    parser.add_argument("--quiet", action="store_true", help="Ne pas afficher la progression")
    args = parser.parse_args(argv)

    try:
        request = load_request(
            args.puzzle,
            max_iterations=args.max_iterations,
            reorder_interval=args.reorder_interval,
            max_solutions=args.max_solutions,
            stop_on_full_completion=True if args.single_best else None,
            prune_dead_branches=False if args.no_pruning else None,
        )
        validate_request(request)
    except (OSError, SolveRequestError) as e:
        print(f"[ERREUR] {e}")
        return 2

    service = SolverService(
        on_progress=None if args.quiet else (lambda event: print(format_progress(event))),
        log_dir=args.log_dir,
        verbose=not args.quiet,
    )
    try:
        result = service.solve(request)
    finally:
        service.reset()

    if result is None:
        print("[FIN] Résolution interrompue")
        return 1

    print(format_result(request, result))
    print("[FIN] Succès" if result.has_solutions else "[FIN] Échec")
    return 0 if result.has_solutions else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée CLI (console script et `python -m`)."""
    try:
        return _run(argv)
    except KeyboardInterrupt:
        print("\nArrêt demandé par l'utilisateur.")
        return 130
    except Exception as e:
        print(f"[ERREUR] Exception non capturée: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
