import json

from breach_solver.lib.s1_grid import PathNode
from breach_solver.lib.s4_aggregator import Solution
import breach_solver.main as cli
from breach_solver.main import format_solution_grid, format_progress, main
from breach_solver.lib.s5_progress import ProgressEvent


def _write_puzzle(tmp_path, **data):
    path = tmp_path / "puzzle.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_solution_grid_marks_steps(make_request, two_daemon_rows):
    request = make_request(two_daemon_rows, 2, [["1C", "55"]])
    solution = Solution(path=(PathNode(0, 0, 1), PathNode(1, 0, 2)), completed=(0,))
    rendered = format_solution_grid(request, solution)

    lines = rendered.splitlines()
    assert len(lines) == 3
    assert "[1C:1]" in lines[0]
    assert "[55:2]" in lines[1]
    assert "--" in lines[2]


def test_progress_line():
    line = format_progress(ProgressEvent(0.25, 250, 1000, 1, 2, 65.0))
    assert line.startswith("[PROGRESS] 25.0% - 1m 5s")
    assert "250/1000" in line


def test_main_prints_solution(tmp_path, capsys, two_daemon_rows):
    puzzle = _write_puzzle(tmp_path, grid=two_daemon_rows, buffer_size=2, daemons=[["1C", "55"], [3, 4]])
    code = main([puzzle, "--quiet"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Chemin: 0,0;1,0" in out
    assert "Chemin: 0,1;1,1" in out
    assert "[FIN] Succès" in out


def test_main_reports_no_solution(tmp_path, capsys):
    puzzle = _write_puzzle(tmp_path, grid=[[1, 1], [1, 1]], buffer_size=2, daemons=[["8E"]])
    code = main([puzzle, "--quiet"])

    out = capsys.readouterr().out
    assert code == 1
    assert "Aucun daemon" in out
    assert "[FIN] Échec" in out


def test_main_rejects_invalid_puzzle(tmp_path, capsys):
    puzzle = _write_puzzle(tmp_path, grid=[[1, 1], [1, 1]], buffer_size=2, daemons=[])
    assert main([puzzle, "--quiet"]) == 2
    assert "[ERREUR]" in capsys.readouterr().out


def test_main_rejects_non_integer_grid(tmp_path, capsys):
    puzzle = _write_puzzle(tmp_path, grid=[["x", 1], [1, 1]], buffer_size=2, daemons=[["1C"]])
    assert main([puzzle, "--quiet"]) == 2
    assert "[ERREUR]" in capsys.readouterr().out


def test_main_handles_interrupt(tmp_path, capsys, monkeypatch):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "load_request", interrupted)
    puzzle = _write_puzzle(tmp_path, grid=[[1, 1], [1, 1]], buffer_size=2, daemons=[["1C"]])

    assert main([puzzle, "--quiet"]) == 130
    assert "Arrêt demandé" in capsys.readouterr().out


def test_main_reports_unexpected_errors(tmp_path, capsys, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "load_request", broken)
    puzzle = _write_puzzle(tmp_path, grid=[[1, 1], [1, 1]], buffer_size=2, daemons=[["1C"]])

    assert main([puzzle, "--quiet"]) == 1
    assert "[ERREUR] Exception non capturée: boom" in capsys.readouterr().out
