from breach_solver.lib.s3_search import solve
from breach_solver.lib.s5_progress import ProgressEvent, ProgressReporter


def test_reporter_respects_interval():
    events = []
    reporter = ProgressReporter(events.append, interval=10)

    assert reporter.maybe_report(5, 100, 0, 2, 0.1) is None
    assert reporter.maybe_report(10, 100, 1, 2, 0.2) is not None
    assert reporter.maybe_report(15, 100, 1, 2, 0.3) is None
    assert reporter.maybe_report(20, 100, 2, 2, 0.4) is not None

    assert [e.iterations_processed for e in events] == [10, 20]
    assert events[1].progress_fraction == 0.2
    assert events[1].completions_found_so_far == 2
    assert reporter.events_sent == 2


def test_reporter_without_sink_is_silent():
    reporter = ProgressReporter(None, interval=1)
    assert reporter.maybe_report(10, 100, 0, 1, 0.0) is None


def test_progress_fraction_is_capped():
    events = []
    ProgressReporter(events.append, interval=1).maybe_report(150, 100, 0, 1, 0.0)
    assert events[0].progress_fraction == 1.0
    assert events[0].percent == 100.0


def test_event_payload_keys():
    event = ProgressEvent(0.5, 50, 100, 1, 3, 1.25)
    assert set(event.to_dict()) == {
        "progress_fraction",
        "iterations_processed",
        "iterations_cap",
        "completions_found_so_far",
        "total_targets",
        "elapsed_seconds",
    }
    assert ProgressEvent.from_dict(event.to_dict()) == event


def test_engine_emits_progress_periodically(make_request, large_rows):
    events = []
    request = make_request(large_rows, 8, [["1C", "B2"]], max_iterations=500, progress_interval=100)
    solve(request, on_progress=events.append)

    assert [e.iterations_processed for e in events] == [100, 200, 300, 400]
    assert [e.progress_fraction for e in events] == [0.2, 0.4, 0.6, 0.8]
    assert all(e.iterations_cap == 500 and e.total_targets == 1 for e in events)
    assert events[-1].completions_found_so_far == 1
