"""Tests for run events and observer dispatch."""

import bramble.core as core
import bramble.core.events as events
import bramble.core.headers as headers
import bramble.core.observer as observer
import bramble.core.outcome as outcome
import bramble.core.results as results

EXAMPLE = headers.ExampleHeader(headers.ExampleLabel.THEN, "it works")
CONTEXT = headers.ContextHeader(headers.ContextLabel.WHEN, "things happen")
SUITE = headers.SuiteHeader(headers.SuiteLabel.GIVEN, "a system")


class _MethodRecorder(observer.RunnerObserver):
    """Observer that records which lifecycle methods were called."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def enter_suite(self, header: headers.SuiteHeader) -> None:
        self.calls.append(("enter_suite", header))

    def exit_suite(self, header: headers.SuiteHeader, result: results.SuiteResult) -> None:
        self.calls.append(("exit_suite", result))

    def enter_context(self, header: headers.ContextHeader) -> None:
        self.calls.append(("enter_context", header))

    def exit_context(self, header: headers.ContextHeader, result: results.ContextResult) -> None:
        self.calls.append(("exit_context", result))

    def enter_example(self, header: headers.ExampleHeader) -> None:
        self.calls.append(("enter_example", header))

    def exit_example(self, header: headers.ExampleHeader, result: results.ExampleResult) -> None:
        self.calls.append(("exit_example", result))


class TestRunEvent:
    """Event payloads."""

    def test_enter_event_dict(self) -> None:
        event = events.RunEvent(events.EventKind.ENTER_CONTEXT, CONTEXT)
        assert event.name == "things happen"
        assert event.to_dict() == {
            "event": "enter_context",
            "label": "When",
            "name": "things happen",
        }

    def test_example_finished_dict(self) -> None:
        result = results.ExampleResult(EXAMPLE, outcome.Outcome.failed("nope"), duration=0.5)
        data = events.RunEvent(events.EventKind.EXAMPLE_FINISHED, EXAMPLE, result).to_dict()
        assert data["status"] == "failed"
        assert data["reason"] == "nope"
        assert data["duration"] == 0.5

    def test_exit_context_dict_has_counts(self) -> None:
        child = results.ExampleResult(EXAMPLE, outcome.Outcome.passed())
        result = results.ContextResult(CONTEXT, (child,))
        data = events.RunEvent(events.EventKind.EXIT_CONTEXT, CONTEXT, result).to_dict()
        assert data["passed"] == 1
        assert data["failed"] == 0
        assert data["skipped"] == 0


class TestObserverDispatch:
    """notify() routes events to lifecycle methods."""

    def test_dispatch(self) -> None:
        obs = _MethodRecorder()
        example_result = results.ExampleResult(EXAMPLE, outcome.Outcome.passed())
        context_result = results.ContextResult(CONTEXT, (example_result,))
        suite_result = results.SuiteResult(SUITE, results.ContextResult(None, (context_result,)))

        for event in [
            events.RunEvent(events.EventKind.ENTER_SUITE, SUITE),
            events.RunEvent(events.EventKind.ENTER_CONTEXT, CONTEXT),
            events.RunEvent(events.EventKind.ENTER_EXAMPLE, EXAMPLE),
            events.RunEvent(events.EventKind.EXAMPLE_FINISHED, EXAMPLE, example_result),
            events.RunEvent(events.EventKind.EXIT_CONTEXT, CONTEXT, context_result),
            events.RunEvent(events.EventKind.EXIT_SUITE, SUITE, suite_result),
        ]:
            obs.notify(event)

        assert obs.calls == [
            ("enter_suite", SUITE),
            ("enter_context", CONTEXT),
            ("enter_example", EXAMPLE),
            ("exit_example", example_result),
            ("exit_context", context_result),
            ("exit_suite", suite_result),
        ]

    def test_default_methods_do_nothing(self) -> None:
        class Quiet(observer.RunnerObserver):
            pass

        Quiet().notify(events.RunEvent(events.EventKind.ENTER_SUITE, SUITE))

    def test_runner_drives_lifecycle_methods(self, sample_suite: core.Suite) -> None:
        obs = _MethodRecorder()
        core.Runner(core.Configuration(workers=1), [obs]).run(sample_suite)
        names = [name for name, _ in obs.calls]
        assert names[0] == "enter_suite"
        assert names[-1] == "exit_suite"
        assert names.count("exit_example") == 4


class TestRecordingObserver:
    def test_of_kind_and_clear(self) -> None:
        rec = observer.RecordingObserver()
        rec.notify(events.RunEvent(events.EventKind.ENTER_SUITE, SUITE))
        rec.notify(events.RunEvent(events.EventKind.ENTER_EXAMPLE, EXAMPLE))
        assert len(rec.of_kind(events.EventKind.ENTER_EXAMPLE)) == 1
        assert rec.kinds() == [events.EventKind.ENTER_SUITE, events.EventKind.ENTER_EXAMPLE]
        rec.clear()
        assert rec.events == []


class TestCallbackObserver:
    def test_forwards_events(self) -> None:
        seen: list[events.RunEvent] = []
        obs = observer.CallbackObserver(seen.append)
        event = events.RunEvent(events.EventKind.ENTER_SUITE, SUITE)
        obs.notify(event)
        assert seen == [event]
