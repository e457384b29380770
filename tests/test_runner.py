import json

import pytest

from hypo.adapters.circle import Circle, CircleProvider
from hypo.adapters.number import Le, NumberProvider, Not, Or
from hypo.config import RunnerConfig
from hypo.runner import ExperimentRunner


class ThresholdProvider:
    """Hypotheses 'value <= k' for k in 0..size-1."""

    def __init__(self, size=10, answer=4):
        self._size = size
        self._answer = answer

    def id(self):
        return "threshold"

    def version(self):
        return "0.1"

    def hypotheses(self):
        return list(range(self._size))

    def experiment_count(self):
        return self._size

    def predict(self, hypothesis, experiment_index):
        return experiment_index <= hypothesis

    def describe_experiment(self, experiment_index):
        return f"value <= {experiment_index}?"

    def hidden_answer(self):
        return self._answer


def _quiet(**kwargs):
    return RunnerConfig(verbose=False, **kwargs)


def test_run_converges():
    result = ExperimentRunner(ThresholdProvider(), config=_quiet()).run()
    assert result.success is True
    assert result.survivors == [4]
    assert result.termination_reason == "converged"
    assert result.rounds_taken == 3
    assert [r["experiment_index"] for r in result.trace] == [5, 3, 4]


def test_run_circle_kit():
    result = ExperimentRunner(CircleProvider.load(), config=_quiet()).run()
    assert result.survivors == [Circle(pos=(0.0, 0.0), rad=1.0)]


def test_run_number_kit():
    result = ExperimentRunner(NumberProvider.load(), config=_quiet()).run()
    assert result.survivors == [Or(Le(2), Not(Le(5)))]
    assert result.rounds_taken == 4


def test_max_rounds():
    result = ExperimentRunner(ThresholdProvider(), config=_quiet(max_rounds=1)).run()
    assert result.termination_reason == "max_rounds"
    assert result.rounds_taken == 1
    assert sorted(result.survivors) == [0, 1, 2, 3, 4]
    assert result.success is False


def test_max_rounds_zero_queries_nothing():
    calls = []
    runner = ExperimentRunner(
        ThresholdProvider(),
        oracle=lambda i: calls.append(i) or True,
        config=_quiet(max_rounds=0),
    )
    result = runner.run()
    assert calls == []
    assert len(result.survivors) == 10


def test_no_experiments():
    result = ExperimentRunner(ThresholdProvider(size=0), config=_quiet()).run()
    assert result.termination_reason == "no_experiments"
    assert result.survivors == []


def test_custom_oracle():
    runner = ExperimentRunner(ThresholdProvider(), oracle=lambda i: i <= 7, config=_quiet())
    assert runner.run().survivors == [7]


def test_missing_hidden_answer_requires_oracle():
    with pytest.raises(ValueError, match="no hidden answer"):
        ExperimentRunner(ThresholdProvider(answer=None), config=_quiet())


def test_oracle_error_propagates(tmp_path):
    def oracle(i):
        raise RuntimeError("instrument offline")

    runner = ExperimentRunner(
        ThresholdProvider(),
        oracle=oracle,
        config=_quiet(log_dir=str(tmp_path), run_id="failing"),
    )
    with pytest.raises(RuntimeError):
        runner.run()
    assert runner.log_file is None
    assert "Oracle error: instrument offline" in (tmp_path / "failing" / "run.log").read_text()


def test_log_files(tmp_path):
    config = _quiet(log_dir=str(tmp_path), run_id="run-1")
    result = ExperimentRunner(ThresholdProvider(), config=config).run()

    run_dir = tmp_path / "run-1"
    assert result.log_dir == str(run_dir)
    log_text = (run_dir / "run.log").read_text()
    assert "hypo Run: run-1" in log_text
    assert "Round 0: experiment 5" in log_text

    trace = json.loads((run_dir / "trace.json").read_text())
    assert [r["experiment_index"] for r in trace] == [5, 3, 4]

    summary = json.loads((run_dir / "result.json").read_text())
    assert summary["n_survivors"] == 1
    assert summary["termination_reason"] == "converged"
    assert summary["trace_length"] == 3


def test_verbose_prints(capsys):
    ExperimentRunner(ThresholdProvider(), config=RunnerConfig(verbose=True)).run()
    out = capsys.readouterr().out
    assert "[hypo] hypo Runner Starting" in out
    assert "[hypo] Round 0: experiment 5 (value <= 5?)" in out


def test_diagnostics(capsys):
    ExperimentRunner(CircleProvider.load(), config=RunnerConfig(diagnostics=True)).run()
    out = capsys.readouterr().out
    assert "Correlation count g0, g1: 5" in out
    assert "g3 = -9" in out


def test_generated_run_id():
    runner = ExperimentRunner(ThresholdProvider(), config=_quiet())
    assert runner.run_id
    assert runner.run().run_id == runner.run_id


def test_header_failure_opens_no_log(tmp_path):
    class BrokenVersionProvider(ThresholdProvider):
        def version(self):
            raise RuntimeError("no version metadata")

    with pytest.raises(RuntimeError):
        ExperimentRunner(
            BrokenVersionProvider(),
            config=_quiet(log_dir=str(tmp_path), run_id="broken"),
        )
    assert not (tmp_path / "broken").exists()


def test_oracle_never_asked_twice():
    calls = []

    def oracle(i):
        calls.append(i)
        return i <= 4

    result = ExperimentRunner(ThresholdProvider(), oracle=oracle, config=_quiet()).run()
    assert calls == [5, 3, 4]
    assert result.termination_reason == "converged"
