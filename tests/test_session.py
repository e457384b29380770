import math

import pytest

from hypo.core import experiment
from hypo.oracles import HiddenAnswerOracle
from hypo.session import ExperimentSession, SessionError


def _le(h, j):
    return j <= h


def _session(size=10, n=10):
    hypotheses = list(range(size))
    return hypotheses, ExperimentSession(hypotheses, n, _le)


def test_next_guess_matches_selector():
    _, session = _session()
    assert session.next_guess() == 5


def test_observe_reduces_caller_population():
    hypotheses, session = _session()
    record = session.observe(5, False)
    assert sorted(hypotheses) == [0, 1, 2, 3, 4]
    assert record.eliminated == 5
    assert session.hypotheses is hypotheses


def test_observe_any_experiment():
    hypotheses, session = _session()
    session.observe(8, True)
    assert sorted(hypotheses) == [8, 9]
    assert session.converged is False


def test_observe_invalid_index():
    _, session = _session()
    with pytest.raises(SessionError) as excinfo:
        session.observe(10, True)
    assert excinfo.value.code == "INVALID_EXPERIMENT"
    assert excinfo.value.details == {"experiment_index": 10, "experiment_count": 10}


def test_converges_when_selected_observation_eliminates_nothing():
    hypotheses, session = _session()
    oracle = HiddenAnswerOracle(4, _le)
    for guess in (5, 3, 4):
        session.observe(guess, oracle(guess))
    assert hypotheses == [4]
    assert session.converged is False
    record = session.observe(5, oracle(5))
    assert record.eliminated == 0
    assert session.converged is True
    with pytest.raises(SessionError) as excinfo:
        session.next_guess()
    assert excinfo.value.code == "SESSION_CONVERGED"


def test_converges_when_selector_returns_to_observed_experiment():
    hypotheses, session = _session()
    oracle = HiddenAnswerOracle(4, _le)
    while True:
        guess = session.next_guess()
        if guess is None:
            break
        session.observe(guess, oracle(guess))
    assert hypotheses == [4]
    assert oracle.queries == [5, 3, 4]
    assert session.converged is True
    with pytest.raises(SessionError) as excinfo:
        session.next_guess()
    assert excinfo.value.code == "SESSION_CONVERGED"


def test_no_experiments_converges():
    _, session = _session(n=0)
    assert session.next_guess() is None
    assert session.converged is True


def test_run_matches_core_loop():
    hypotheses, session = _session()
    records = session.run(HiddenAnswerOracle(4, _le))
    assert hypotheses == [4]
    assert [r.experiment_index for r in records] == [5, 3, 4]
    assert session.converged is True
    with pytest.raises(SessionError):
        session.observe(0, True)


def test_run_after_manual_rounds_continues_numbering():
    _, session = _session()
    session.observe(5, False)
    records = session.run(HiddenAnswerOracle(4, _le))
    assert records[0].round_index == 1
    assert [r.round_index for r in session.rounds] == list(range(1 + len(records)))


def test_audit_trail():
    _, session = _session()
    session.observe(5, False)
    session.observe(3, True)
    trace = session.audit_trace()
    assert [e.verb for e in trace] == ["DECLARE_SESSION", "OBSERVE", "OBSERVE"]
    assert trace[1].payload["experiment_index"] == 5
    assert trace[1].delta == {"eliminated": 5, "survivors": 5}
    assert session.audit_trace(since_event_id=trace[1].event_id) == [trace[2]]
    assert session.audit_trace(since_event_id="unknown") == trace


def test_snapshot():
    _, session = _session(size=8, n=8)
    before = session.snapshot()
    assert before.n_survivors == 8
    assert before.entropy_proxy == math.log2(8)
    session.observe(4, False)
    after = session.snapshot()
    assert after.n_survivors == 4
    assert after.rounds == 1
    assert after.entropy_proxy < before.entropy_proxy
    assert after.audit_head_event_id == session.audit_trace()[-1].event_id
    data = after.to_dict()
    assert data["n_survivors"] == 4
    assert data["converged"] is False


def test_snapshot_is_a_copy():
    hypotheses, session = _session()
    snapshot = session.snapshot()
    session.observe(5, False)
    assert snapshot.n_survivors == 10
    assert len(hypotheses) == 5


def test_singleton_entropy_is_zero():
    _, session = _session(size=1, n=1)
    assert session.snapshot().entropy_proxy == 0.0


def test_run_audits_each_round():
    _, session = _session()
    session.run(HiddenAnswerOracle(4, _le))
    trace = session.audit_trace()
    assert [e.payload.get("source") for e in trace[1:]] == ["run"] * 3
    assert [e.delta["survivors"] for e in trace] == [10, 5, 2, 1]


def test_run_keeps_rounds_completed_before_oracle_error():
    hypotheses, session = _session()
    calls = []

    def oracle(i):
        calls.append(i)
        if len(calls) > 1:
            raise RuntimeError("instrument offline")
        return i <= 4

    with pytest.raises(RuntimeError):
        session.run(oracle)
    assert sorted(hypotheses) == [0, 1, 2, 3, 4]
    assert [r.experiment_index for r in session.rounds] == [5]
    assert session.snapshot().rounds == 1
    trace = session.audit_trace()
    assert [e.verb for e in trace] == ["DECLARE_SESSION", "OBSERVE"]
    assert trace[-1].delta == {"eliminated": 5, "survivors": 5}
    assert session.converged is False


def test_run_matches_experiment_on_a_copy():
    hypotheses, session = _session(size=16, n=16)
    expected = list(hypotheses)
    rounds = experiment(16, expected, HiddenAnswerOracle(11, _le), _le)
    records = session.run(HiddenAnswerOracle(11, _le))
    assert records == rounds
    assert hypotheses == expected
