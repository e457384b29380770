"""
Experiment session (in-memory).

Wraps the hypo core for callers that drive rounds themselves (for example a
human answering questions), adding an audit trail and snapshots. The
population stays owned by the caller and is reduced in place.
"""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from .core import RoundRecord
from .eliminator import update
from .selector import optimal_guess
from .spi.protocols import Oracle, Predictor


@dataclass
class SessionSnapshot:
    session_id: str
    survivors: List[Any]
    rounds: int
    converged: bool
    audit_head_event_id: Optional[str]

    @property
    def n_survivors(self) -> int:
        return len(self.survivors)

    @property
    def entropy_proxy(self) -> float:
        n = self.n_survivors
        return 0.0 if n <= 1 else math.log2(n)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "survivors": [repr(h) for h in self.survivors],
            "n_survivors": self.n_survivors,
            "entropy_proxy": self.entropy_proxy,
            "rounds": self.rounds,
            "converged": self.converged,
            "audit_head_event_id": self.audit_head_event_id,
        }


@dataclass
class AuditEntry:
    event_id: str
    ts: float
    verb: str
    payload: Dict[str, Any]
    delta: Dict[str, int]
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "event_id": self.event_id,
            "ts": self.ts,
            "verb": self.verb,
            "payload": self.payload,
            "delta": self.delta,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data


class SessionError(Exception):
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ExperimentSession:
    """
    Step-wise access to selection and elimination.

    A session converges when there is no experiment to run, when the selector
    returns to an experiment already observed, or when observing the
    selector's current choice eliminated nothing. Converged sessions reject
    further rounds.
    """

    def __init__(
        self,
        hypotheses: List[Any],
        experiment_count: int,
        predict: Predictor,
    ) -> None:
        self.session_id = str(uuid.uuid4())
        self._hypotheses = hypotheses
        self._n = experiment_count
        self._predict = predict
        self._rounds: List[RoundRecord] = []
        self._observed: Set[int] = set()
        self._converged = False
        self._audit: List[AuditEntry] = []
        self._audit_head_event_id: Optional[str] = None
        self._append_audit(
            "DECLARE_SESSION",
            {"experiment_count": experiment_count, "hypotheses": len(hypotheses)},
            eliminated=0,
            survivors=len(hypotheses),
        )

    @property
    def hypotheses(self) -> List[Any]:
        return self._hypotheses

    @property
    def converged(self) -> bool:
        return self._converged

    @property
    def rounds(self) -> List[RoundRecord]:
        return list(self._rounds)

    def next_guess(self) -> Optional[int]:
        """
        Return the experiment the selector would run next.

        Returns None, and converges the session, when there is no experiment
        or the selector's choice was already observed.
        """
        self._ensure_not_converged()
        guess = optimal_guess(self._n, self._hypotheses, self._predict)
        if guess is None or guess in self._observed:
            self._converged = True
            return None
        return guess

    def observe(self, experiment_index: int, answer: bool) -> RoundRecord:
        """
        Record the observed answer for an experiment and eliminate.

        Any experiment may be observed, not only the selector's choice.

        Raises:
            SessionError: INVALID_EXPERIMENT for an index outside [0, n),
                          SESSION_CONVERGED after convergence
        """
        self._ensure_not_converged()
        if not 0 <= experiment_index < self._n:
            raise SessionError(
                code="INVALID_EXPERIMENT",
                message="Experiment index out of range.",
                details={"experiment_index": experiment_index, "experiment_count": self._n},
            )
        selected = optimal_guess(self._n, self._hypotheses, self._predict)
        return self._apply(experiment_index, bool(answer), selected, source="observe")

    def run(self, oracle: Oracle) -> List[RoundRecord]:
        """
        Drive selection and elimination to convergence with `oracle`.

        Stops where the core loop stops. Each round is recorded as soon as it
        completes, so an oracle or prediction error keeps the earlier rounds
        in the session and its audit trail.
        """
        self._ensure_not_converged()
        records: List[RoundRecord] = []
        while not self._converged:
            guess = self.next_guess()
            if guess is None:
                break
            records.append(self._apply(guess, bool(oracle(guess)), guess, source="run"))
        return records

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            survivors=list(self._hypotheses),
            rounds=len(self._rounds),
            converged=self._converged,
            audit_head_event_id=self._audit_head_event_id,
        )

    def audit_trace(self, since_event_id: Optional[str] = None) -> List[AuditEntry]:
        if since_event_id is None:
            return list(self._audit)
        for idx, entry in enumerate(self._audit):
            if entry.event_id == since_event_id:
                return list(self._audit[idx + 1 :])
        return list(self._audit)

    def _ensure_not_converged(self) -> None:
        if self._converged:
            raise SessionError(code="SESSION_CONVERGED", message="Session has converged.")

    def _apply(self, experiment_index: int, answer: bool, selected: int, source: str) -> RoundRecord:
        before = len(self._hypotheses)
        update(self._hypotheses, experiment_index, answer, self._predict)
        self._observed.add(experiment_index)
        record = RoundRecord(
            round_index=len(self._rounds),
            experiment_index=experiment_index,
            answer=answer,
            survivors_before=before,
            survivors_after=len(self._hypotheses),
        )
        self._record(record, source=source)
        if record.eliminated == 0 and experiment_index == selected:
            self._converged = True
        return record

    def _record(self, record: RoundRecord, source: str) -> None:
        self._rounds.append(record)
        payload = {
            "source": source,
            "round_index": record.round_index,
            "experiment_index": record.experiment_index,
            "answer": record.answer,
        }
        self._append_audit(
            "OBSERVE",
            payload,
            eliminated=record.eliminated,
            survivors=record.survivors_after,
        )

    def _append_audit(
        self,
        verb: str,
        payload: Dict[str, Any],
        eliminated: int,
        survivors: int,
        notes: Optional[str] = None,
    ) -> str:
        event_id = str(uuid.uuid4())
        entry = AuditEntry(
            event_id=event_id,
            ts=time.time(),
            verb=verb,
            payload=payload,
            delta={"eliminated": eliminated, "survivors": survivors},
            notes=notes,
        )
        self._audit.append(entry)
        self._audit_head_event_id = event_id
        return event_id
