"""
hypo Runner

Runs an experiment provider against an oracle, round by round, with logging.
This is the main entry point for executing kits outside of library code.

The runner:
1. Builds the population and an ExperimentSession from the provider
2. Asks the session for the next optimal guess
3. Queries the oracle for that experiment
4. Submits the observation to the session
5. Loops until convergence or the round bound

The core never logs; everything printed or written to disk happens here.
"""

import json
import os
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, TextIO

from .config import RunnerConfig
from .oracles import HiddenAnswerOracle
from .scoring import fitness_profile, guess_count_correlation
from .session import ExperimentSession
from .spi.experiment_provider import ExperimentProvider
from .spi.protocols import Oracle


@dataclass
class RunResult:
    """Result of a hypo run."""
    success: bool
    survivors: List[Any]
    rounds_taken: int
    elapsed_time: float
    termination_reason: str
    run_id: str = ""
    log_dir: str = ""
    trace: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "survivors": [repr(h) for h in self.survivors],
            "n_survivors": len(self.survivors),
            "rounds_taken": self.rounds_taken,
            "elapsed_time": self.elapsed_time,
            "termination_reason": self.termination_reason,
            "run_id": self.run_id,
            "log_dir": self.log_dir,
            "trace_length": len(self.trace),
        }


class ExperimentRunner:
    """
    Runner for a single provider.

    Stops when the session converges (an observation eliminated nothing, or
    the selector came back to an answered experiment), when there is no
    experiment to run, or after `max_rounds` oracle queries.
    Oracle and prediction errors are logged and re-raised.
    """

    def __init__(
        self,
        provider: ExperimentProvider,
        oracle: Optional[Oracle] = None,
        config: Optional[RunnerConfig] = None,
    ):
        self.provider = provider
        self.config = config or RunnerConfig()
        self.verbose = self.config.verbose

        if oracle is not None:
            self.oracle = oracle
        else:
            answer = provider.hidden_answer()
            if answer is None:
                raise ValueError(
                    f"Provider '{provider.id()}' has no hidden answer; pass an oracle."
                )
            self.oracle = HiddenAnswerOracle(answer, provider.predict)

        self.run_id = self.config.run_id or (
            datetime.now().strftime("%Y%m%d-%H%M%S") + "-" + uuid.uuid4().hex[:8]
        )
        self.trace: list = []
        self.run_log_dir = ""
        self.log_file: Optional[TextIO] = None
        header = self._header_lines()
        if self.config.log_dir:
            self.run_log_dir = os.path.join(self.config.log_dir, self.run_id)
            os.makedirs(self.run_log_dir, exist_ok=True)
            self.log_file = open(os.path.join(self.run_log_dir, "run.log"), "w")

        for line in header:
            self._write_log(line)

    def _header_lines(self) -> List[str]:
        """Log header with run metadata, gathered before run.log is opened."""
        return [
            "=" * 70,
            f"hypo Run: {self.run_id}",
            f"Started: {datetime.now().isoformat()}",
            f"Provider: {self.provider.id()} {self.provider.version()}",
            f"Experiments: {self.provider.experiment_count()}",
            f"Max rounds: {self.config.max_rounds}",
            "=" * 70,
            "",
        ]

    def _write_log(self, msg: str) -> None:
        """Write to log file."""
        if self.log_file:
            self.log_file.write(msg + "\n")
            self.log_file.flush()

    def log(self, msg: str) -> None:
        """Log a message to console and file."""
        timestamped = f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}] {msg}"
        self._write_log(timestamped)
        if self.verbose:
            print(f"[hypo] {msg}")

    def _log_diagnostics(self, hypotheses: List[Any]) -> None:
        n = self.provider.experiment_count()
        predict = self.provider.predict
        if n >= 2:
            correlation = guess_count_correlation(0, 1, hypotheses, predict)
            self.log(f"Correlation count g0, g1: {correlation}")
        self.log("Guess fitness:")
        for i, fitness in enumerate(fitness_profile(n, hypotheses, predict)):
            self.log(f"  g{i} = {fitness}")

    def run(self) -> RunResult:
        """
        Run selection and elimination until the session stops.

        Returns:
            RunResult with the survivors and the round trace
        """
        hypotheses = self.provider.hypotheses()
        n = self.provider.experiment_count()
        session = ExperimentSession(hypotheses, n, self.provider.predict)
        self.trace = []
        started = time.time()
        termination_reason = "unknown"

        self.log("=" * 60)
        self.log("hypo Runner Starting")
        self.log(f"Hypotheses: {len(hypotheses)}")
        self.log("=" * 60)

        try:
            if self.config.diagnostics:
                self._log_diagnostics(hypotheses)

            while True:
                if self.config.max_rounds is not None and len(self.trace) >= self.config.max_rounds:
                    termination_reason = "max_rounds"
                    break

                guess = session.next_guess()
                if guess is None:
                    # n > 0 here means the selector came back to an answered experiment
                    termination_reason = "converged" if n > 0 else "no_experiments"
                    break

                self.log(
                    f"Round {len(self.trace)}: experiment {guess} "
                    f"({self.provider.describe_experiment(guess)})"
                )
                try:
                    answer = bool(self.oracle(guess))
                except Exception as e:
                    self.log(f"Oracle error: {e}")
                    raise
                record = session.observe(guess, answer)
                self.trace.append(record.to_dict())
                self.log(
                    f"  answer={answer} eliminated={record.eliminated} "
                    f"survivors={record.survivors_after}"
                )

                if session.converged:
                    termination_reason = "converged"
                    break
        except BaseException:
            self._close_log()
            raise

        survivors = list(hypotheses)
        result = RunResult(
            success=len(survivors) == 1,
            survivors=survivors,
            rounds_taken=len(self.trace),
            elapsed_time=time.time() - started,
            termination_reason=termination_reason,
            run_id=self.run_id,
            log_dir=self.run_log_dir,
            trace=self.trace,
        )

        self.log("=" * 60)
        self.log(f"Run Complete: {result.to_dict()}")
        self.log("=" * 60)

        self._save_run_logs(result)

        return result

    def _save_run_logs(self, result: RunResult) -> None:
        """Save trace and result to log directory."""
        if not self.run_log_dir:
            return

        trace_path = os.path.join(self.run_log_dir, "trace.json")
        with open(trace_path, "w") as f:
            json.dump(self.trace, f, indent=2)

        result_path = os.path.join(self.run_log_dir, "result.json")
        with open(result_path, "w") as f:
            json.dump(result.to_dict(), f, indent=2)

        self._write_log("")
        self._write_log(f"Logs saved to: {self.run_log_dir}")
        self._write_log("  - run.log: execution log")
        self._write_log("  - trace.json: round trace")
        self._write_log("  - result.json: run summary")
        self._close_log()

        if self.verbose:
            print(f"[hypo] Logs saved to: {self.run_log_dir}")

    def _close_log(self) -> None:
        if self.log_file:
            self.log_file.close()
            self.log_file = None
