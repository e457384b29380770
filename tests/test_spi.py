from typing import Any, List, Optional

from hypo import HiddenAnswerOracle
from hypo.runner import ExperimentRunner
from hypo.config import RunnerConfig
from hypo.spi import ENTRY_POINT_GROUP, discover_providers


class ToyProvider:
    def __init__(self) -> None:
        self._table = {"H1": [True, False], "H2": [False, False], "H3": [True, True]}

    def id(self) -> str:
        return "toy"

    def version(self) -> str:
        return "1.0"

    def hypotheses(self) -> List[Any]:
        return list(self._table)

    def experiment_count(self) -> int:
        return 2

    def predict(self, hypothesis: Any, experiment_index: int) -> bool:
        return self._table[hypothesis][experiment_index]

    def describe_experiment(self, experiment_index: int) -> str:
        return f"p{experiment_index}"

    def hidden_answer(self) -> Optional[Any]:
        return "H3"


def test_discover_providers_returns_dict():
    providers = discover_providers()
    assert isinstance(providers, dict)


def test_entry_point_group_name():
    assert ENTRY_POINT_GROUP == "hypo.experiments"


def test_provider_smoke():
    result = ExperimentRunner(ToyProvider(), config=RunnerConfig(verbose=False)).run()
    assert result.survivors == ["H3"]


def test_hidden_answer_oracle_records_queries():
    provider = ToyProvider()
    oracle = HiddenAnswerOracle("H1", provider.predict)
    assert oracle(0) is True
    assert oracle(1) is False
    assert oracle.queries == [0, 1]
    assert oracle.query_count == 2
    assert oracle.answer == "H1"
