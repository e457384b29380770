#!/usr/bin/env python3
"""
hypo command line.

Runs a bundled or entry-point registered experiment provider against its kit's
hidden answer, or against answers typed in by the user.

Usage:
    hypo circle --diagnostics
    hypo number --max-rounds 3 --log-dir /tmp/hypo-logs
    hypo circle --kit my_circles.yaml --interactive
"""

import argparse
import sys
from typing import Callable, Dict, List, Optional

from .adapters import BUILTIN_PROVIDERS
from .config import RunnerConfig, load_config
from .runner import ExperimentRunner
from .spi import discover_providers
from .spi.experiment_provider import ExperimentProvider


class PromptOracle:
    """Asks the user for the outcome of each chosen experiment."""

    def __init__(
        self,
        provider: ExperimentProvider,
        input_fn: Optional[Callable[[str], str]] = None,
    ):
        self._provider = provider
        self._input = input_fn

    def __call__(self, experiment_index: int) -> bool:
        question = self._provider.describe_experiment(experiment_index)
        while True:
            ask = self._input or input
            reply = ask(f"Experiment {experiment_index}: {question} [y/n] ").strip().lower()
            if reply in ("y", "yes"):
                return True
            if reply in ("n", "no"):
                return False


def available_providers() -> Dict[str, type]:
    """Bundled providers, overridden by installed `hypo.experiments` entry points."""
    providers: Dict[str, type] = dict(BUILTIN_PROVIDERS)
    providers.update(discover_providers())
    return providers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hypo",
        description="Automatic hypothesis elimination",
    )
    parser.add_argument(
        "adapter",
        type=str,
        help="Provider name (e.g. circle, number)",
    )
    parser.add_argument(
        "--kit",
        type=str,
        default=None,
        help="Path to a kit YAML file (default: the provider's bundled kit)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a runner config YAML file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for run.log, trace.json and result.json",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=None,
        help="Stop after this many oracle queries",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print round logs",
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Print experiment correlation and fitness before running",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Answer experiments by hand instead of using the kit's hidden answer",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    providers = available_providers()
    provider_cls = providers.get(args.adapter)
    if provider_cls is None:
        print(
            f"Unknown adapter '{args.adapter}'. Available: {', '.join(sorted(providers))}",
            file=sys.stderr,
        )
        return 2

    try:
        config = load_config(args.config) if args.config else RunnerConfig()
        config = config.merged(
            verbose=False if args.quiet else None,
            diagnostics=True if args.diagnostics else None,
            log_dir=args.log_dir,
            max_rounds=args.max_rounds,
        )
        provider = provider_cls.load(args.kit)
        oracle = PromptOracle(provider) if args.interactive else None
        runner = ExperimentRunner(provider, oracle=oracle, config=config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        result = runner.run()
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.", file=sys.stderr)
        return 1

    print("Remaining hypotheses:")
    for hypothesis in result.survivors:
        print(hypothesis)
    print(f"Experiments: {result.rounds_taken}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
