"""Console entry point for ruin simulations."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from houseruin.config import BANKROLL_SWEEP, ScenarioConfig
from houseruin.exceptions import InvalidConfigurationError
from houseruin.metrics.risk import surviving_mean, theoretical_ruin_probability
from houseruin.report.text import format_report
from houseruin.sim.batch import BatchResult, run_batch

app = typer.Typer(add_completion=False, help="Casino gambler's ruin simulator.")
console = Console()

_defaults = ScenarioConfig()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_config(
    bankrolls: Optional[List[float]],
    default_bankrolls: tuple[float, ...],
    edge_probability: float,
    bet: float,
    rounds: int,
    trials: int,
    bins: int,
    seed: Optional[int],
    workers: Optional[int],
) -> ScenarioConfig:
    try:
        return ScenarioConfig(
            edge_probability=edge_probability,
            bet_amount=bet,
            rounds_per_trial=rounds,
            trial_count=trials,
            histogram_bins=bins,
            starting_bankrolls=tuple(bankrolls) if bankrolls else default_bankrolls,
            seed=seed,
            max_workers=workers,
        )
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _run_all(config: ScenarioConfig) -> list[BatchResult]:
    seed_source = config.seed_source()
    results = []
    for starting_bankroll in config.starting_bankrolls:
        results.append(
            run_batch(
                config.parameters_for(starting_bankroll),
                config.trial_count,
                seed_source=seed_source,
                max_workers=config.max_workers,
            )
        )
    return results


@app.command()
def simulate(
    bankroll: Optional[List[float]] = typer.Option(
        None, "--bankroll", "-b", help="Starting bankroll (repeatable)"
    ),
    edge_probability: float = typer.Option(
        _defaults.edge_probability, "--edge", help="House win probability per bet"
    ),
    bet: float = typer.Option(_defaults.bet_amount, help="Fixed bet amount"),
    rounds: int = typer.Option(_defaults.rounds_per_trial, help="Bets per trial"),
    trials: int = typer.Option(_defaults.trial_count, help="Trials per bankroll"),
    bins: int = typer.Option(_defaults.histogram_bins, help="Histogram bins"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    workers: Optional[int] = typer.Option(None, help="Worker processes per batch"),
    histogram: bool = typer.Option(True, help="Show surviving bankroll histogram"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the ruin simulation and print the report with histograms."""
    _configure_logging(verbose)
    config = _build_config(
        bankroll,
        _defaults.starting_bankrolls,
        edge_probability,
        bet,
        rounds,
        trials,
        bins,
        seed,
        workers,
    )
    results = _run_all(config)
    console.print(
        format_report(config, results, include_histograms=histogram),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def sweep(
    bankroll: Optional[List[float]] = typer.Option(
        None, "--bankroll", "-b", help="Starting bankroll (repeatable)"
    ),
    edge_probability: float = typer.Option(
        _defaults.edge_probability, "--edge", help="House win probability per bet"
    ),
    bet: float = typer.Option(_defaults.bet_amount, help="Fixed bet amount"),
    rounds: int = typer.Option(10_000, help="Bets per trial"),
    trials: int = typer.Option(1_000, help="Trials per bankroll"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    workers: Optional[int] = typer.Option(None, help="Worker processes per batch"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Compare ruin frequency across a range of starting bankrolls."""
    _configure_logging(verbose)
    config = _build_config(
        bankroll,
        BANKROLL_SWEEP,
        edge_probability,
        bet,
        rounds,
        trials,
        _defaults.histogram_bins,
        seed,
        workers,
    )
    results = _run_all(config)

    table = Table(title="Casino Ruin by Starting Bankroll")
    table.add_column("House Bankroll", justify="right")
    table.add_column("Ruin Count", justify="right")
    table.add_column("Ruin Prob (%)", justify="right")
    table.add_column("Unlimited Rounds (%)", justify="right")
    table.add_column("Mean Surviving", justify="right")
    for result in results:
        table.add_row(
            f"${result.params.starting_bankroll:,.2f}",
            str(result.ruin_count),
            f"{result.ruin_probability * 100.0:.5f}",
            f"{theoretical_ruin_probability(result.params) * 100.0:.5f}",
            f"${surviving_mean(result):,.2f}",
        )
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
