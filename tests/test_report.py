"""Tests for scenario configuration, text reports and the console command."""

import pytest
from typer.testing import CliRunner

from houseruin.cli import app
from houseruin.config import BANKROLL_SWEEP, ScenarioConfig
from houseruin.exceptions import InvalidConfigurationError
from houseruin.metrics.histogram import NoData, build_histogram
from houseruin.report.text import (
    format_batch_row,
    format_header,
    format_histogram,
    format_report,
)
from houseruin.sim.batch import BatchResult
from houseruin.sim.seeding import FixedSeedSource, TimeSeedSource
from houseruin.sim.trial import SimulationParameters, TrialOutcome

runner = CliRunner()


def make_result(finals: list[float], starting_bankroll: float = 500.0) -> BatchResult:
    params = SimulationParameters(
        starting_bankroll=starting_bankroll,
        bet_amount=25.0,
        edge_probability=5.0 / 9.0,
        rounds_per_trial=100,
    )
    outcomes = tuple(TrialOutcome.from_final(f, 25.0, 100) for f in finals)
    return BatchResult.from_outcomes(params, outcomes)


class TestScenarioConfig:
    """Tests for ScenarioConfig dataclass."""

    def test_defaults(self) -> None:
        """Defaults reproduce the classic casino scenario."""
        config = ScenarioConfig()
        assert config.edge_probability == pytest.approx(5.0 / 9.0)
        assert config.bet_amount == 25.0
        assert config.rounds_per_trial == 100
        assert config.histogram_bins == 15
        assert config.starting_bankrolls == (500.0,)

    def test_parameters_for(self) -> None:
        """Per-bankroll parameters carry the shared settings."""
        params = ScenarioConfig(bet_amount=10.0).parameters_for(1000.0)
        assert params == SimulationParameters(1000.0, 10.0, 5.0 / 9.0, 100)

    def test_seed_source_selection(self) -> None:
        """A seed selects a fixed source, no seed a time-based one."""
        assert ScenarioConfig(seed=3).seed_source() == FixedSeedSource(3)
        assert isinstance(ScenarioConfig().seed_source(), TimeSeedSource)

    def test_bankroll_sweep(self) -> None:
        """The sweep covers 500 through 20000."""
        assert BANKROLL_SWEEP[0] == 500.0
        assert BANKROLL_SWEEP[-1] == 20000.0

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"edge_probability": 1.5}, "edge_probability"),
            ({"bet_amount": 0.0}, "bet_amount"),
            ({"rounds_per_trial": -1}, "rounds_per_trial"),
            ({"trial_count": 0}, "trial_count"),
            ({"histogram_bins": 0}, "histogram_bins"),
            ({"starting_bankrolls": ()}, "starting_bankrolls"),
            ({"starting_bankrolls": (500.0, -1.0)}, "starting_bankrolls"),
            ({"seed": -5}, "seed"),
            ({"max_workers": 0}, "max_workers"),
            ({"rounds_per_trial": 2.5}, "rounds_per_trial must be an integer"),
            ({"trial_count": 2.5}, "trial_count must be an integer"),
            ({"trial_count": True}, "trial_count must be an integer"),
            ({"histogram_bins": 15.0}, "histogram_bins must be an integer"),
            ({"seed": 1.5}, "seed must be an integer"),
            ({"max_workers": 2.0}, "max_workers must be an integer"),
        ],
    )
    def test_invalid_config_raises(self, overrides: dict, message: str) -> None:
        """Invalid settings fail fast at construction."""
        with pytest.raises(InvalidConfigurationError, match=message):
            ScenarioConfig(**overrides)


class TestTextReport:
    """Tests for the text report renderer."""

    def test_header(self) -> None:
        """Header shows the edge, bet and run counts."""
        header = format_header(ScenarioConfig(trial_count=1000))
        assert "--- Casino Ruin Simulation ---" in header
        assert "House Win Probability: 55.5556%" in header
        assert "Bet Amount: $25" in header
        assert "Simulating 1000 runs of 100 bets each..." in header
        assert "Ruin Prob (%)" in header

    def test_batch_row(self) -> None:
        """Row shows bankroll, ruin count and ruin percentage."""
        row = format_batch_row(make_result([0.0, 100.0, 200.0, 300.0]))
        assert row.startswith("$")
        assert "500.00000" in row
        assert "25.00000" in row
        assert row.split("|")[1].strip() == "1"

    def test_histogram_bars_scale_to_fullest_bin(self) -> None:
        """The fullest bin gets the full bar width."""
        hist = build_histogram([100.0, 200.0, 300.0, 400.0], 25.0, 3)
        text = format_histogram(hist)

        assert "Final Bankroll Distribution (for 4 surviving runs)" in text
        assert "Min Surviving Bankroll: $100" in text
        assert "Max Surviving Bankroll: $400" in text
        assert "#" * 40 + " (2, 50.0%)" in text
        assert "| " + "#" * 20 + " (1, 25.0%)" in text

    def test_histogram_custom_bar_width(self) -> None:
        """Bar width is configurable."""
        hist = build_histogram([100.0, 200.0, 300.0, 400.0], 25.0, 3)
        text = format_histogram(hist, max_bar_width=10)
        assert "#" * 10 + " (2, 50.0%)" in text
        assert "#" * 11 not in text

    def test_no_data(self) -> None:
        """NoData renders a one-line notice."""
        text = format_histogram(NoData(reason="No surviving runs to chart."))
        assert text.strip() == "No surviving runs to chart."

    def test_full_report(self) -> None:
        """The report stitches header, rows and histograms together."""
        config = ScenarioConfig(trial_count=4, starting_bankrolls=(500.0, 1000.0))
        results = [
            make_result([0.0, 100.0, 200.0, 300.0]),
            make_result([0.0, 0.0, 10.0, 5.0], starting_bankroll=1000.0),
        ]
        report = format_report(config, results)

        assert report.startswith("--- Casino Ruin Simulation ---")
        assert "(for 3 surviving runs)" in report
        assert "No surviving runs to chart." in report
        assert report.rstrip().endswith("Simulation complete.")

    def test_report_without_histograms(self) -> None:
        """Histograms can be left out."""
        config = ScenarioConfig(trial_count=4)
        report = format_report(config, [make_result([0.0, 100.0, 200.0, 300.0])], False)
        assert "Final Bankroll Distribution" not in report


class TestCommandLine:
    """Tests for the houseruin console command."""

    def test_simulate(self) -> None:
        """simulate prints the full report."""
        result = runner.invoke(
            app, ["simulate", "--trials", "50", "--seed", "3", "-b", "500", "-b", "100"]
        )
        assert result.exit_code == 0, result.output
        assert "Casino Ruin Simulation" in result.output
        assert "Simulation complete." in result.output

    def test_simulate_without_histogram(self) -> None:
        """--no-histogram drops the distribution block."""
        result = runner.invoke(
            app, ["simulate", "--trials", "20", "--seed", "3", "--no-histogram"]
        )
        assert result.exit_code == 0, result.output
        assert "Final Bankroll Distribution" not in result.output

    def test_sweep(self) -> None:
        """sweep prints a comparison table."""
        result = runner.invoke(
            app,
            ["sweep", "--trials", "20", "--rounds", "100", "--seed", "1", "-b", "500", "-b", "1000"],
        )
        assert result.exit_code == 0, result.output
        assert "Casino Ruin by Starting Bankroll" in result.output

    @pytest.mark.parametrize(
        "args",
        [
            ["simulate", "--trials", "0"],
            ["simulate", "--edge", "1.5"],
            ["simulate", "--bins", "0"],
        ],
    )
    def test_invalid_options_fail(self, args: list[str]) -> None:
        """Invalid configuration exits with an error instead of running."""
        result = runner.invoke(app, args)
        assert result.exit_code != 0
