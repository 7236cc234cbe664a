"""Plain-text rendering of batch results and histograms.

Every function returns a string; printing is left to the caller.
"""

from collections.abc import Sequence

from houseruin.config import ScenarioConfig
from houseruin.metrics.histogram import Histogram, NoData, build_histogram
from houseruin.sim.batch import BatchResult

RULE = "-" * 56
HISTOGRAM_RULE = "    " + "-" * 66
MAX_BAR_WIDTH = 40


def format_header(config: ScenarioConfig) -> str:
    """Render the title block and the summary table header.

    Args:
        config: Scenario being reported.

    Returns:
        Multi-line header ending with the table rule.
    """
    lines = [
        "--- Casino Ruin Simulation ---",
        f"House Win Probability: {config.edge_probability * 100.0:.4f}%",
        f"Bet Amount: ${config.bet_amount:g}",
        f"Simulating {config.trial_count} runs of "
        f"{config.rounds_per_trial} bets each...",
        RULE,
        f"{'House Bankroll':>18} | {'Ruin Count':>12} | Ruin Prob (%)",
        RULE,
    ]
    return "\n".join(lines)


def format_batch_row(result: BatchResult) -> str:
    """Render one summary table row for a batch."""
    return (
        f"${result.params.starting_bankroll:>17.5f} | "
        f"{result.ruin_count:>12d} | "
        f"{result.ruin_probability * 100.0:>12.5f}"
    )


def _bar(count: int, max_count: int, max_bar_width: int) -> str:
    if max_count <= 0:
        return ""
    return "#" * int((count / max_count) * max_bar_width)


def format_histogram(
    histogram: Histogram | NoData,
    max_bar_width: int = MAX_BAR_WIDTH,
) -> str:
    """Render the final bankroll distribution block.

    Each bin gets one line with its range, a bar scaled so the fullest bin
    spans ``max_bar_width`` characters, the count, and its share of the
    survivors.

    Args:
        histogram: Output of ``build_histogram``.
        max_bar_width: Width of the longest bar in characters.

    Returns:
        Multi-line text block, or a one-line notice for NoData.
    """
    if isinstance(histogram, NoData):
        return f"    {histogram.reason}"

    total = histogram.total
    lines = [
        "",
        f"    --- Final Bankroll Distribution (for {total} surviving runs) ---",
        f"    Min Surviving Bankroll: ${histogram.min_value:g}",
        f"    Max Surviving Bankroll: ${histogram.max_value:g}",
        HISTOGRAM_RULE,
    ]
    for b in histogram.bins:
        bar = _bar(b.count, histogram.max_count, max_bar_width)
        percentage = (b.count / total) * 100.0 if total > 0 else 0.0
        lines.append(
            f"    ${b.lower:>12.2f} - ${b.upper:>12.2f} | {bar} "
            f"({b.count}, {percentage:.1f}%)"
        )
    lines.append(HISTOGRAM_RULE)
    return "\n".join(lines)


def format_report(
    config: ScenarioConfig,
    results: Sequence[BatchResult],
    include_histograms: bool = True,
) -> str:
    """Render the complete report for a scenario.

    Args:
        config: Scenario the batches were run with.
        results: One batch per starting bankroll, in display order.
        include_histograms: Render the surviving bankroll distribution
            below each row.

    Returns:
        The full report text.
    """
    parts = [format_header(config)]
    for result in results:
        parts.append(format_batch_row(result))
        if include_histograms:
            histogram = build_histogram(
                result.final_bankrolls,
                result.params.bet_amount,
                config.histogram_bins,
            )
            parts.append(format_histogram(histogram))
            parts.append("")
    parts.append(RULE)
    parts.append("Simulation complete.")
    return "\n".join(parts)
