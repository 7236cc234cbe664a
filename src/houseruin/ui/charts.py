"""Plotly figures for the ruin simulator app."""

from collections.abc import Sequence

import plotly.graph_objects as go  # type: ignore[import-untyped]

from houseruin.metrics.histogram import Histogram, NoData
from houseruin.metrics.risk import theoretical_ruin_probability
from houseruin.sim.batch import BatchResult

# Casino floor palette
COLORS = {
    "felt_green": "#1B5E20",
    "felt_green_light": "#2E7D32",
    "wood_brown": "#5D4037",
    "wood_brown_light": "#795548",
    "card_red": "#C62828",
    "black_soft": "#2D2D2D",
    "gold": "#D4AF37",
    "gold_light": "#FFD700",
    "cream": "#F5F5DC",
}

_TITLE_FONT = {
    "family": "Playfair Display, Georgia, serif",
    "color": COLORS["gold"],
    "size": 18,
}


def risk_level(ruin_prob: float) -> tuple[str, str]:
    """Map a ruin probability to a label and a palette color.

    Returns:
        Tuple of (risk label, hex color).
    """
    if ruin_prob < 0.01:
        return "Very Low Risk", COLORS["felt_green"]
    if ruin_prob < 0.05:
        return "Low Risk", COLORS["felt_green_light"]
    if ruin_prob < 0.10:
        return "Moderate Risk", COLORS["gold"]
    if ruin_prob < 0.25:
        return "High Risk", COLORS["wood_brown_light"]
    return "Very High Risk", COLORS["card_red"]


def create_ruin_gauge(ruin_prob: float) -> go.Figure:
    """Create a gauge chart for the empirical ruin probability.

    Args:
        ruin_prob: Probability of ruin (0-1).

    Returns:
        Plotly Figure with gauge chart.
    """
    label, color = risk_level(ruin_prob)

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=ruin_prob * 100,
            number={"suffix": "%", "font": {"size": 28, "color": COLORS["gold"]}},
            title={
                "text": f"House Ruin<br><span style='font-size:14px;color:{COLORS['cream']}'>{label}</span>",
                "font": {"color": COLORS["gold"]},
            },
            gauge={
                "axis": {"range": [0, 100], "tickcolor": COLORS["cream"]},
                "bar": {"color": color},
                "bgcolor": COLORS["black_soft"],
                "borderwidth": 2,
                "bordercolor": COLORS["gold"],
                "steps": [
                    {"range": [0, 1], "color": "rgba(27, 94, 32, 0.4)"},
                    {"range": [1, 5], "color": "rgba(46, 125, 50, 0.3)"},
                    {"range": [5, 10], "color": "rgba(212, 175, 55, 0.3)"},
                    {"range": [10, 25], "color": "rgba(121, 85, 72, 0.3)"},
                    {"range": [25, 100], "color": "rgba(198, 40, 40, 0.3)"},
                ],
            },
        )
    )

    fig.update_layout(
        height=250,
        margin={"t": 80, "b": 20, "l": 30, "r": 30},
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )

    return fig


def create_histogram_chart(histogram: Histogram | NoData) -> go.Figure:
    """Create a bar chart of surviving final bankrolls.

    Args:
        histogram: Output of ``build_histogram``.

    Returns:
        Plotly Figure with one bar per bin, or an annotated empty figure
        when no trial survived.
    """
    fig = go.Figure()

    if isinstance(histogram, NoData):
        fig.add_annotation(
            text=histogram.reason,
            showarrow=False,
            font={"size": 16, "color": COLORS["card_red"]},
        )
    else:
        total = histogram.total
        fig.add_trace(
            go.Bar(
                x=[(b.lower + b.upper) / 2 for b in histogram.bins],
                y=[b.count for b in histogram.bins],
                width=[b.upper - b.lower for b in histogram.bins],
                marker={
                    "color": COLORS["felt_green_light"],
                    "line": {"color": COLORS["gold"], "width": 1},
                },
                customdata=[
                    [b.lower, b.upper, b.count / total * 100] for b in histogram.bins
                ],
                hovertemplate=(
                    "$%{customdata[0]:,.2f} - $%{customdata[1]:,.2f}"
                    "<br>%{y} runs (%{customdata[2]:.1f}%)<extra></extra>"
                ),
                name="Surviving Runs",
            )
        )

    fig.update_layout(
        title={"text": "Final Bankroll Distribution", "x": 0.5, "font": _TITLE_FONT},
        xaxis_title="Final Bankroll ($)",
        yaxis_title="Surviving Runs",
        bargap=0,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(13, 51, 16, 0.3)",
        font={"color": COLORS["cream"]},
        height=400,
    )

    return fig


def create_ruin_curve_chart(results: Sequence[BatchResult]) -> go.Figure:
    """Plot empirical ruin probability against starting bankroll.

    The unlimited-rounds gambler's ruin probability is drawn alongside as
    a reference line.

    Args:
        results: One batch per starting bankroll.

    Returns:
        Plotly Figure with empirical and reference lines.
    """
    ordered = sorted(results, key=lambda r: r.params.starting_bankroll)
    bankrolls = [r.params.starting_bankroll for r in ordered]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=bankrolls,
            y=[r.ruin_probability * 100 for r in ordered],
            mode="lines+markers",
            line={"color": COLORS["gold"], "width": 3},
            name="Simulated",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=bankrolls,
            y=[theoretical_ruin_probability(r.params) * 100 for r in ordered],
            mode="lines",
            line={"color": COLORS["card_red"], "dash": "dash"},
            name="Unlimited Rounds",
        )
    )

    fig.update_layout(
        title={"text": "Ruin Probability by Bankroll", "x": 0.5, "font": _TITLE_FONT},
        xaxis_title="Starting Bankroll ($)",
        yaxis_title="Ruin Probability (%)",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(13, 51, 16, 0.3)",
        font={"color": COLORS["cream"]},
        hovermode="x unified",
        height=400,
    )

    return fig
