"""Streamlit application for interactive house ruin simulation.

This module provides a web-based interface for running Monte Carlo ruin
simulations with adjustable parameters and Plotly visualizations.
"""

import streamlit as st

from houseruin.config import BANKROLL_SWEEP, ScenarioConfig
from houseruin.exceptions import InvalidConfigurationError
from houseruin.metrics.histogram import build_histogram
from houseruin.metrics.risk import (
    expected_final_value,
    final_value_percentiles,
    surviving_mean,
    theoretical_ruin_probability,
)
from houseruin.sim.batch import BatchResult, run_batch
from houseruin.ui.charts import (
    create_histogram_chart,
    create_ruin_curve_chart,
    create_ruin_gauge,
)

CUSTOM_CSS = """
<style>
    h1 {
        border-bottom: 2px solid #D4AF37;
        padding-bottom: 0.5rem;
    }

    [data-testid="stSidebar"] {
        border-right: 3px solid #D4AF37;
    }

    [data-testid="stMetric"] {
        background: rgba(27, 94, 32, 0.15);
        border: 1px solid #2E7D32;
        border-radius: 8px;
        padding: 0.75rem;
    }
</style>
"""


def render_sidebar() -> ScenarioConfig | None:
    """Render the sidebar controls and build the scenario configuration.

    Returns:
        The configuration, or None if the inputs are invalid (an error is
        shown in the sidebar).
    """
    defaults = ScenarioConfig()
    st.sidebar.header("Simulation Parameters")

    edge_pct = st.sidebar.slider(
        "House Win Probability (%)",
        min_value=0.0,
        max_value=100.0,
        value=round(defaults.edge_probability * 100, 2),
        step=0.01,
        help="Chance the house wins a single even-money bet (5/9 = 55.56%)",
    )
    bet_amount = st.sidebar.number_input(
        "Bet Amount ($)",
        min_value=1.0,
        value=defaults.bet_amount,
        step=5.0,
    )
    rounds = st.sidebar.number_input(
        "Bets per Run",
        min_value=0,
        max_value=1_000_000,
        value=defaults.rounds_per_trial,
        step=100,
    )

    st.sidebar.subheader("Starting Bankrolls")
    compare = st.sidebar.checkbox(
        "Compare bankroll sweep",
        value=False,
        help="Run one batch per bankroll in " + ", ".join(f"${b:,.0f}" for b in BANKROLL_SWEEP),
    )
    if compare:
        bankrolls = BANKROLL_SWEEP
    else:
        bankrolls = (
            st.sidebar.number_input(
                "House Bankroll ($)",
                min_value=1.0,
                value=defaults.starting_bankrolls[0],
                step=100.0,
            ),
        )

    st.sidebar.subheader("Simulation Settings")
    histogram_bins = st.sidebar.slider(
        "Histogram Bins", min_value=1, max_value=50, value=defaults.histogram_bins
    )
    use_seed = st.sidebar.checkbox("Use fixed random seed", value=False)
    seed = None
    if use_seed:
        seed = int(st.sidebar.number_input("Random Seed", min_value=0, value=42, step=1))

    try:
        return ScenarioConfig(
            edge_probability=edge_pct / 100.0,
            bet_amount=float(bet_amount),
            rounds_per_trial=int(rounds),
            histogram_bins=int(histogram_bins),
            starting_bankrolls=tuple(float(b) for b in bankrolls),
            seed=seed,
        )
    except InvalidConfigurationError as e:
        st.sidebar.error(f"Invalid parameters: {e}")
        return None


def render_batch_report(result: BatchResult, config: ScenarioConfig) -> None:
    """Render the gauge, metrics and histogram for one batch."""
    st.subheader(f"House Bankroll ${result.params.starting_bankroll:,.0f}")

    col_gauge, col_metrics = st.columns([1, 1])

    with col_gauge:
        st.plotly_chart(create_ruin_gauge(result.ruin_probability), use_container_width=True)

    with col_metrics:
        st.metric(
            "Ruined Runs",
            f"{result.ruin_count:,} / {result.trial_count:,}",
            help="Runs where the bankroll fell below one bet",
        )
        st.metric(
            "Unlimited-Rounds Ruin",
            f"{theoretical_ruin_probability(result.params) * 100:.4f}%",
            help="Classical gambler's ruin probability with no round limit",
        )
        st.metric("Mean Final Bankroll", f"${expected_final_value(result):,.2f}")
        st.metric("Mean Surviving Bankroll", f"${surviving_mean(result):,.2f}")

    histogram = build_histogram(
        result.final_bankrolls, result.params.bet_amount, config.histogram_bins
    )
    st.plotly_chart(create_histogram_chart(histogram), use_container_width=True)

    with st.expander("Final Bankroll Percentiles"):
        pct = final_value_percentiles(result)
        cols = st.columns(len(pct))
        for col, (p, value) in zip(cols, pct.items()):
            with col:
                st.metric(f"P{p:g}", f"${value:,.2f}")


def init_session_state() -> None:
    """Initialize session state variables."""
    if "results" not in st.session_state:
        st.session_state.results = None
    if "config" not in st.session_state:
        st.session_state.config = None


def run_simulation_cached(config: ScenarioConfig, trial_count: int) -> list[BatchResult]:
    """Run one batch per bankroll and cache the results in session state."""
    seed_source = config.seed_source()
    results = [
        run_batch(config.parameters_for(b), trial_count, seed_source=seed_source)
        for b in config.starting_bankrolls
    ]
    st.session_state.results = results
    st.session_state.config = config
    return results


def render_main_content_from_state() -> None:
    """Render results stored in session state."""
    results = st.session_state.results
    config = st.session_state.config
    if results is None or config is None:
        return

    if len(results) > 1:
        st.plotly_chart(create_ruin_curve_chart(results), use_container_width=True)

    for result in results:
        render_batch_report(result, config)
        st.divider()


def main() -> None:
    """Main entry point for the Streamlit application."""
    st.set_page_config(
        page_title="House Ruin Simulator",
        page_icon="🎲",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

    init_session_state()

    st.title("House Ruin: Casino Bankroll Simulator")
    st.markdown(
        """
        Monte Carlo simulation of the gambler's ruin problem from the house
        side: fixed-size even-money bets won with a fixed edge, against a
        finite bankroll. A run is ruined as soon as the house can no longer
        cover one payout.
        """
    )

    config = render_sidebar()

    trial_count = st.select_slider(
        "Runs per Bankroll",
        options=[100, 1000, 5000, 10000, 50000, 100000],
        value=10000,
        help="More runs = more accurate probability, but slower simulation",
    )

    if st.button(
        "Run Simulation", type="primary", use_container_width=True, disabled=config is None
    ):
        with st.spinner("Running simulation..."):
            run_simulation_cached(config, trial_count)

    if st.session_state.results is not None:
        render_main_content_from_state()
    else:
        st.info("Adjust parameters in the sidebar and click 'Run Simulation'")

    st.markdown("---")
    st.markdown(
        "*Built with [Streamlit](https://streamlit.io) and "
        "[Plotly](https://plotly.com) | House Ruin v0.1.0*"
    )


if __name__ == "__main__":
    main()
