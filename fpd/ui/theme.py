# Minimal UI theme helpers

# --- Chart palette ---
TOTAL_COLOR = "#3b82f6"
RETURNS_COLOR = "#10b981"
GRID_COLOR = "#e2e8f0"
AXIS_COLOR = "#64748b"

ACCOUNT_COLORS = {
    "tfsa": "#3b82f6",
    "partner_tfsa": "#8b5cf6",
    "rrsp": "#10b981",
    "fhsa": "#f59e0b",
    "non_registered": "#ef4444",
    "crypto": "#ec4899",
}

# Stacking order for the composition chart (bottom to top).
STACK_ORDER = ("tfsa", "partner_tfsa", "rrsp", "fhsa", "non_registered", "crypto")

# Summary card accents, in card order.
CARD_COLORS = ("#2563eb", "#16a34a", "#9333ea", "#ea580c", "#db2777")

_CARD_CSS = r"""
div[data-testid="stMetric"]{
  border-radius: 12px;
  padding: 12px 16px;
  background: #f8fafc;
  border-left: 4px solid var(--fpd-card-accent, #2563eb);
}
div[data-testid="stMetricLabel"]{
  opacity: 0.9;
}
"""


def apply_plotly_theme(fig, *, height=None):
    """Final, lightweight normalization pass on any figure."""
    if height is not None:
        fig.update_layout(height=int(height))
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=10),
        template="plotly_white",
    )
    fig.update_xaxes(gridcolor=GRID_COLOR, linecolor=AXIS_COLOR, tickformat="d")
    fig.update_yaxes(gridcolor=GRID_COLOR, linecolor=AXIS_COLOR, griddash="dash")
    if fig.layout.hovermode is None:
        fig.update_layout(hovermode="x unified")
    return fig


def inject_global_css(st) -> None:
    """Inject the card stylesheet.

    Streamlit reruns can drop previously injected <style> tags, so this runs
    on every rerun.
    """
    st.markdown("<style>\n" + _CARD_CSS + "\n</style>", unsafe_allow_html=True)
