import json
import os
import sys

import streamlit as st

# Ensure the local package (fpd/) is importable when running via an absolute path
sys.path.insert(0, os.path.dirname(__file__))

from fpd.core.config import Configuration
from fpd.core.engine import projection_frame, run_projection
from fpd.core.summary import summarize, summary_frame
from fpd.core.validation import get_validation_warnings
from fpd.ui.charts import render_charts, render_projection_table, render_summary_cards
from fpd.ui.sidebar_inputs import render_sidebar
from fpd.ui.theme import inject_global_css


# --- Cached recomputation ---
# Streamlit reruns the script on every widget change.  The projection is
# cheap, but identical configurations are common (e.g. toggling a preset
# back), so results are memoized on the configuration's canonical JSON.
@st.cache_data(show_spinner=False, max_entries=256)
def _cached_projection(cfg_json: str):
    config = Configuration.from_dict(json.loads(cfg_json))
    result = run_projection(config)
    return result, get_validation_warnings(config)


def _cfg_json(config: Configuration) -> str:
    return json.dumps(config.to_dict(), sort_keys=True, separators=(",", ":"))


st.set_page_config(page_title="Family Investment Portfolio", layout="wide", page_icon="📈")
inject_global_css(st)

config = render_sidebar(st)
result, notices = _cached_projection(_cfg_json(config))
rows = result.rows
summary = summarize(config, rows)
df = projection_frame(rows)

st.title("Family Investment Portfolio Dashboard")

render_summary_cards(summary, st)

for msg in notices:
    st.warning(msg)

if result.withdrawal is not None:
    w = result.withdrawal
    st.caption(
        f"Down payment {w.year}: ${w.from_fhsa:,.0f} from FHSA, ${w.from_rrsp:,.0f} from RRSP"
        + (f", ${w.shortfall:,.0f} unfunded" if w.shortfall > 0.005 else "")
        + "."
    )

render_charts(rows, st)
render_projection_table(df, st)

st.download_button(
    label="Download projection (CSV)",
    data=df.to_csv(index=False),
    file_name="portfolio_projection.csv",
    mime="text/csv",
)
st.download_button(
    label="Download summary (CSV)",
    data=summary_frame(summary).to_csv(index=False),
    file_name="portfolio_summary.csv",
    mime="text/csv",
)
