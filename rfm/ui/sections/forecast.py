from __future__ import annotations
import pandas as pd
import streamlit as st
from rfm.plots import forecast_figure
from rfm.presentation import (
    PAGE_STEP,
    build_chart_model,
    next_visible,
    paginate_readings,
    predictions_frame,
    readings_frame,
)
from rfm.stations import get_station
from rfm.trends import rolling_trend
from rfm.ui.state import LoadedStation

__all__ = ["render_forecast"]


def render_forecast(ld: LoadedStation):
    station = get_station(ld.code)
    st.subheader(f"{station.code} Water Level Prediction")
    if ld.error or ld.result is None:
        st.error(ld.error or "No data.")
        return
    res = ld.result
    model = build_chart_model(res.readings, res.predictions, title=f"{station.code} Water Level - Historical and Predicted")
    st.plotly_chart(forecast_figure(model), config={"displaylogo": False}, use_container_width=True)

    c1, c2, c3 = st.columns(3)
    c1.metric("Last level (m)", "N/A" if res.last_value is None else f"{res.last_value:.2f}")
    c2.metric("Trend (m/h)", f"{res.trend:+.4f}")
    c3.metric("Usable readings", f"{len(res.series)} / {ld.row_count}")

    key = f"visible_{ld.code}"
    visible = st.session_state.get(key, PAGE_STEP)
    page = paginate_readings(res.readings, visible)
    st.markdown("**Previous Water Level Data**")
    st.dataframe(readings_frame(page), hide_index=True, use_container_width=True)
    if page.has_more and st.button("Load More", key=f"more_{ld.code}"):
        st.session_state[key] = next_visible(visible)
        st.rerun()

    st.markdown("**Predicted Water Levels (Next 24 Hours)**")
    st.dataframe(predictions_frame(res.predictions), hide_index=True, use_container_width=True)

    with st.expander("Trend over time", expanded=False):
        if len(res.series) < 2:
            st.info("Not enough readings for a trend.")
        else:
            st.line_chart(pd.DataFrame({"trend_m_per_step": rolling_trend(pd.Series(res.series))}), height=200)
