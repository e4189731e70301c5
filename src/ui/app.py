"""Lifelog Optimizer -- Streamlit UI.

Multi-page application for turning a day of lifelogs into token-budgeted
exports that fit a language model's context window.
"""

from __future__ import annotations

import datetime as dt
import json

import streamlit as st

from src.config import settings
from src.pipeline_config import ChunkStrategy, OutputFormat, SummarizeLevel
from src.ui.api_client import (
    batch_process,
    check_health,
    consolidated_export,
    get_dates,
    multi_file_export,
    process_day,
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Lifelog Optimizer", layout="wide")

# ---------------------------------------------------------------------------
# Sidebar -- navigation + credentials + optimization options + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Lifelog Optimizer")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Process Day", "Export", "Batch", "Available Dates"],
        label_visibility="collapsed",
    )

    st.markdown("---")
    api_key = st.text_input(
        "Lifelog API key", value=settings.limitless_api_key, type="password"
    )
    timezone = st.text_input("Timezone", value=settings.default_timezone)

    st.subheader("Optimization")
    max_tokens = st.number_input(
        "Max tokens", min_value=500, value=settings.default_max_tokens, step=500
    )
    summarize_level: str = st.selectbox(
        "Summarization",
        options=[s.value for s in SummarizeLevel],
        index=1,
        format_func=lambda x: x.capitalize(),
    )
    include_timestamps = st.checkbox("Include timestamps", value=True)
    include_speakers = st.checkbox("Include speakers", value=True)

    st.markdown("---")

    # API connection indicator
    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

shared_options = {
    "timezone": timezone,
    "max_tokens": int(max_tokens),
    "include_timestamps": include_timestamps,
    "include_speakers": include_speakers,
    "summarize_level": summarize_level,
}


def _ready() -> bool:
    if not api_healthy:
        st.error("The API server is not reachable.")
        return False
    if not api_key:
        st.error("Enter your lifelog API key in the sidebar.")
        return False
    return True


# ---------------------------------------------------------------------------
# Page: Process Day
# ---------------------------------------------------------------------------
if page == "Process Day":
    st.header("Process Day")
    st.write("Fetch one day of lifelogs and fit it into the token budget.")

    day = st.date_input("Date", value=dt.date.today())
    col_a, col_b = st.columns(2)
    chunk_strategy: str = col_a.selectbox(
        "Chunk strategy",
        options=[s.value for s in ChunkStrategy],
        index=1,
        format_func=lambda x: x.capitalize(),
    )
    output_format: str = col_b.selectbox(
        "Output format", options=[f.value for f in OutputFormat]
    )

    if st.button("Process") and _ready():
        with st.spinner("Fetching and optimizing..."):
            result = process_day(
                api_key,
                date=day.isoformat(),
                chunk_strategy=chunk_strategy,
                output_format=output_format,
                **shared_options,
            )
        if result:
            m1, m2, m3 = st.columns(3)
            m1.metric("Entries", result.get("original_count", 0))
            m2.metric("Parts", result.get("processed_count", 0))
            m3.metric("Tokens", result.get("token_count", 0))

            output = result.get("output", "")
            if isinstance(output, dict):
                st.json(output)
                output = json.dumps(output, indent=2)
            elif output_format == OutputFormat.MARKDOWN.value:
                st.markdown(output)
            else:
                st.text(output)
            extension = {"markdown": "md", "json": "json", "text": "txt"}[output_format]
            st.download_button(
                "Download",
                data=output,
                file_name=f"lifelog_{day.isoformat()}.{extension}",
            )

# ---------------------------------------------------------------------------
# Page: Export
# ---------------------------------------------------------------------------
elif page == "Export":
    st.header("Export")
    st.write("Produce upload-ready files for a single day.")

    day = st.date_input("Date", value=dt.date.today())
    mode = st.radio("Export type", ["Multiple files", "Single consolidated file"])

    if mode == "Single consolidated file":
        budget = st.number_input(
            "Consolidated token budget",
            min_value=1000,
            value=settings.consolidated_max_tokens,
            step=1000,
        )

    if st.button("Export") and _ready():
        with st.spinner("Building export..."):
            if mode == "Multiple files":
                result = multi_file_export(api_key, date=day.isoformat(), **shared_options)
            else:
                options = {**shared_options, "max_tokens": int(budget)}
                result = consolidated_export(api_key, date=day.isoformat(), **options)

        if result and mode == "Multiple files":
            st.success(
                f"{result['total_files']} files, {result['total_tokens']} tokens "
                f"({result['strategy']})"
            )
            for f in [result["index_file"], *result["files"]]:
                with st.expander(f"{f['filename']} ({f['token_count']} tokens)"):
                    st.markdown(f["content"])
                    st.download_button(
                        "Download", data=f["content"], file_name=f["filename"], key=f["filename"]
                    )
        elif result:
            st.success(
                f"{result['token_count']} tokens from {result['original_entries']} entries "
                f"({result['strategy']})"
            )
            if result.get("omitted_estimate"):
                st.info(f"About {result['omitted_estimate']} entries did not fit the budget.")
            if result.get("topics"):
                st.write("**Topics:** " + ", ".join(result["topics"]))
            st.download_button("Download", data=result["content"], file_name=result["filename"])
            st.markdown(result["content"])

# ---------------------------------------------------------------------------
# Page: Batch
# ---------------------------------------------------------------------------
elif page == "Batch":
    st.header("Batch")
    st.write("Optimize every day in a range. Days without lifelogs are skipped.")

    col_a, col_b = st.columns(2)
    start = col_a.date_input("Start date", value=dt.date.today() - dt.timedelta(days=6))
    end = col_b.date_input("End date", value=dt.date.today())

    if st.button("Run batch") and _ready():
        with st.spinner("Processing dates..."):
            result = batch_process(
                api_key,
                start_date=start.isoformat(),
                end_date=end.isoformat(),
                timezone=timezone,
                max_tokens_per_day=int(max_tokens),
            )
        if result:
            m1, m2, m3 = st.columns(3)
            m1.metric("Dates", result["total_dates"])
            m2.metric("Successful", result["successful"])
            m3.metric("Failed", result["failed"])
            for r in result["results"]:
                if r["success"]:
                    with st.expander(f"{r['date']} -- {r['count']} entries, {r['token_count']} tokens"):
                        st.markdown(r["output"] if isinstance(r["output"], str) else "")
                else:
                    st.error(f"{r['date']}: {r['error']}")

# ---------------------------------------------------------------------------
# Page: Available Dates
# ---------------------------------------------------------------------------
elif page == "Available Dates":
    st.header("Available Dates")
    st.write("Recent days that have lifelog data.")

    days = st.slider("Look back (days)", min_value=7, max_value=90, value=30)
    if st.button("Load") and _ready():
        with st.spinner("Checking dates..."):
            dates = get_dates(api_key, days)
        if not dates:
            st.info("No lifelog data found in this window.")
        for d in dates:
            star = " :star:" if d.get("has_starred") else ""
            st.write(f"- **{d['date']}**: {d['count']} entries{star}")
