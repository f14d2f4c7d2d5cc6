"""Sheet Analyst - upload a spreadsheet, explore it, ask questions"""
import pandas as pd
import streamlit as st

from sheet_analyst import ParseError, analyze_grid, parse_spreadsheet
from sheet_analyst.analyze import preview_frame
from sheet_analyst.config import load_settings
from sheet_analyst.plots import PALETTE
from sheet_analyst.profile import column_statistics
from sheet_analyst.session import ChatSession

st.set_page_config(
    page_title="Sheet Analyst",
    page_icon="📊",
    layout="wide"
)

SETTINGS = load_settings()


def reset_state():
    for key in ("analysis", "chat", "file_key"):
        st.session_state.pop(key, None)
    # A fresh widget key clears the uploader.
    st.session_state["uploader_id"] = st.session_state.get("uploader_id", 0) + 1


def handle_upload(uploaded):
    """Parse a new upload; keep the previous analysis if parsing fails."""
    file_key = f"{uploaded.name}:{uploaded.size}"
    if st.session_state.get("file_key") == file_key:
        return

    try:
        grid = parse_spreadsheet(uploaded.getvalue(), filename=uploaded.name)
    except ParseError as e:
        st.error(f"Error uploading file. Please make sure you're uploading a valid spreadsheet. ({e})")
        return

    analysis = analyze_grid(grid, source_name=uploaded.name)
    st.session_state["analysis"] = analysis
    st.session_state["file_key"] = file_key
    st.session_state["chat"] = ChatSession(analysis, settings=SETTINGS)
    st.success(f"File uploaded successfully! Loaded {grid.total_rows + 1:,} rows from {uploaded.name}")


def render_preview(analysis):
    st.subheader(f"Data Preview ({analysis.source_name})")
    frame, note = preview_frame(analysis.grid, limit=SETTINGS.preview_rows)
    st.dataframe(frame, width="stretch", hide_index=True)
    if note:
        st.caption(note)


def render_analytics(analysis):
    if not analysis.grid.has_data:
        st.info("The file has a header row but no data rows.")
        return

    s = analysis.summary
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Rows", f"{s.total_rows:,}")
    col2.metric("Total Columns", str(s.total_columns))
    col3.metric("Numeric Columns", str(s.numeric_column_count))
    col4.metric("Data Completeness", f"{s.completeness}%")

    left, right = st.columns(2)
    charts = analysis.charts
    if charts.row_series:
        with left:
            st.markdown("**Data Distribution**")
            df = pd.DataFrame([p.to_dict() for p in charts.row_series])
            st.bar_chart(df, x="label", y="value", color=PALETTE[0])
    if charts.column_average_series:
        with right:
            st.markdown("**Column Averages**")
            for p in charts.column_average_series:
                color = PALETTE[p.color_slot or 0]
                st.markdown(
                    f"<span style='color:{color}'>●</span> {p.label}: {p.value:.2f}",
                    unsafe_allow_html=True,
                )

    stats = column_statistics(analysis.profiles)
    if stats:
        st.markdown("**Column Statistics**")
        st.dataframe(pd.DataFrame(stats), width="stretch", hide_index=True)


def render_chat():
    chat = st.session_state["chat"]
    for msg in chat.messages:
        with st.chat_message(msg.role.value):
            st.markdown(msg.content)

    question = st.chat_input("Ask me about your data...")
    if not question or not question.strip():
        return

    with st.chat_message("user"):
        st.markdown(question.strip())
    with st.chat_message("assistant"):
        with st.spinner("Analyzing..."):
            reply = chat.ask(question)
        st.markdown(reply.content)


def main():
    st.title("Sheet Analyst")
    st.caption("Upload a spreadsheet to get instant statistics, charts and answers to your questions.")

    uploaded = st.file_uploader(
        "Upload Excel or CSV file",
        type=["xlsx", "xls", "csv"],
        key=f"uploader_{st.session_state.get('uploader_id', 0)}",
    )
    if uploaded is not None:
        handle_upload(uploaded)

    analysis = st.session_state.get("analysis")
    if analysis is None:
        return

    if st.button("Upload New File"):
        reset_state()
        st.rerun()

    tab_data, tab_analytics, tab_chat = st.tabs(["Data", "Analytics", "Chat"])
    with tab_data:
        render_preview(analysis)
    with tab_analytics:
        render_analytics(analysis)
    with tab_chat:
        render_chat()


main()
