import asyncio

import streamlit as st

from schedule_sensei.config import get_settings
from schedule_sensei.ingestion import tasks_to_frame
from schedule_sensei.logging_setup import configure_logging
from schedule_sensei.session import ConsultantSession
import schedule_sensei.event_handlers  # noqa: F401  registers log listeners

settings = get_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="AI Scheduling Consultant", layout="wide")
st.title("AI Scheduling Consultant")
st.write(
    "Upload a Microsoft Project XML file and ask a question to get a full "
    "schedule breakdown and AI advice."
)

if "consultant" not in st.session_state:
    st.session_state["consultant"] = ConsultantSession()
session: ConsultantSession = st.session_state["consultant"]

col_file, col_question = st.columns([1, 2])
with col_file:
    uploaded = st.file_uploader("Upload MS Project XML", type=["xml"])
with col_question:
    session.question = st.text_input(
        "Question for AI Consultant (leave blank for full analysis)",
        value=session.question,
        placeholder="e.g. What is the critical path?",
    )

# a different upload resets everything parsed or answered for the old one
if uploaded is not None:
    session.select_upload(uploaded.file_id, uploaded.name, uploaded.getvalue())

session.credential = st.text_input(
    "OpenAI API Key", type="password", value=session.credential, placeholder="sk-..."
)
session.include_summary = not st.checkbox("Exclude summary tasks", value=not session.include_summary)

if st.button("Parse & Preview", disabled=uploaded is None or session.parsing):
    with st.spinner("Parsing..."):
        session.parse()

if session.parse_error:
    st.error(session.parse_error)

if session.tasks is not None:
    st.markdown(f"**Parsed {len(session.tasks)} tasks.**")
    preview = session.first_task_preview()
    if preview:
        st.code(preview, language="json")
        with st.expander("All tasks"):
            st.dataframe(tasks_to_frame(session.tasks), use_container_width=True)

    if st.button("Send to AI", disabled=session.ai_loading):
        with st.spinner("Consulting AI..."):
            asyncio.run(session.send_to_ai(settings=settings))

    if session.ai_error:
        st.error(session.ai_error)
    if session.response:
        st.subheader("AI Response")
        with st.container(height=400):
            st.markdown(session.response)
