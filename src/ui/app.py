import asyncio
import logging
import streamlit as st
from src.config import Settings
from src.templates.engine import extract_placeholders
from src.utils.errors import PromptDesignerError
from src.utils.logging import setup_logging
from src.workflow.designer import PromptDesigner

settings = Settings()
logger = setup_logging(settings.log_level)

# Avoid repeating this on every Streamlit rerun
if "logger_announced" not in st.session_state:
    logger.info("UI logger is configured (should appear in terminal).")
    st.session_state["logger_announced"] = True


# ----------------------------
# Async runner (Streamlit-safe for Python 3.11)
# ----------------------------
def run_async(coro):
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


# ----------------------------
# UI Setup
# ----------------------------
st.set_page_config(page_title="Prompt Template Designer", page_icon="🧩", layout="wide")
st.title("🧩 Prompt Template Designer")

# Keep designer instance stable
if "designer" not in st.session_state:
    st.session_state.designer = PromptDesigner(settings, logging.getLogger("PromptDesigner"))

designer: PromptDesigner = st.session_state.designer

# Canonical session state
if "token" not in st.session_state:
    st.session_state["token"] = None
if "user" not in st.session_state:
    st.session_state["user"] = None
if "last_result" not in st.session_state:
    st.session_state["last_result"] = None


# ----------------------------
# Sidebar: account
# ----------------------------
st.sidebar.header("Account")

if st.session_state["token"]:
    st.sidebar.caption(f"Signed in as **{st.session_state['user'].email}**")
    if st.sidebar.button("Sign out"):
        st.session_state["token"] = None
        st.session_state["user"] = None
        st.session_state["last_result"] = None
        st.rerun()
else:
    mode = st.sidebar.radio("Mode", options=["Sign in", "Register"], horizontal=True)
    email = st.sidebar.text_input("Email")
    password = st.sidebar.text_input("Password", type="password")
    if st.sidebar.button(mode, type="primary"):
        try:
            if mode == "Register":
                session = designer.register(email, password)
            else:
                session = designer.login(email, password)
        except PromptDesignerError as e:
            st.sidebar.error(str(e))
        else:
            st.session_state["token"] = session.token
            st.session_state["user"] = session.user
            st.rerun()

if not st.session_state["token"]:
    st.info("Sign in or register to manage your prompt templates.")
    st.stop()

token = st.session_state["token"]

try:
    templates = designer.list_templates(token)
except PromptDesignerError as e:
    # expired or revoked token
    st.session_state["token"] = None
    st.error(str(e))
    st.stop()


# ----------------------------
# Template picker + editor
# ----------------------------
st.subheader("Templates")

NEW_TEMPLATE = "(new template)"
options = [t.id for t in templates] + [NEW_TEMPLATE]
selected_id = st.selectbox(
    "Template",
    options=options,
    format_func=lambda tid: tid if tid == NEW_TEMPLATE else next(t.name for t in templates if t.id == tid),
)
selected = next((t for t in templates if t.id == selected_id), None)

with st.form(key=f"editor_{selected_id}"):
    tpl_id = st.text_input("Id", value=selected.id if selected else "", disabled=selected is not None)
    tpl_name = st.text_input("Name", value=selected.name if selected else "")
    tpl_description = st.text_input("Description", value=selected.description if selected else "")
    tpl_body = st.text_area(
        "Body",
        value=selected.body if selected else "",
        placeholder="Hi {{recipientName}}, following up on {{topic}}...",
        height=220,
    )
    saved = st.form_submit_button("Save changes" if selected else "Create template")

if saved:
    try:
        if selected:
            designer.update_template(
                token,
                selected.id,
                {"name": tpl_name, "description": tpl_description, "body": tpl_body},
            )
        else:
            designer.create_template(
                token,
                {"id": tpl_id, "name": tpl_name, "description": tpl_description, "body": tpl_body},
            )
    except PromptDesignerError as e:
        st.error(str(e))
    else:
        st.success("Template saved.")
        st.rerun()

st.divider()


# ----------------------------
# Values + generate
# ----------------------------
left, right = st.columns(2)

with left:
    st.subheader("Placeholder Values")
    variables = extract_placeholders(tpl_body)
    if not variables:
        st.caption("This template has no {{placeholders}}.")

    values = {}
    for name in variables:
        entered = st.text_input(name, key=f"value_{selected_id}_{name}")
        if entered:
            values[name] = entered

    improve = st.checkbox(
        "Improve with AI",
        value=False,
        disabled=not designer.workflow.enhancer_configured,
        help=None if designer.workflow.enhancer_configured else "Set OPENAI_API_KEY to enable.",
    )

    if st.button("Generate Prompt", type="primary", disabled=not bool(tpl_body.strip())):
        with st.spinner("Generating..."):
            try:
                st.session_state["last_result"] = run_async(
                    designer.generate(token, tpl_body, values=values, improve=improve)
                )
            except PromptDesignerError as e:
                st.error(str(e))

        result = st.session_state["last_result"]
        if result is not None:
            logger.info(f"UI received resolved length: {len(result.resolved)} source={result.source}")

with right:
    st.subheader("Result")
    result = st.session_state.get("last_result")
    if result is None:
        st.caption("Generate a prompt to see the result here.")
    else:
        cols = st.columns(2)
        cols[0].markdown(f"**Source:** `{result.source}`")
        cols[1].markdown(f"**Variables:** {', '.join(f'`{v}`' for v in result.variables) or 'none'}")
        if result.note:
            st.warning(result.note)
        st.code(result.resolved, language=None)
        st.download_button(
            "Export (.txt)",
            data=result.resolved,
            file_name="prompt.txt",
            mime="text/plain",
        )
