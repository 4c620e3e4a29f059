# Role: Streamlit popup-style UI (Presentation Layer).
# - Backend is authoritative (query + status + history).
# - Sidebar shows agent status, example queries, and the step log of the last query.

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

import smart_converter.config
smart_converter.config.load_env()

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")

TOOL_ICONS = {"unit": "📏", "currency": "💱", "datetime": "📅"}
STEP_ICONS = {
    "User Query": "💬",
    "Agent Thought": "🧠",
    "Tool Call": "🔧",
    "Tool Result": "📦",
    "Agent Observation": "👀",
    "Final Answer": "✅",
    "Error": "⚠️",
}


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "last_result" not in st.session_state:
        st.session_state["last_result"] = None
    if "busy" not in st.session_state:
        st.session_state["busy"] = False
    if "pending_query" not in st.session_state:
        st.session_state["pending_query"] = None


# ----------------------------
# Backend calls
# ----------------------------
def send_to_backend(query: str) -> Dict[str, Any]:
    resp = requests.post(f"{BACKEND_URL}/query", json={"query": query}, timeout=60)
    resp.raise_for_status()
    return resp.json()


def fetch_status() -> Optional[Dict[str, Any]]:
    try:
        r = requests.get(f"{BACKEND_URL}/status", timeout=10)
        if r.status_code != 200:
            return None
        return r.json()
    except requests.RequestException:
        return None


def fetch_examples() -> List[str]:
    try:
        r = requests.get(f"{BACKEND_URL}/examples", timeout=10)
        if r.status_code != 200:
            return []
        return r.json().get("examples", [])
    except requests.RequestException:
        return []


def clear_backend_history() -> None:
    try:
        requests.post(f"{BACKEND_URL}/history/clear", timeout=10)
    except requests.RequestException:
        st.sidebar.warning("Could not reach the backend to clear history.")


# ----------------------------
# Rendering
# ----------------------------
def render_sidebar() -> None:
    st.sidebar.title("Agent")

    status = fetch_status()
    if status is None:
        st.sidebar.error(f"Backend not reachable at {BACKEND_URL}")
    elif status.get("is_configured"):
        st.sidebar.success(f"LLM ready ({status.get('model_name')})")
    else:
        st.sidebar.warning("No Gemini API key: keyword analysis and local answers are used.")

    if status is not None:
        st.sidebar.caption(f"History entries: {status.get('history_length', 0)}")

    if st.sidebar.button("🧹 Clear history", use_container_width=True, disabled=st.session_state["busy"]):
        clear_backend_history()
        st.session_state["last_result"] = None
        st.rerun()

    st.sidebar.divider()
    st.sidebar.subheader("Try an example")
    for example in fetch_examples():
        if st.sidebar.button(example, use_container_width=True, disabled=st.session_state["busy"]):
            st.session_state["pending_query"] = example
            st.rerun()


def render_tool_results(tool_results: List[Dict[str, Any]]) -> None:
    for tr in tool_results:
        tool = tr.get("tool", "")
        result = tr.get("result") or {}
        icon = TOOL_ICONS.get(tool, "🔧")
        with st.expander(f"{icon} {tool} tool", expanded=False):
            if result.get("success"):
                st.write(result.get("formatted") or "")
            else:
                st.error(result.get("error") or "Unknown error")
            st.json(result)


def render_steps(steps: List[Dict[str, Any]]) -> None:
    with st.expander("Agent log", expanded=False):
        for step in steps:
            icon = STEP_ICONS.get(step.get("type", ""), "•")
            st.markdown(f"{icon} **{step.get('type')}**: {step.get('content')}")


def render_result(result: Dict[str, Any]) -> None:
    if result.get("success"):
        st.success(result.get("final_response") or "")
    else:
        st.error(result.get("final_response") or result.get("error") or "")

    render_tool_results(result.get("tool_results") or [])
    render_steps(result.get("steps") or [])


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Smart Converter", page_icon="🔄", layout="centered")

    st.title("🔄 Smart Converter")
    st.caption("Units, currency and dates in one question, e.g. “Convert 5 miles to km and 100 USD to EUR”.")

    ensure_session()
    render_sidebar()

    with st.form("query_form", clear_on_submit=False):
        query = st.text_input("Your question", value=st.session_state.get("pending_query") or "")
        submitted = st.form_submit_button("Convert", disabled=st.session_state["busy"])

    if submitted and query.strip():
        st.session_state["busy"] = True
        try:
            with st.spinner("Thinking..."):
                st.session_state["last_result"] = send_to_backend(query.strip())
        except requests.RequestException:
            st.error(f"I couldn’t reach the backend. Make sure the API is running on {BACKEND_URL}.")
        finally:
            st.session_state["busy"] = False
            st.session_state["pending_query"] = None

    if st.session_state["last_result"]:
        render_result(st.session_state["last_result"])


if __name__ == "__main__":
    main()
