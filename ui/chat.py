"""Streamlit chat interface for the ValoCoach assistant."""

import asyncio

import streamlit as st

from valocoach.auth import AuthError, IdentityClient
from valocoach.auth.context import AuthContext
from valocoach.config import get_settings
from valocoach.core.generation import HttpTextGenerator
from valocoach.core.orchestrator import ChatOrchestrator
from valocoach.core.persona import AGENTS, DEFAULT_AGENT, DEFAULT_PLAYER_NAME, DEFAULT_RANK, RANKS
from valocoach.core.profile_editor import ProfileEditor
from valocoach.store import ChatHistoryStore, ProfileStore, create_store_client

settings = get_settings()

st.set_page_config(
    page_title="ValoCoach - Valorant AI Coach",
    page_icon="🎯",
    layout="wide",
)


def _build_state() -> None:
    """Create the per-browser-session auth context and orchestrator once."""
    auth = None
    history = None
    if settings.supabase_configured:
        client = create_store_client(settings.supabase_url, settings.supabase_anon_key)
        auth = AuthContext(
            IdentityClient(client, signup_redirect_url=settings.signup_redirect_url),
            ProfileStore(client),
        )
        history = ChatHistoryStore(client)
        asyncio.run(auth.start())

    st.session_state.auth = auth
    st.session_state.profile_editor = (
        ProfileEditor(auth, delay=settings.profile_save_delay) if auth else None
    )
    st.session_state.orchestrator = ChatOrchestrator(
        HttpTextGenerator(settings.chat_api_url, timeout=settings.chat_timeout),
        auth=auth,
        history=history,
        streaming=settings.chat_streaming,
    )


if "orchestrator" not in st.session_state:
    _build_state()

auth: AuthContext | None = st.session_state.auth
orchestrator: ChatOrchestrator = st.session_state.orchestrator


def _sign_in_form() -> None:
    mode = st.radio("Account", ["Sign in", "Sign up"], horizontal=True)
    with st.form("auth_form"):
        display_name = st.text_input("Display name") if mode == "Sign up" else ""
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        repeat = st.text_input("Repeat password", type="password") if mode == "Sign up" else ""
        submitted = st.form_submit_button(mode, use_container_width=True)

    if not submitted:
        return
    try:
        if mode == "Sign in":
            asyncio.run(auth.sign_in(email, password))
            st.rerun()
        user = asyncio.run(auth.sign_up(email, password, repeat, display_name))
        if user is not None and user.access_token:
            st.rerun()
        st.success("Account created. Check your e-mail to confirm it, then sign in.")
    except AuthError as e:
        st.error(str(e))


async def _save_profile(**fields) -> None:
    # The form submits all fields in one action, and each rerun owns its own
    # event loop, so the edit is flushed here instead of waiting out the delay.
    editor: ProfileEditor = st.session_state.profile_editor
    editor.edit(**fields)
    await editor.flush()


def _profile_form() -> None:
    profile = auth.profile
    agent_ids = [a.id for a in AGENTS]
    rank_ids = [r.id for r in RANKS]
    current_agent = (profile.valorant_agent if profile else None) or DEFAULT_AGENT.id
    current_rank = (profile.valorant_rank if profile else None) or DEFAULT_RANK.id

    with st.form("profile_form"):
        name = st.text_input(
            "Player name",
            value=(profile.display_name if profile else None) or DEFAULT_PLAYER_NAME,
        )
        agent = st.selectbox(
            "Main agent",
            agent_ids,
            index=agent_ids.index(current_agent) if current_agent in agent_ids else 0,
            format_func=lambda i: next(f"{a.name} ({a.role})" for a in AGENTS if a.id == i),
        )
        rank = st.selectbox(
            "Rank",
            rank_ids,
            index=rank_ids.index(current_rank) if current_rank in rank_ids else 3,
            format_func=lambda i: next(r.name for r in RANKS if r.id == i),
        )
        if st.form_submit_button("Save profile", use_container_width=True):
            asyncio.run(
                _save_profile(display_name=name, valorant_agent=agent, valorant_rank=rank)
            )
            if auth.profile is None:
                st.warning("Profile could not be saved right now.")


# Sidebar
with st.sidebar:
    st.title("ValoCoach")
    st.caption("Valorant AI Coach")

    if st.button("New Chat", use_container_width=True, disabled=orchestrator.is_pending):
        orchestrator.reset()
        st.rerun()

    if orchestrator.session:
        st.caption(f"Session: {orchestrator.session.id[:8]}...")

    if orchestrator.is_authenticated:
        with st.expander("Recent chats"):
            for stored in asyncio.run(orchestrator.recent_sessions())[:10]:
                label = f"{stored.title} · {stored.id[:8]}"
                if st.button(label, key=f"session-{stored.id}", disabled=orchestrator.is_pending):
                    if asyncio.run(orchestrator.resume(stored)):
                        st.rerun()
                    st.warning("That chat could not be loaded right now.")

    st.divider()

    if auth is None:
        st.info("Sign-in is unavailable. Chats are kept in this tab only.")
    elif auth.is_authenticated:
        st.caption(f"Signed in as {auth.user.email}")
        _profile_form()
        if st.button("Sign out", use_container_width=True):
            try:
                asyncio.run(auth.sign_out())
            except AuthError as e:
                st.error(str(e))
            orchestrator.reset()
            st.rerun()
    else:
        _sign_in_form()

# Main chat area
st.header(orchestrator.greeting)

for msg in orchestrator.messages:
    with st.chat_message(msg.role.value):
        st.markdown(msg.content)

if prompt := st.chat_input("Ask your coach anything...", disabled=orchestrator.is_pending):
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        placeholder = st.empty()

        def _show_partial(event) -> None:
            if event.kind == "partial":
                placeholder.markdown(event.partial)

        unsubscribe = orchestrator.subscribe(_show_partial)
        try:
            with st.spinner("Thinking..."):
                reply = asyncio.run(orchestrator.submit(prompt))
        finally:
            unsubscribe()
        if reply is not None:
            placeholder.markdown(reply.content)
