"""Streamlit UI for Document Vault - login gate, dashboard and document management.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio  # noqa: E402
import logging  # noqa: E402
from collections.abc import Coroutine  # noqa: E402
from datetime import timedelta  # noqa: E402
from typing import Any, TypeVar  # noqa: E402

import streamlit as st  # noqa: E402

from docvault.api.client import DocumentApiClient  # noqa: E402
from docvault.auth.gate import AuthGate, AuthState  # noqa: E402
from docvault.auth.storage import JsonFileStorage  # noqa: E402
from docvault.auth.verifier import FixedCredentialVerifier  # noqa: E402
from docvault.config import get_settings  # noqa: E402
from docvault.models import DownloadedFile, UploadDraft  # noqa: E402
from docvault.notices import NoticeBoard, NoticeKind  # noqa: E402
from docvault.store.document_store import DocumentStore  # noqa: E402
from docvault.store.errors import DocumentVaultError, InvalidCredentials  # noqa: E402
from ui.helpers import (  # noqa: E402
    build_document_card,
    build_stat_cards,
    format_file_size,
    format_upload_date,
    submit_upload,
    to_upload_file,
)

T = TypeVar("T")

settings = get_settings()
logging.basicConfig(level=settings.log_level)

# Page config
st.set_page_config(
    page_title="Document Vault",
    page_icon="🗄️",
    layout="wide",
)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run one store/gate coroutine to completion from a Streamlit rerun."""
    return asyncio.run(coro)


# Initialize session state
if "gate" not in st.session_state:
    st.session_state.gate = AuthGate(
        FixedCredentialVerifier.from_settings(settings),
        JsonFileStorage(settings.storage_path),
        email=settings.admin_email,
        session_key=settings.session_key,
        login_delay=settings.login_delay_seconds,
    )
if "store" not in st.session_state:
    st.session_state.store = DocumentStore(
        DocumentApiClient.from_settings(),
        recent_window=timedelta(days=settings.recent_window_days),
    )
    st.session_state.loaded = False
if "notices" not in st.session_state:
    st.session_state.notices = NoticeBoard(ttl_seconds=settings.notice_ttl_seconds)
if "draft" not in st.session_state:
    st.session_state.draft = UploadDraft()
if "page" not in st.session_state:
    st.session_state.page = "Dashboard"
for key, default in (("pending_delete", None), ("pending_download", None), ("upload_nonce", 0)):
    if key not in st.session_state:
        st.session_state[key] = default

gate: AuthGate = st.session_state.gate
store: DocumentStore = st.session_state.store
notices: NoticeBoard = st.session_state.notices


def attempt(action: Coroutine[Any, Any, Any], success: str | None = None) -> bool:
    """Run a store action, posting a success or error banner."""
    notices.begin_action()
    try:
        run(action)
    except DocumentVaultError as e:
        notices.report(e)
        return False
    if success:
        notices.success(success)
    return True


def save_download(downloaded: DownloadedFile) -> None:
    st.session_state.pending_download = downloaded


# =============================================================================
# LOGIN GATE
# =============================================================================
if not gate.is_authenticated:
    _, col_login, _ = st.columns([1, 1.2, 1])
    with col_login:
        st.title("🗄️ Document Vault")
        st.markdown("*Secure Document Management System*")

        if gate.last_error is not None and not isinstance(gate.last_error, InvalidCredentials):
            st.warning(f"⚠️ {gate.last_error.user_message}")

        with st.form("login_form"):
            username = st.text_input("Username", value=gate.last_username)
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button(
                "Sign In",
                type="primary",
                use_container_width=True,
                disabled=gate.state == AuthState.AUTHENTICATING,
            )

        if submitted:
            if not username or not password:
                st.error("❌ Username and password are required")
            else:
                try:
                    with st.spinner("Signing In..."):
                        run(gate.submit(username, password))
                    st.rerun()
                except InvalidCredentials as e:
                    st.error(f"❌ {e.user_message}")

        with st.expander("Demo Credentials"):
            st.markdown(f"**Username:** {settings.admin_username}")
            st.markdown(f"**Password:** {settings.admin_password.get_secret_value()}")
            st.caption("Client-side demo login only - not a security boundary.")
    st.stop()

# =============================================================================
# USER HEADER + NAVIGATION
# =============================================================================
session = gate.session
with st.sidebar:
    st.markdown("### 🗄️ Document Vault")
    if session is not None:
        st.markdown(f"👤 **Welcome, {session.username}**")
        st.caption(session.email)
    if st.button("🚪 Logout", use_container_width=True):
        gate.logout()
        st.session_state.loaded = False
        st.rerun()

    st.divider()
    st.session_state.page = st.radio(
        "Navigate",
        options=["Dashboard", "Documents"],
        index=0 if st.session_state.page == "Dashboard" else 1,
        format_func=lambda p: {"Dashboard": "📊 Dashboard", "Documents": "🏠 Documents"}[p],
    )

# Initial fetch once per login
if not st.session_state.loaded:
    with st.spinner("Loading documents..."):
        attempt(store.load_all())
    st.session_state.loaded = True

for notice in notices.active():
    if notice.kind == NoticeKind.success:
        st.success(f"✅ {notice.message}")
    else:
        st.error(f"❌ {notice.message}")

# =============================================================================
# DASHBOARD PAGE
# =============================================================================
if st.session_state.page == "Dashboard":
    st.title("📊 Document Vault Dashboard")
    st.markdown("*Overview of your document management system*")
    st.divider()

    stats = store.statistics()
    for col, card in zip(st.columns(4), build_stat_cards(stats), strict=True):
        with col:
            st.metric(f"{card['icon']} {card['label']}", card["value"])

    col_recent, col_types, col_actions = st.columns([1.5, 1.5, 1])

    with col_recent:
        st.subheader("🗓️ Recent Documents")
        recent = store.recent_documents()
        if recent:
            for doc in recent:
                st.markdown(f"**{doc.name}**")
                st.caption(
                    f"{doc.file_name} • {format_file_size(doc.file_size)} • "
                    f"{format_upload_date(doc.upload_date)}"
                )
        else:
            st.caption("_No recent documents_")

    with col_types:
        st.subheader("📊 File Type Distribution")
        distribution = store.file_type_distribution()
        if distribution:
            for share in distribution:
                st.markdown(
                    f"**{share.label}** - {share.count} file{'s' if share.count != 1 else ''}"
                )
                st.progress(min(share.percentage / 100, 1.0), text=f"{share.percentage}%")
        else:
            st.caption("_No file type data available_")

    with col_actions:
        st.subheader("⚡ Quick Actions")
        for label in ("⬆️ Upload Document", "🔍 Search Documents", "📄 View All Documents"):
            if st.button(label, use_container_width=True):
                st.session_state.page = "Documents"
                st.rerun()

# =============================================================================
# DOCUMENTS PAGE
# =============================================================================
else:
    st.title("🗄️ Digital Document Vault")
    st.markdown("*Secure document storage and management system*")
    st.divider()

    draft: UploadDraft = st.session_state.draft

    # --- UPLOAD ---
    st.subheader("⬆️ Upload Document")
    with st.form("upload_form"):
        name = st.text_input("Document Name *", value=draft.name, placeholder="Enter document name")
        description = st.text_area(
            "Description",
            value=draft.description,
            placeholder="Enter document description (optional)",
        )
        uploaded = st.file_uploader(
            "Select File *", key=f"upload_file_{st.session_state.upload_nonce}"
        )
        if st.form_submit_button("⬆️ Upload Document", type="primary"):
            draft.name = name
            draft.description = description
            draft.file = to_upload_file(uploaded) or draft.file
            if run(submit_upload(store, draft, notices)):
                st.session_state.upload_nonce += 1
            st.rerun()

    # --- SEARCH ---
    with st.form("search_form"):
        col_query, col_button = st.columns([4, 1])
        with col_query:
            query = st.text_input(
                "Search", value=store.query, placeholder="Search documents...",
                label_visibility="collapsed",
            )
        with col_button:
            if st.form_submit_button("🔍 Search", use_container_width=True):
                attempt(store.search(query))
                st.rerun()

    # --- DOCUMENT LIST ---
    st.subheader("Documents")
    pending_download: DownloadedFile | None = st.session_state.pending_download
    if pending_download is not None:
        st.download_button(
            f"💾 Save {pending_download.file_name}",
            data=pending_download.content,
            file_name=pending_download.file_name,
            mime=pending_download.content_type or "application/octet-stream",
            on_click=lambda: st.session_state.update(pending_download=None),
        )

    if store.loading:
        st.info("⏳ Loading documents...")
    elif not store.documents:
        st.info("No documents found")
    else:
        columns = st.columns(3)
        for index, doc in enumerate(store.documents):
            card = build_document_card(doc)
            with columns[index % 3], st.container(border=True):
                st.markdown(f"{card['icon']} **{card['title']}**")
                st.caption(f"**File:** {card['file']}")
                st.caption(f"**Size:** {card['size']}")
                st.caption(f"**Type:** {card['type']}")
                st.caption(f"**Uploaded:** {card['uploaded']}")
                if card["description"]:
                    st.caption(f"**Description:** {card['description']}")

                col_download, col_delete = st.columns(2)
                with col_download:
                    if st.button("⬇️ Download", key=f"download_{index}_{doc.id}"):
                        attempt(store.download(doc.id, doc.file_name, save_download))
                        st.rerun()
                with col_delete:
                    if st.button("🗑️ Delete", key=f"delete_{index}_{doc.id}"):
                        st.session_state.pending_delete = doc.id
                        st.rerun()

                if st.session_state.pending_delete == doc.id:
                    st.warning("Are you sure you want to delete this document?")
                    col_yes, col_no = st.columns(2)
                    with col_yes:
                        confirmed = st.button("Yes, delete", key=f"confirm_{index}_{doc.id}")
                    with col_no:
                        declined = st.button("Cancel", key=f"cancel_{index}_{doc.id}")
                    if confirmed or declined:
                        st.session_state.pending_delete = None
                        attempt(
                            store.remove(doc.id, confirm=lambda _prompt: confirmed),
                            success="Document deleted successfully!" if confirmed else None,
                        )
                        st.rerun()
