# auth.py
from typing import Optional

import streamlit as st


class SessionAuth:
    """
    In-process stand-in for the identity provider: remembers who is signed in.
    """

    def __init__(self, user_id: Optional[str] = None):
        self._user_id = user_id

    def sign_in(self, user_id: str):
        if not user_id or not user_id.strip():
            raise ValueError("user_id must be a non-empty string")
        self._user_id = user_id.strip()

    def sign_out(self):
        self._user_id = None

    def current_user(self) -> Optional[str]:
        return self._user_id


class StreamlitSessionAuth:
    """
    Reads the signed-in user from Streamlit's per-browser session state.
    The UI layer owns sign-in; this only looks at the key it writes.
    """

    def __init__(self, key: str = "username"):
        self.key = key

    def current_user(self) -> Optional[str]:
        username = st.session_state.get(self.key)
        if not username or not str(username).strip():
            return None
        return str(username).strip()
