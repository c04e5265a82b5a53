from __future__ import annotations
import json, os
import logging

from clientportal.domain.ports import SessionPort
from clientportal.domain.session import ClientSession


class SessionStorageLocal(SessionPort):
    """Local filesystem storage for the client session (JSON)."""

    FILENAME = "client_session.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self._log = logging.getLogger(__name__)

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.FILENAME)

    def load_session(self) -> ClientSession:
        if not os.path.exists(self.path):
            return ClientSession()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError):
            self._log.warning("Ignoring unreadable session file %s", self.path)
            return ClientSession()
        return ClientSession.from_dict(payload)

    def save_session(self, session: ClientSession) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(session.to_dict(), f, ensure_ascii=False, indent=2)

    def clear_session(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
