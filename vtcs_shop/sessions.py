"""
Server-side sessions keyed by an opaque cookie token.

The store is a capability handed to the app factory; the default keeps
records in process memory. Reads and writes take no locks, so concurrent
requests on one session race freely.

VULNERABLE: unknown tokens sent by the client are adopted as-is (session
fixation) and the token is never rotated on login.
"""

import logging
import secrets
from typing import Any, Dict, Optional

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

logger = logging.getLogger(__name__)

SID_BYTES = 13


class SessionStore:
    """Interface for session record storage"""

    def load(self, sid: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def save(self, sid: str, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, sid: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """Process-wide dict of session records"""

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}

    def load(self, sid):
        record = self.records.get(sid)
        return dict(record) if record is not None else None

    def save(self, sid, data):
        self.records[sid] = dict(data)

    def delete(self, sid):
        self.records.pop(sid, None)

    def __contains__(self, sid):
        return sid in self.records

    def __len__(self):
        return len(self.records)


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict that remembers its token and whether it was touched"""

    def __init__(self, initial=None, sid: str = "", new: bool = False):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.destroyed = False

    def destroy(self) -> None:
        self.clear()
        self.destroyed = True


class ShopSessionInterface(SessionInterface):
    """Resolves the request's session through a SessionStore"""

    def __init__(self, store: Optional[SessionStore] = None):
        self.store = store if store is not None else MemorySessionStore()

    @staticmethod
    def generate_sid() -> str:
        return secrets.token_hex(SID_BYTES)

    def open_session(self, app, request) -> ServerSideSession:
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return ServerSideSession(sid=self.generate_sid(), new=True)

        return ServerSideSession(self.store.load(sid), sid=sid)

    def save_session(self, app, session: ServerSideSession, response) -> None:
        if session.destroyed:
            self.store.delete(session.sid)
            logger.debug(f"Session {session.sid} destroyed")
        elif session.modified:
            self.store.save(session.sid, dict(session))

        if session.new:
            response.set_cookie(
                self.get_cookie_name(app),
                session.sid,
                domain=self.get_cookie_domain(app),
                path=self.get_cookie_path(app),
                httponly=self.get_cookie_httponly(app),
                secure=self.get_cookie_secure(app),
                samesite=self.get_cookie_samesite(app),
            )
