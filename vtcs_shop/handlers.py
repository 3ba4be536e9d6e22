"""
Login and search handlers.

Each handler returns its message fragment instead of writing a shared
variable; the router combines them with compose_message().
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional

from vtcs_shop.backend import BackendError, Database
from vtcs_shop.queries import LOGIN_QUERY, PRODUCT_SEARCH_QUERY

logger = logging.getLogger(__name__)


def alert(kind: str, text: str) -> str:
    # VULNERABLE: text is inserted as-is
    return f'<div class="alert {kind}">{text}</div>'


@dataclass
class SearchOutcome:
    """Message and rows produced by one product search"""
    message: str
    results: List[Dict[str, Any]] = field(default_factory=list)


def handle_login(db: Database, session: MutableMapping[str, Any],
                 username: str, password: str) -> str:
    """
    Authenticate by looking for a row matching both fields.

    VULNERABLE: SQL injection through either field, plain text password
    comparison, raw username echo, and distinct messages for "no match"
    and "query error".
    """
    query = LOGIN_QUERY.bind(username=username, password=password)

    try:
        user = db.first(query)
    except BackendError as e:
        return alert("error", f"Query error: {e}")

    if user is None:
        logger.info("Login failed")
        return alert("error", "Invalid credentials")

    username = user.get('username')
    session['user'] = username
    session['role'] = user.get('role')
    logger.info(f"Login succeeded as {username!r} (role {user.get('role')!r})")

    # NULL usernames print as an empty name
    return alert("success", f"Welcome, {'' if username is None else username}!")


def handle_search(db: Database, term: str) -> SearchOutcome:
    """
    Substring search over product names.

    VULNERABLE: reflected XSS in the echo and SQL injection in the LIKE
    clause.
    """
    outcome = SearchOutcome(message=alert("info", f"Search results for: {term}"))

    try:
        outcome.results = db.query(PRODUCT_SEARCH_QUERY.bind(term=term))
    except BackendError as e:
        outcome.message += alert("error", f"Search error: {e}")

    return outcome


def compose_message(login_message: Optional[str],
                    search: Optional[SearchOutcome]) -> str:
    """Search output wins over login output"""
    if search is not None:
        return search.message
    return login_message or ""
