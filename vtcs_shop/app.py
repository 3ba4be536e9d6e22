"""
VTCS Shop - Vulnerable Web Application
INTENTIONALLY VULNERABLE - FOR TRAINING PURPOSES ONLY
DO NOT DEPLOY IN PRODUCTION
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, g, request, session

from vtcs_shop.backend import Backend, ConnectionFailed, backend_from_config
from vtcs_shop.config import apply_mysql_settings, load_config
from vtcs_shop.handlers import compose_message, handle_login, handle_search
from vtcs_shop.sessions import SessionStore, ShopSessionInterface
from vtcs_shop.views import PageState, raw, render_page

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[Dict[str, Any]] = None,
               backend: Optional[Backend] = None,
               store: Optional[SessionStore] = None) -> Flask:
    """Application factory"""
    app = Flask(__name__)
    app.config.update(load_config())
    app.config.update(overrides or {})
    apply_mysql_settings(app.config)

    app.session_interface = ShopSessionInterface(store)
    app.add_template_filter(raw, 'raw')

    if backend is None:
        backend = backend_from_config(app.config)
    backend.init_app(app)
    app.extensions['vtcs_backend'] = backend
    logger.debug(f"Using {backend.name} backend")

    @app.before_request
    def open_database():
        try:
            g.db = backend.connect()
        except ConnectionFailed as e:
            # VULNERABLE: raw driver error, request ends here
            return Response(f"Database connection failed: {e}", mimetype='text/html')

    @app.teardown_appcontext
    def close_database(exc):
        db = g.pop('db', None)
        if db is not None:
            db.close()

    @app.route('/', methods=['GET', 'POST'])
    @app.route('/index.php', methods=['GET', 'POST'])
    def index():
        page = request.args.get('page', 'home')

        # VULNERABLE: SQL injection
        login_message = None
        if request.method == 'POST' and 'login' in request.form:
            login_message = handle_login(
                g.db,
                session,
                request.form.get('username', ''),
                request.form.get('password', ''),
            )

        # VULNERABLE: reflected XSS + SQL injection
        search = None
        if 'search' in request.args:
            search = handle_search(g.db, request.args['search'])

        if 'logout' in request.args:
            session.destroy()
            return Response('', status=302, headers={'Location': '?page=home'})

        state = PageState(
            page=page,
            message=compose_message(login_message, search),
            results=search.results if search is not None else [],
            session=session,
        )
        return render_page(state, g.db)

    return app
