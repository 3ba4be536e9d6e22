import sqlite3

import pytest

from vtcs_shop.app import create_app
from vtcs_shop.backend import SQLiteBackend
from vtcs_shop.schema import seed_database
from vtcs_shop.sessions import MemorySessionStore


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "labdb.sqlite"
    db = SQLiteBackend(str(path)).connect()
    try:
        seed_database(db)
    finally:
        db.close()
    return path


@pytest.fixture
def add_rows(db_path):
    """Insert extra rows straight into the lab database"""
    def _add(statement):
        conn = sqlite3.connect(str(db_path))
        try:
            conn.execute(statement)
            conn.commit()
        finally:
            conn.close()
    return _add


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def app(db_path, store):
    app = create_app(
        {'TESTING': True, 'DB_ENGINE': 'sqlite', 'SQLITE_PATH': str(db_path)},
        backend=SQLiteBackend(str(db_path)),
        store=store,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username, password):
        return client.post(
            '/?page=login',
            data={'username': username, 'password': password, 'login': ''},
        )
    return _login


@pytest.fixture
def db(db_path):
    database = SQLiteBackend(str(db_path)).connect()
    yield database
    database.close()
