from vtcs_shop import cli
from vtcs_shop.backend import SQLiteBackend


def test_main_seeds_and_serves(tmp_path, monkeypatch):
    db_file = tmp_path / "cli.sqlite"
    monkeypatch.setenv("DB_ENGINE", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(db_file))

    served = {}

    def fake_run(self, host=None, port=None, debug=None, **kwargs):
        served.update(host=host, port=port, debug=debug)

    monkeypatch.setattr("flask.Flask.run", fake_run)

    assert cli.main(["--init-db", "--port", "8088", "--no-color"]) == 0
    assert served == {'host': '0.0.0.0', 'port': 8088, 'debug': False}

    db = SQLiteBackend(str(db_file)).connect()
    try:
        assert db.first("SELECT username FROM users WHERE id = 1") == {'username': 'admin'}
    finally:
        db.close()
