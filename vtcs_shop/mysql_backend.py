"""MySQL backend through flask_mysqldb."""

import MySQLdb
from flask_mysqldb import MySQL

from vtcs_shop.backend import Backend


class MySQLBackend(Backend):
    """
    flask_mysqldb keeps one connection on the app context and closes it
    at teardown, so release() leaves it alone.
    """

    name = "mysql"
    errors = (MySQLdb.Error,)

    def __init__(self):
        self.mysql = MySQL()

    def init_app(self, app) -> None:
        self.mysql.init_app(app)

    def _open(self):
        return self.mysql.connection

    def release(self, connection) -> None:
        pass
