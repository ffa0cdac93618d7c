"""User accounts of the chat server, kept in a MySQL table."""

import functools
import logging
from collections.abc import Callable
from contextlib import closing

import pymysql

IM_DB = "im_db"
DB_HOST = "localhost"
DB_USER = "root"
DB_PORT = 3306
PASSWORD = ""

INSERT_SQL = "INSERT INTO user (name, passwd) VALUES (%s, %s)"
SELECT_SQL = "SELECT * FROM user WHERE name=%s AND passwd=%s"

log = logging.getLogger(__name__)


def _default_connect(password=PASSWORD):
    return pymysql.connect(
        host=DB_HOST,
        user=DB_USER,
        password=password,
        database=IM_DB,
        port=DB_PORT,
        charset="utf8",
    )


class UserStore:
    """Registers users and checks their credentials.

    connect is a callable returning a new DB-API connection using the
    "%s" parameter style; a connection is opened for every call.
    """

    def __init__(self, connect: Callable | None = None):
        self._connect = connect if connect is not None else functools.partial(
            _default_connect
        )

    def insert_user(self, name: str, passwd: str) -> bool:
        """Add a user; return False when the database refuses."""
        try:
            with closing(self._connect()) as conn:
                with closing(conn.cursor()) as cursor:
                    cursor.execute(INSERT_SQL, (name, passwd))
                conn.commit()
        except pymysql.MySQLError as exc:
            log.error("insert user failed: %s", exc)
            return False
        return True

    def select_user(self, name: str, passwd: str) -> bool:
        """Tell whether a user with this name and password exists."""
        try:
            with closing(self._connect()) as conn:
                with closing(conn.cursor()) as cursor:
                    cursor.execute(SELECT_SQL, (name, passwd))
                    rows = cursor.fetchall()
        except pymysql.MySQLError as exc:
            log.error("select user failed: %s", exc)
            return False
        return len(rows) > 0