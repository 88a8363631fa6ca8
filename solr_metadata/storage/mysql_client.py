# ==============================================
# MySQLClient
# ==============================================
#
# PURPOSE:
#   Manages the MySQL connection used for the relational side of
#   the metadata configuration: the cmodel association table.
#
# CLASS: MySQLClient
# ------------------
#   Stateful — holds connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection. Create database if it doesn't exist.
#
#   - disconnect() -> None
#       Close connection cleanly.
#
#   - table_exists(table_name: str) -> bool
#       Query INFORMATION_SCHEMA for the table.
#
#   - execute(query: str, params: tuple = None) -> int
#       Execute a statement and commit. Return affected row count.
#
#   - execute_many(query: str, rows: list[tuple]) -> int
#       Execute a statement once per row in a single transaction.
#
#   - fetch_all(query: str, params: tuple = None) -> list[dict]
#       Execute SELECT and return rows as dicts.
#
#   Every method except connect/disconnect raises RuntimeError when
#   called before connect(). Driver errors (pymysql.err.*) propagate.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLClient(...) as db:` usage.
#
# ==============================================

from typing import Any, cast
import pymysql
import pymysql.cursors


class MySQLClient:
    def __init__(self, host, port, user, password, database):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    @classmethod
    def from_config(cls, config) -> "MySQLClient":
        """Build an unconnected client from a MySQLConfig."""
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
        )

    def connect(self) -> None:
        # Establish connection to MySQL, create database if it doesn't exist
        self.connection = pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            charset="utf8mb4",
        )
        cursor = self.connection.cursor()
        cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{self.database}`")
        cursor.execute(f"USE `{self.database}`")
        cursor.close()
        print(f"Connected to MySQL database '{self.database}'.")

    def disconnect(self) -> None:
        # Close connection cleanly
        if self.connection:
            self.connection.close()
            self.connection = None

    def _require_connection(self):
        if self.connection is None:
            raise RuntimeError("Not connected to MySQL")
        return self.connection

    def table_exists(self, table_name: str) -> bool:
        connection = self._require_connection()
        cursor = connection.cursor()
        cursor.execute(
            "SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s",
            (self.database, table_name)
        )
        row = cursor.fetchone()
        cursor.close()
        if row is None:
            raise RuntimeError("COUNT query returned no rows")
        return row[0] > 0

    def execute(self, query: str, params: tuple | None = None) -> int:
        # Execute a statement and commit, return affected rows
        connection = self._require_connection()
        cursor = connection.cursor()
        try:
            affected = cursor.execute(query, params) if params else cursor.execute(query)
            connection.commit()
        except pymysql.MySQLError:
            connection.rollback()
            raise
        finally:
            cursor.close()
        return affected

    def execute_many(self, query: str, rows: list[tuple]) -> int:
        # One transaction for the whole batch
        connection = self._require_connection()
        if not rows:
            return 0
        cursor = connection.cursor()
        try:
            affected = cursor.executemany(query, rows)
            connection.commit()
        except pymysql.MySQLError:
            connection.rollback()
            raise
        finally:
            cursor.close()
        return affected or 0

    def fetch_all(self, query: str, params: tuple | None = None) -> list[dict]:
        # Execute SELECT and return rows as dicts
        connection = self._require_connection()
        cursor = connection.cursor(pymysql.cursors.DictCursor)
        try:
            if params is not None:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            results = cast(list[dict[str, Any]], cursor.fetchall())
        finally:
            cursor.close()
        return list(results)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
