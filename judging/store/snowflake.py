"""
Snowflake Document Store - Audition Judging Platform
judging/store/snowflake.py

Each collection is a Snowflake table with the document in a VARIANT column:

    ID VARCHAR PRIMARY KEY, ORGANIZATION_ID VARCHAR NOT NULL, DOC VARIANT,
    CREATED_AT TIMESTAMP_TZ, UPDATED_AT TIMESTAMP_TZ

``organization_id`` and ``id`` filters hit real columns; every other filter
compares a path inside DOC.
"""

import json
import re
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, List, Mapping, Optional, Tuple

import snowflake.connector
import structlog
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from judging.config import settings
from judging.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    RepositoryException,
)
from judging.models.enumerations import Collection
from judging.store.base import DocumentStore

logger = structlog.get_logger(__name__)

TABLE_NAMES: Dict[str, str] = {c.value: c.value.upper() for c in Collection}

_COLUMN_FILTERS = {"id": "ID", "organization_id": "ORGANIZATION_ID"}
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def get_snowflake_connection():
    """Open a Snowflake connection from application settings."""
    password = settings.SNOWFLAKE_PASSWORD
    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=password.get_secret_value() if password else None,
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )


class SnowflakeDocumentStore(DocumentStore):
    """Document store backed by one VARIANT table per collection."""

    def __init__(self, connection_factory=get_snowflake_connection):
        self._connection_factory = connection_factory
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Yield the transaction's connection, or a fresh one per call."""
        bound = getattr(self._local, "conn", None)
        if bound is not None:
            yield bound
            return

        conn = None
        try:
            conn = self._connection_factory()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self) -> Generator[Any, None, None]:
        """Context manager for dict cursors with automatic cleanup."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor)
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_query(
        self,
        sql: str,
        params: Optional[tuple] = None,
        fetch_one: bool = False,
        fetch_all: bool = False,
    ) -> Optional[Any]:
        """Execute a SQL statement and map driver errors to repository errors."""
        with self.get_cursor() as cursor:
            try:
                cursor.execute(sql, params or ())

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()

                return cursor.rowcount

            except ProgrammingError as e:
                error_msg = str(e).upper()
                if "UNIQUE" in error_msg or "DUPLICATE" in error_msg:
                    raise DuplicateEntityException(str(e))
                raise RepositoryException(f"Query error: {e}")
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")

    @contextmanager
    def transaction(self) -> Generator["SnowflakeDocumentStore", None, None]:
        """Run the block on one connection inside BEGIN / COMMIT."""
        if getattr(self._local, "conn", None) is not None:
            yield self
            return

        with self.get_connection() as conn:
            self._local.conn = conn
            try:
                conn.cursor().execute("BEGIN")
                yield self
                conn.commit()
            except BaseException:
                conn.rollback()
                logger.warning("snowflake_transaction_rolled_back")
                raise
            finally:
                self._local.conn = None

    def ping(self) -> bool:
        row = self.execute_query("SELECT 1 AS OK", fetch_one=True)
        return bool(row)

    def ensure_schema(self) -> None:
        """Create the collection tables if they do not exist."""
        for table in TABLE_NAMES.values():
            self.execute_query(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    ID VARCHAR(64) PRIMARY KEY,
                    ORGANIZATION_ID VARCHAR(128) NOT NULL,
                    DOC VARIANT,
                    CREATED_AT TIMESTAMP_TZ,
                    UPDATED_AT TIMESTAMP_TZ
                )
                """
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _table(collection: str) -> str:
        try:
            return TABLE_NAMES[collection]
        except KeyError:
            raise RepositoryException(f"Unknown collection: {collection}")

    @staticmethod
    def _build_where(filters: Mapping[str, Any]) -> Tuple[str, List[Any]]:
        clauses = ["1=1"]
        params: List[Any] = []
        for field, value in filters.items():
            if field in _COLUMN_FILTERS:
                clauses.append(f"{_COLUMN_FILTERS[field]} = %s")
                params.append(value)
                continue
            if not _FIELD_NAME.match(field):
                raise RepositoryException(f"Invalid filter field: {field}")
            if value is None:
                clauses.append(f'(DOC:"{field}" IS NULL OR IS_NULL_VALUE(DOC:"{field}"))')
            else:
                clauses.append(f'DOC:"{field}" = PARSE_JSON(%s)')
                params.append(json.dumps(value))
        return " AND ".join(clauses), params

    @staticmethod
    def _row_to_doc(row: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not row:
            return None
        doc = row["DOC"]
        if isinstance(doc, str):
            doc = json.loads(doc)
        return doc

    # ------------------------------------------------------------------
    # DocumentStore
    # ------------------------------------------------------------------

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT DOC FROM {self._table(collection)} WHERE ID = %s"
        return self._row_to_doc(self.execute_query(sql, (doc_id,), fetch_one=True))

    def find(self, collection: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        where_sql, params = self._build_where(filters)
        sql = f"SELECT DOC FROM {self._table(collection)} WHERE {where_sql} ORDER BY CREATED_AT"
        rows = self.execute_query(sql, tuple(params), fetch_all=True) or []
        return [self._row_to_doc(row) for row in rows]

    def insert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._check_document(doc)
        now = datetime.now(timezone.utc)
        # PARSE_JSON is not allowed in a VALUES clause, hence INSERT ... SELECT
        sql = f"""
            INSERT INTO {self._table(collection)} (ID, ORGANIZATION_ID, DOC, CREATED_AT, UPDATED_AT)
            SELECT %s, %s, PARSE_JSON(%s), %s, %s
        """
        self.execute_query(
            sql, (doc["id"], doc["organization_id"], json.dumps(doc), now, now)
        )
        return doc

    def upsert(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._check_document(doc)
        now = datetime.now(timezone.utc)
        sql = f"""
            MERGE INTO {self._table(collection)} t
            USING (SELECT %s AS ID, %s AS ORGANIZATION_ID, PARSE_JSON(%s) AS DOC) s
            ON t.ID = s.ID
            WHEN MATCHED THEN UPDATE SET
                ORGANIZATION_ID = s.ORGANIZATION_ID, DOC = s.DOC, UPDATED_AT = %s
            WHEN NOT MATCHED THEN INSERT (ID, ORGANIZATION_ID, DOC, CREATED_AT, UPDATED_AT)
                VALUES (s.ID, s.ORGANIZATION_ID, s.DOC, %s, %s)
        """
        self.execute_query(
            sql, (doc["id"], doc["organization_id"], json.dumps(doc), now, now, now)
        )
        return doc

    def update(
        self, collection: str, doc_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        current = self.get(collection, doc_id)
        if current is None:
            return None
        current.update(fields)
        sql = f"""
            UPDATE {self._table(collection)}
            SET DOC = PARSE_JSON(%s), UPDATED_AT = %s
            WHERE ID = %s
        """
        self.execute_query(sql, (json.dumps(current), datetime.now(timezone.utc), doc_id))
        return current

    def delete(self, collection: str, doc_id: str) -> bool:
        sql = f"DELETE FROM {self._table(collection)} WHERE ID = %s"
        return (self.execute_query(sql, (doc_id,)) or 0) > 0

    def delete_where(self, collection: str, filters: Mapping[str, Any]) -> int:
        where_sql, params = self._build_where(filters)
        sql = f"DELETE FROM {self._table(collection)} WHERE {where_sql}"
        return self.execute_query(sql, tuple(params)) or 0
