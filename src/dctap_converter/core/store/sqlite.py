"""
SQLite-backed workspace store.

All workspaces live in one database file. Each repository method runs in
its own transaction; every mutation bumps the workspace's ``updated_at``
and, after commit, signals the injected CacheInvalidator.

Usage:
    from dctap_converter.core.store import SQLiteStore

    store = SQLiteStore("data/dctap.db", invalidator=cache)
    workspace = store.workspaces.create("My Profiles")
    store.shapes.create(workspace.id, "Person", label="Person")
"""

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ...constants import StorageDefaults
from ...errors import (
    DuplicateNamespaceError,
    DuplicateShapeError,
    FolderNotFoundError,
    NamespaceNotFoundError,
    RowNotFoundError,
    ShapeNotFoundError,
    WorkspaceNotFoundError,
)
from ...shared.models.dctap import (
    ROW_DATA_FIELDS,
    Folder,
    Namespace,
    Shape,
    StatementRow,
    Workspace,
    WorkspaceOptions,
)
from ...shared.utilities.multivalue import decode
from ...shared.utilities.namespaces import DEFAULT_NAMESPACES
from .protocols import CacheInvalidator

logger = logging.getLogger(__name__)


_ROW_COLUMNS_DDL = ",\n    ".join(f"{name} TEXT" for name in ROW_DATA_FIELDS)

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS workspaces (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS namespaces (
    workspace_id TEXT NOT NULL REFERENCES workspaces(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    prefix TEXT NOT NULL,
    uri TEXT NOT NULL,
    PRIMARY KEY (workspace_id, prefix)
);

CREATE TABLE IF NOT EXISTS folders (
    id TEXT PRIMARY KEY,
    workspace_id TEXT NOT NULL REFERENCES workspaces(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS shapes (
    workspace_id TEXT NOT NULL REFERENCES workspaces(id) ON DELETE CASCADE,
    shape_id TEXT NOT NULL,
    label TEXT,
    description TEXT,
    resource_uri TEXT,
    folder_id TEXT REFERENCES folders(id) ON DELETE SET NULL,
    PRIMARY KEY (workspace_id, shape_id)
);

CREATE TABLE IF NOT EXISTS statement_rows (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    workspace_id TEXT NOT NULL,
    shape_id TEXT NOT NULL,
    row_order INTEGER NOT NULL,
    {_ROW_COLUMNS_DDL},
    has_errors INTEGER NOT NULL DEFAULT 0,
    error_details TEXT,
    FOREIGN KEY (workspace_id, shape_id) REFERENCES shapes(workspace_id, shape_id)
        ON DELETE CASCADE ON UPDATE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_rows_shape ON statement_rows(workspace_id, shape_id, row_order);

CREATE TABLE IF NOT EXISTS options (
    workspace_id TEXT NOT NULL REFERENCES workspaces(id) ON DELETE CASCADE,
    key TEXT NOT NULL,
    value TEXT,
    PRIMARY KEY (workspace_id, key)
);
"""

_SHAPE_COLUMNS = ("shape_id", "label", "description", "resource_uri", "folder_id")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_transient_error(exception: BaseException) -> bool:
    """Check if exception is a lock contention error that should be retried."""
    if isinstance(exception, sqlite3.OperationalError):
        message = str(exception).lower()
        return "database is locked" in message or "database is busy" in message
    return False


_retry_on_lock = retry(
    stop=stop_after_attempt(StorageDefaults.MAX_RETRY_ATTEMPTS),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
    retry=retry_if_exception(_is_transient_error),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def _row_from_record(record: sqlite3.Row) -> StatementRow:
    values = {name: record[name] for name in ROW_DATA_FIELDS}
    return StatementRow(
        id=record["id"],
        row_order=record["row_order"],
        has_errors=bool(record["has_errors"]),
        error_details=record["error_details"],
        **values,
    )


def _shape_from_record(record: sqlite3.Row) -> Shape:
    return Shape(
        shape_id=record["shape_id"],
        label=record["label"],
        description=record["description"],
        resource_uri=record["resource_uri"],
        folder_id=record["folder_id"],
    )


class SQLiteStore:
    """
    Workspace store persisted in a single SQLite database file.

    Attributes:
        db_path: Location of the database file.
        invalidator: Optional cache invalidation hook.
        workspaces, shapes, rows, namespaces, folders, options: Repositories.
    """

    def __init__(
        self,
        db_path: Union[str, Path] = StorageDefaults.DATABASE_PATH,
        invalidator: Optional[CacheInvalidator] = None,
    ):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.invalidator = invalidator

        with self.connection() as conn:
            conn.executescript(_SCHEMA)

        self.workspaces = SQLiteWorkspaceRepository(self)
        self.shapes = SQLiteShapeRepository(self)
        self.rows = SQLiteRowRepository(self)
        self.namespaces = SQLiteNamespaceRepository(self)
        self.folders = SQLiteFolderRepository(self)
        self.options = SQLiteOptionsRepository(self)

        logger.debug(f"Opened workspace store at {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=StorageDefaults.BUSY_TIMEOUT_SECONDS)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and rolls back on error."""
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def mutation(self, workspace_id: str) -> Iterator[sqlite3.Connection]:
        """Transaction for a workspace mutation.

        Verifies the workspace exists, bumps its ``updated_at`` and signals
        the invalidator once the transaction has committed.
        """
        with self.connection() as conn:
            self.require_workspace(conn, workspace_id)
            yield conn
            conn.execute(
                "UPDATE workspaces SET updated_at = ? WHERE id = ?",
                (_now(), workspace_id),
            )
        self.notify(workspace_id)

    def notify(self, workspace_id: str) -> None:
        if self.invalidator is not None:
            self.invalidator.invalidate(workspace_id)

    @staticmethod
    def require_workspace(conn: sqlite3.Connection, workspace_id: str) -> None:
        found = conn.execute("SELECT 1 FROM workspaces WHERE id = ?", (workspace_id,)).fetchone()
        if not found:
            raise WorkspaceNotFoundError(workspace_id)

    @staticmethod
    def require_shape(conn: sqlite3.Connection, workspace_id: str, shape_id: str) -> None:
        found = conn.execute(
            "SELECT 1 FROM shapes WHERE workspace_id = ? AND shape_id = ?",
            (workspace_id, shape_id),
        ).fetchone()
        if not found:
            raise ShapeNotFoundError(workspace_id, shape_id)


# ============================================================================
# Workspaces
# ============================================================================

class SQLiteWorkspaceRepository:
    """Workspace lifecycle operations."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    @_retry_on_lock
    def create(self, name: str) -> Workspace:
        """Create an empty workspace seeded with the default namespaces."""
        now = _now()
        workspace = Workspace(id=str(uuid.uuid4()), name=name, created_at=now, updated_at=now)
        with self._store.connection() as conn:
            conn.execute(
                "INSERT INTO workspaces (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (workspace.id, workspace.name, now, now),
            )
            conn.executemany(
                "INSERT INTO namespaces (workspace_id, position, prefix, uri) VALUES (?, ?, ?, ?)",
                [(workspace.id, i, ns.prefix, ns.uri) for i, ns in enumerate(DEFAULT_NAMESPACES)],
            )
            conn.execute(
                "INSERT INTO options (workspace_id, key, value) VALUES (?, ?, ?)",
                (workspace.id, "useLCColumns", json.dumps(False)),
            )
        logger.info(f"Created workspace '{name}' ({workspace.id})")
        return workspace

    def get(self, workspace_id: str) -> Optional[Workspace]:
        with self._store.connection() as conn:
            record = conn.execute("SELECT * FROM workspaces WHERE id = ?", (workspace_id,)).fetchone()
        if not record:
            return None
        return Workspace(record["id"], record["name"], record["created_at"], record["updated_at"])

    def list(self) -> List[Workspace]:
        """List workspaces, most recently updated first."""
        with self._store.connection() as conn:
            records = conn.execute("SELECT * FROM workspaces ORDER BY updated_at DESC, name ASC").fetchall()
        return [Workspace(r["id"], r["name"], r["created_at"], r["updated_at"]) for r in records]

    @_retry_on_lock
    def update(self, workspace_id: str, name: str) -> Workspace:
        with self._store.mutation(workspace_id) as conn:
            conn.execute("UPDATE workspaces SET name = ? WHERE id = ?", (name, workspace_id))
        workspace = self.get(workspace_id)
        assert workspace is not None
        return workspace

    @_retry_on_lock
    def delete(self, workspace_id: str) -> bool:
        """Delete a workspace and everything it owns."""
        with self._store.connection() as conn:
            cursor = conn.execute("DELETE FROM workspaces WHERE id = ?", (workspace_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            self._store.notify(workspace_id)
            logger.info(f"Deleted workspace {workspace_id}")
        return deleted

    @_retry_on_lock
    def duplicate(self, workspace_id: str, new_name: str) -> Workspace:
        """Copy a workspace with its namespaces, folders, shapes, rows and options."""
        now = _now()
        new_id = str(uuid.uuid4())
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            conn.execute(
                "INSERT INTO workspaces (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (new_id, new_name, now, now),
            )
            conn.execute(
                "INSERT INTO namespaces (workspace_id, position, prefix, uri) "
                "SELECT ?, position, prefix, uri FROM namespaces WHERE workspace_id = ?",
                (new_id, workspace_id),
            )
            conn.execute(
                "INSERT INTO options (workspace_id, key, value) "
                "SELECT ?, key, value FROM options WHERE workspace_id = ?",
                (new_id, workspace_id),
            )
            folder_map: Dict[str, str] = {}
            for folder in conn.execute("SELECT * FROM folders WHERE workspace_id = ?", (workspace_id,)).fetchall():
                folder_map[folder["id"]] = str(uuid.uuid4())
                conn.execute(
                    "INSERT INTO folders (id, workspace_id, name, created_at) VALUES (?, ?, ?, ?)",
                    (folder_map[folder["id"]], new_id, folder["name"], now),
                )
            for shape in conn.execute("SELECT * FROM shapes WHERE workspace_id = ?", (workspace_id,)).fetchall():
                conn.execute(
                    "INSERT INTO shapes (workspace_id, shape_id, label, description, resource_uri, folder_id) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        new_id,
                        shape["shape_id"],
                        shape["label"],
                        shape["description"],
                        shape["resource_uri"],
                        folder_map.get(shape["folder_id"]) if shape["folder_id"] else None,
                    ),
                )
            columns = ", ".join(["shape_id", "row_order", *ROW_DATA_FIELDS, "has_errors", "error_details"])
            conn.execute(
                f"INSERT INTO statement_rows (workspace_id, {columns}) "
                f"SELECT ?, {columns} FROM statement_rows WHERE workspace_id = ? ORDER BY id",
                (new_id, workspace_id),
            )
        logger.info(f"Duplicated workspace {workspace_id} as '{new_name}' ({new_id})")
        return Workspace(new_id, new_name, now, now)


# ============================================================================
# Shapes
# ============================================================================

class SQLiteShapeRepository:
    """Shape operations."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    def list(self, workspace_id: str) -> List[Shape]:
        """List shapes ordered by shape id."""
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            records = conn.execute(
                "SELECT * FROM shapes WHERE workspace_id = ? ORDER BY shape_id ASC",
                (workspace_id,),
            ).fetchall()
        return [_shape_from_record(r) for r in records]

    def get(self, workspace_id: str, shape_id: str) -> Optional[Shape]:
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            record = conn.execute(
                "SELECT * FROM shapes WHERE workspace_id = ? AND shape_id = ?",
                (workspace_id, shape_id),
            ).fetchone()
        return _shape_from_record(record) if record else None

    @_retry_on_lock
    def create(
        self,
        workspace_id: str,
        shape_id: str,
        label: Optional[str] = None,
        resource_uri: Optional[str] = None,
        folder_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Shape:
        shape = Shape(
            shape_id=shape_id,
            label=label or None,
            description=description or None,
            resource_uri=resource_uri or None,
            folder_id=folder_id or None,
        )
        with self._store.mutation(workspace_id) as conn:
            try:
                conn.execute(
                    "INSERT INTO shapes (workspace_id, shape_id, label, description, resource_uri, folder_id) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (workspace_id, shape.shape_id, shape.label, shape.description, shape.resource_uri, shape.folder_id),
                )
            except sqlite3.IntegrityError as e:
                if "UNIQUE" in str(e) or "PRIMARY KEY" in str(e):
                    raise DuplicateShapeError(shape_id) from e
                raise FolderNotFoundError(folder_id or "") from e
        logger.debug(f"Created shape '{shape_id}' in workspace {workspace_id}")
        return shape

    @_retry_on_lock
    def update(self, workspace_id: str, shape_id: str, changes: Dict[str, Any]) -> Shape:
        """Update shape attributes; a new ``shape_id`` renames the shape and its rows follow."""
        unknown = set(changes) - set(_SHAPE_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown shape fields: {', '.join(sorted(unknown))}")
        if not changes:
            shape = self.get(workspace_id, shape_id)
            if shape is None:
                raise ShapeNotFoundError(workspace_id, shape_id)
            return shape
        new_id = changes.get("shape_id") or shape_id
        with self._store.mutation(workspace_id) as conn:
            self._store.require_shape(conn, workspace_id, shape_id)
            if new_id != shape_id:
                clash = conn.execute(
                    "SELECT 1 FROM shapes WHERE workspace_id = ? AND shape_id = ?",
                    (workspace_id, new_id),
                ).fetchone()
                if clash:
                    raise DuplicateShapeError(new_id)
            assignments = ", ".join(f"{column} = ?" for column in changes)
            values = [new_id if column == "shape_id" else (value or None) for column, value in changes.items()]
            conn.execute(
                f"UPDATE shapes SET {assignments} WHERE workspace_id = ? AND shape_id = ?",
                (*values, workspace_id, shape_id),
            )
        shape = self.get(workspace_id, new_id)
        assert shape is not None
        return shape

    @_retry_on_lock
    def delete(self, workspace_id: str, shape_id: str) -> bool:
        """Delete a shape; its rows are removed with it."""
        with self._store.mutation(workspace_id) as conn:
            cursor = conn.execute(
                "DELETE FROM shapes WHERE workspace_id = ? AND shape_id = ?",
                (workspace_id, shape_id),
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.debug(f"Deleted shape '{shape_id}' from workspace {workspace_id}")
        return deleted

    def get_usages(self, workspace_id: str, shape_id: str) -> List[str]:
        """Return ids of other shapes whose rows reference ``shape_id`` in valueShape."""
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            records = conn.execute(
                "SELECT shape_id, value_shape FROM statement_rows "
                "WHERE workspace_id = ? AND shape_id != ? AND value_shape IS NOT NULL "
                "ORDER BY shape_id ASC, row_order ASC",
                (workspace_id, shape_id),
            ).fetchall()
        usages: List[str] = []
        for record in records:
            if shape_id in decode(record["value_shape"]) and record["shape_id"] not in usages:
                usages.append(record["shape_id"])
        return usages

    def copy_to_workspace(self, source_workspace_id: str, shape_id: str, target_workspace_id: str) -> Dict[str, Any]:
        """
        Copy a shape and its rows into another workspace.

        An existing shape with the same id in the target is deleted first,
        so the copy overwrites rather than merges. The folder assignment is
        not carried over.

        Returns:
            Dictionary with the new ``shape``, ``rows_copied`` and ``overwrote``.
        """
        source = self.get(source_workspace_id, shape_id)
        if source is None:
            raise ShapeNotFoundError(source_workspace_id, shape_id)
        if self._store.workspaces.get(target_workspace_id) is None:
            raise WorkspaceNotFoundError(target_workspace_id)

        source_rows = self._store.rows.list(source_workspace_id, shape_id)
        overwrote = self.get(target_workspace_id, shape_id) is not None
        if overwrote:
            self.delete(target_workspace_id, shape_id)

        shape = self.create(
            target_workspace_id,
            source.shape_id,
            label=source.label,
            resource_uri=source.resource_uri,
            folder_id=None,
            description=source.description,
        )
        for row in source_rows:
            self._store.rows.create(target_workspace_id, shape_id, row.copy(id=None, has_errors=False, error_details=None))

        logger.info(
            f"Copied shape '{shape_id}' ({len(source_rows)} rows) from {source_workspace_id} "
            f"to {target_workspace_id}{' (overwrote existing)' if overwrote else ''}"
        )
        return {"shape": shape, "rows_copied": len(source_rows), "overwrote": overwrote}


# ============================================================================
# Rows
# ============================================================================

class SQLiteRowRepository:
    """Statement row operations."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    def list(self, workspace_id: str, shape_id: str) -> List[StatementRow]:
        """List a shape's rows sorted by row order."""
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            self._store.require_shape(conn, workspace_id, shape_id)
            records = conn.execute(
                "SELECT * FROM statement_rows WHERE workspace_id = ? AND shape_id = ? "
                "ORDER BY row_order ASC, id ASC",
                (workspace_id, shape_id),
            ).fetchall()
        return [_row_from_record(r) for r in records]

    def get(self, workspace_id: str, shape_id: str, row_id: int) -> Optional[StatementRow]:
        with self._store.connection() as conn:
            record = conn.execute(
                "SELECT * FROM statement_rows WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                (workspace_id, shape_id, row_id),
            ).fetchone()
        return _row_from_record(record) if record else None

    def _insert(self, conn: sqlite3.Connection, workspace_id: str, shape_id: str, row: StatementRow) -> StatementRow:
        row_order = row.row_order
        if row_order is None:
            max_order = conn.execute(
                "SELECT MAX(row_order) FROM statement_rows WHERE workspace_id = ? AND shape_id = ?",
                (workspace_id, shape_id),
            ).fetchone()[0]
            row_order = (max_order if max_order is not None else -1) + 1
        values = [getattr(row, name) or None for name in ROW_DATA_FIELDS]
        placeholders = ", ".join("?" for _ in ROW_DATA_FIELDS)
        cursor = conn.execute(
            f"INSERT INTO statement_rows (workspace_id, shape_id, row_order, {', '.join(ROW_DATA_FIELDS)}) "
            f"VALUES (?, ?, ?, {placeholders})",
            (workspace_id, shape_id, row_order, *values),
        )
        return StatementRow(
            id=cursor.lastrowid,
            row_order=row_order,
            **dict(zip(ROW_DATA_FIELDS, values)),
        )

    @_retry_on_lock
    def create(self, workspace_id: str, shape_id: str, row: StatementRow) -> StatementRow:
        """Insert a row; without an explicit row_order it is appended."""
        with self._store.mutation(workspace_id) as conn:
            self._store.require_shape(conn, workspace_id, shape_id)
            return self._insert(conn, workspace_id, shape_id, row)

    @_retry_on_lock
    def update(self, workspace_id: str, shape_id: str, row_id: int, changes: Dict[str, Any]) -> StatementRow:
        """Update selected fields of a row; keys are StatementRow attribute names."""
        allowed = set(ROW_DATA_FIELDS) | {"row_order"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown row fields: {', '.join(sorted(unknown))}")
        with self._store.mutation(workspace_id) as conn:
            existing = conn.execute(
                "SELECT 1 FROM statement_rows WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                (workspace_id, shape_id, row_id),
            ).fetchone()
            if not existing:
                raise RowNotFoundError(shape_id, row_id)
            if changes:
                assignments = ", ".join(f"{column} = ?" for column in changes)
                values = [v if k == "row_order" else (v or None) for k, v in changes.items()]
                conn.execute(
                    f"UPDATE statement_rows SET {assignments} WHERE id = ?",
                    (*values, row_id),
                )
        updated = self.get(workspace_id, shape_id, row_id)
        assert updated is not None
        return updated

    def bulk_update(self, workspace_id: str, shape_id: str, rows: Sequence[StatementRow]) -> List[StatementRow]:
        """Update rows that carry an id and create the rest."""
        results: List[StatementRow] = []
        for row in rows:
            if row.id:
                changes: Dict[str, Any] = row.data()
                if row.row_order is not None:
                    changes["row_order"] = row.row_order
                results.append(self.update(workspace_id, shape_id, row.id, changes))
            else:
                results.append(self.create(workspace_id, shape_id, row))
        return results

    @_retry_on_lock
    def delete(self, workspace_id: str, shape_id: str, row_id: int) -> bool:
        with self._store.mutation(workspace_id) as conn:
            cursor = conn.execute(
                "DELETE FROM statement_rows WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                (workspace_id, shape_id, row_id),
            )
            return cursor.rowcount > 0

    @_retry_on_lock
    def bulk_delete(self, workspace_id: str, shape_id: str, row_ids: Sequence[int]) -> int:
        """Delete several rows; returns how many existed."""
        with self._store.mutation(workspace_id) as conn:
            count = 0
            for row_id in row_ids:
                cursor = conn.execute(
                    "DELETE FROM statement_rows WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                    (workspace_id, shape_id, row_id),
                )
                count += cursor.rowcount
            return count

    @_retry_on_lock
    def update_errors(
        self, workspace_id: str, shape_id: str, row_id: int, has_errors: bool, error_details: Optional[str]
    ) -> None:
        """Store the cached validation result of a row.

        This does not count as a content change, so the workspace timestamp
        and caches are left alone.
        """
        with self._store.connection() as conn:
            conn.execute(
                "UPDATE statement_rows SET has_errors = ?, error_details = ? "
                "WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                (1 if has_errors else 0, error_details, workspace_id, shape_id, row_id),
            )

    @_retry_on_lock
    def reorder(self, workspace_id: str, shape_id: str, row_ids: Sequence[int]) -> None:
        """Assign row_order by position in ``row_ids``."""
        with self._store.mutation(workspace_id) as conn:
            self._store.require_shape(conn, workspace_id, shape_id)
            conn.executemany(
                "UPDATE statement_rows SET row_order = ? WHERE workspace_id = ? AND shape_id = ? AND id = ?",
                [(i, workspace_id, shape_id, row_id) for i, row_id in enumerate(row_ids)],
            )


# ============================================================================
# Namespaces
# ============================================================================

class SQLiteNamespaceRepository:
    """Namespace table operations."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    def list(self, workspace_id: str) -> List[Namespace]:
        """List namespaces in insertion order."""
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            records = conn.execute(
                "SELECT prefix, uri FROM namespaces WHERE workspace_id = ? ORDER BY position ASC",
                (workspace_id,),
            ).fetchall()
        return [Namespace(r["prefix"], r["uri"]) for r in records]

    @_retry_on_lock
    def create(self, workspace_id: str, prefix: str, uri: str) -> Namespace:
        with self._store.mutation(workspace_id) as conn:
            if conn.execute(
                "SELECT 1 FROM namespaces WHERE workspace_id = ? AND prefix = ?",
                (workspace_id, prefix),
            ).fetchone():
                raise DuplicateNamespaceError(prefix)
            position = conn.execute(
                "SELECT COALESCE(MAX(position), -1) + 1 FROM namespaces WHERE workspace_id = ?",
                (workspace_id,),
            ).fetchone()[0]
            conn.execute(
                "INSERT INTO namespaces (workspace_id, position, prefix, uri) VALUES (?, ?, ?, ?)",
                (workspace_id, position, prefix, uri),
            )
        return Namespace(prefix, uri)

    @_retry_on_lock
    def update(
        self, workspace_id: str, prefix: str, new_prefix: Optional[str] = None, uri: Optional[str] = None
    ) -> Namespace:
        target_prefix = new_prefix or prefix
        with self._store.mutation(workspace_id) as conn:
            record = conn.execute(
                "SELECT uri FROM namespaces WHERE workspace_id = ? AND prefix = ?",
                (workspace_id, prefix),
            ).fetchone()
            if not record:
                raise NamespaceNotFoundError(prefix)
            if target_prefix != prefix and conn.execute(
                "SELECT 1 FROM namespaces WHERE workspace_id = ? AND prefix = ?",
                (workspace_id, target_prefix),
            ).fetchone():
                raise DuplicateNamespaceError(target_prefix)
            target_uri = uri if uri is not None else record["uri"]
            conn.execute(
                "UPDATE namespaces SET prefix = ?, uri = ? WHERE workspace_id = ? AND prefix = ?",
                (target_prefix, target_uri, workspace_id, prefix),
            )
        return Namespace(target_prefix, target_uri)

    @_retry_on_lock
    def delete(self, workspace_id: str, prefix: str) -> bool:
        with self._store.mutation(workspace_id) as conn:
            cursor = conn.execute(
                "DELETE FROM namespaces WHERE workspace_id = ? AND prefix = ?",
                (workspace_id, prefix),
            )
            return cursor.rowcount > 0


# ============================================================================
# Folders
# ============================================================================

class SQLiteFolderRepository:
    """Folder operations."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    def list(self, workspace_id: str) -> List[Folder]:
        """List folders ordered by name."""
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            records = conn.execute(
                "SELECT * FROM folders WHERE workspace_id = ? ORDER BY name ASC",
                (workspace_id,),
            ).fetchall()
        return [Folder(r["id"], r["name"], r["created_at"]) for r in records]

    def get(self, workspace_id: str, folder_id: str) -> Optional[Folder]:
        with self._store.connection() as conn:
            record = conn.execute(
                "SELECT * FROM folders WHERE workspace_id = ? AND id = ?",
                (workspace_id, folder_id),
            ).fetchone()
        return Folder(record["id"], record["name"], record["created_at"]) if record else None

    def get_by_name(self, workspace_id: str, name: str) -> Optional[Folder]:
        with self._store.connection() as conn:
            record = conn.execute(
                "SELECT * FROM folders WHERE workspace_id = ? AND name = ? ORDER BY created_at ASC",
                (workspace_id, name),
            ).fetchone()
        return Folder(record["id"], record["name"], record["created_at"]) if record else None

    @_retry_on_lock
    def create(self, workspace_id: str, name: str) -> Folder:
        folder = Folder(id=str(uuid.uuid4()), name=name, created_at=_now())
        with self._store.mutation(workspace_id) as conn:
            conn.execute(
                "INSERT INTO folders (id, workspace_id, name, created_at) VALUES (?, ?, ?, ?)",
                (folder.id, workspace_id, folder.name, folder.created_at),
            )
        logger.debug(f"Created folder '{name}' in workspace {workspace_id}")
        return folder

    def get_or_create(self, workspace_id: str, name: str) -> Folder:
        return self.get_by_name(workspace_id, name) or self.create(workspace_id, name)

    @_retry_on_lock
    def update(self, workspace_id: str, folder_id: str, name: str) -> Folder:
        with self._store.mutation(workspace_id) as conn:
            cursor = conn.execute(
                "UPDATE folders SET name = ? WHERE workspace_id = ? AND id = ?",
                (name, workspace_id, folder_id),
            )
            if cursor.rowcount == 0:
                raise FolderNotFoundError(folder_id)
        folder = self.get(workspace_id, folder_id)
        assert folder is not None
        return folder

    @_retry_on_lock
    def delete(self, workspace_id: str, folder_id: str) -> bool:
        """Delete a folder; its shapes become unfoldered."""
        with self._store.mutation(workspace_id) as conn:
            cursor = conn.execute(
                "DELETE FROM folders WHERE workspace_id = ? AND id = ?",
                (workspace_id, folder_id),
            )
            return cursor.rowcount > 0


# ============================================================================
# Options
# ============================================================================

class SQLiteOptionsRepository:
    """Workspace options stored as JSON values."""

    def __init__(self, store: SQLiteStore):
        self._store = store

    def get(self, workspace_id: str) -> WorkspaceOptions:
        with self._store.connection() as conn:
            self._store.require_workspace(conn, workspace_id)
            records = conn.execute(
                "SELECT key, value FROM options WHERE workspace_id = ?",
                (workspace_id,),
            ).fetchall()
        return WorkspaceOptions.from_dict({r["key"]: json.loads(r["value"]) for r in records})

    @_retry_on_lock
    def update(self, workspace_id: str, changes: Dict[str, Any]) -> WorkspaceOptions:
        """Merge option values; keys use their stored (camelCase) names."""
        with self._store.mutation(workspace_id) as conn:
            conn.executemany(
                "INSERT INTO options (workspace_id, key, value) VALUES (?, ?, ?) "
                "ON CONFLICT(workspace_id, key) DO UPDATE SET value = excluded.value",
                [(workspace_id, key, json.dumps(value)) for key, value in changes.items()],
            )
        return self.get(workspace_id)
