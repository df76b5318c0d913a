"""
JSON file persistence for the product collection.

The whole collection lives in a single JSON document (an array of
product objects, 2-space indented, UTF-8).  Every operation re-reads
the document, works on an in-memory copy and, for mutations, rewrites
the complete array.  There is no cache between calls.

``ProductStore`` assigns identifiers and timestamps.  Identifiers are
decimal strings allocated as ``max(numeric ids) + 1``; ids that are not
decimal integers are ignored when computing the maximum.  Timestamps
are ISO 8601 strings in UTC with a trailing ``Z``.

Read-modify-write cycles are serialized by a lock, which is enough for
the single-process deployment this service targets.  Writes go through
a temporary file in the same directory followed by ``os.replace`` so a
crash never leaves a truncated document behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from fastapi import Request

from .errors import StorageError


logger = logging.getLogger(__name__)

Record = Dict[str, Any]

# Fields owned by the store; callers cannot set or overwrite them.
PROTECTED_FIELDS = ("id", "createdAt", "updatedAt")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``2024-05-01T12:00:00.123456Z``."""
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_id(records: List[Record]) -> str:
    """Return the identifier following the largest numeric id in ``records``."""
    numeric = [int(r["id"]) for r in records if str(r.get("id", "")).isdecimal()]
    return str(max(numeric, default=0) + 1)


class ProductStore:
    """Full-collection read/write access to the products JSON document."""

    def __init__(self, path: str | Path, clock: Callable[[], datetime] = utcnow) -> None:
        self.path = Path(path)
        self._clock = clock
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Raw document access
    # ------------------------------------------------------------------
    def ensure_exists(self) -> None:
        """Create an empty collection document if the file is missing."""
        with self._lock:
            if not self.path.exists():
                logger.info("Creating empty product store at %s", self.path)
                self.write_all([])

    def list_all(self) -> List[Record]:
        """Return every stored record in file order.

        A missing file is an empty collection.  Any other read or parse
        failure raises :class:`StorageError`.
        """
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read product store %s: %s", self.path, exc)
            raise StorageError(f"Could not read product data: {exc}") from exc
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.error("Product store %s does not contain a JSON array of objects", self.path)
            raise StorageError("Could not read product data: expected a JSON array of objects")
        return data

    def write_all(self, records: List[Record]) -> None:
        """Replace the stored collection with ``records``."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write product store %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write product data: {exc}") from exc

    # ------------------------------------------------------------------
    # Record operations
    # ------------------------------------------------------------------
    def find_by_id(self, record_id: str) -> Optional[Record]:
        for record in self.list_all():
            if record.get("id") == record_id:
                return record
        return None

    def append(self, fields: Mapping[str, Any]) -> Record:
        """Store a new record built from ``fields`` and return it."""
        with self._lock:
            records = self.list_all()
            now = format_timestamp(self._clock())
            record: Record = {"id": next_id(records)}
            record.update(_strip_protected(fields))
            record = _drop_cleared(record)
            record["createdAt"] = now
            record["updatedAt"] = now
            records.append(record)
            self.write_all(records)
        logger.info("Created product %s", record["id"])
        return record

    def replace(self, record_id: str, fields: Mapping[str, Any]) -> Optional[Record]:
        """Merge ``fields`` over the record ``record_id``.

        Returns ``None`` when no such record exists.  ``id`` and
        ``createdAt`` are kept; ``updatedAt`` always moves forward.
        """
        with self._lock:
            records = self.list_all()
            for index, current in enumerate(records):
                if current.get("id") == record_id:
                    break
            else:
                return None
            updated = dict(current)
            updated.update(_strip_protected(fields))
            updated = _drop_cleared(updated)
            updated["id"] = record_id
            updated["updatedAt"] = self._advance(current.get("updatedAt"))
            records[index] = updated
            self.write_all(records)
        logger.info("Updated product %s", record_id)
        return updated

    def remove(self, record_id: str) -> bool:
        """Delete ``record_id``; return ``False`` when nothing was removed."""
        with self._lock:
            records = self.list_all()
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                return False
            self.write_all(remaining)
        logger.info("Deleted product %s", record_id)
        return True

    def _advance(self, previous: Any) -> str:
        now = self._clock()
        last = parse_timestamp(previous)
        if last is not None and now <= last:
            now = last + timedelta(microseconds=1)
        return format_timestamp(now)


def _strip_protected(fields: Mapping[str, Any]) -> Record:
    return {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}


def _drop_cleared(record: Record) -> Record:
    # ``None`` clears an optional field instead of persisting a null.
    return {k: v for k, v in record.items() if v is not None}


def get_store(request: Request) -> ProductStore:
    """FastAPI dependency returning the store attached to the application."""
    return request.app.state.store
