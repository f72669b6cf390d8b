# index_store.py
from __future__ import annotations
import json, logging, threading
from pathlib import Path
from typing import List, Optional, Tuple

from jsonschema import validate, ValidationError

from fs_ops import append_log, write_json_atomic
from ingest import CatalogError, ingest_catalog
from paths import FOODS_PATH, LOG_DIR, SNAPSHOT_PATH
from schemas import CatalogRecord

logger = logging.getLogger(__name__)

# Snapshot = non-empty array of normalized records
SNAPSHOT_SCHEMA = {
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "name": {"type": "string", "minLength": 1},
            "keywords": {"type": "string"},
        },
        "required": ["id", "name", "keywords"],
        "additionalProperties": False,
    },
}


# -----------------------------
# Snapshot file
# -----------------------------
def read_snapshot(path: Path) -> Optional[List[CatalogRecord]]:
    """Records from a valid snapshot, else None (missing, corrupt, empty)."""
    if not path.exists():
        return None
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
        validate(instance=doc, schema=SNAPSHOT_SCHEMA)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        logger.warning("[snapshot] unreadable %s: %s", path, e)
        return None
    except ValidationError as e:
        logger.warning("[snapshot] invalid %s: %s", path, e.message)
        return None
    return [CatalogRecord(**d) for d in doc]


def write_snapshot(path: Path, records: List[CatalogRecord]) -> None:
    write_json_atomic(path, [r.model_dump() for r in records])


# -----------------------------
# In-memory catalog
# -----------------------------
class CatalogIndex:
    """
    Normalized food catalog held for the process lifetime.

    The first ensure_loaded() reads the snapshot, or rebuilds from the raw
    dataset when the snapshot is missing/corrupt/empty. Afterwards reads hit
    the cached tuple only. rebuild() builds a fresh tuple and swaps the
    reference, so concurrent searches see either the old or the new catalog.
    """

    def __init__(
        self,
        data_path: Path = FOODS_PATH,
        snapshot_path: Path = SNAPSHOT_PATH,
        log_path: Optional[Path] = None,
    ):
        self.data_path = Path(data_path)
        self.snapshot_path = Path(snapshot_path)
        self.log_path = log_path
        self._records: Optional[Tuple[CatalogRecord, ...]] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._records is not None

    @property
    def count(self) -> int:
        return len(self.ensure_loaded())

    def ensure_loaded(self) -> Tuple[CatalogRecord, ...]:
        records = self._records
        if records is not None:
            return records
        with self._lock:
            if self._records is None:
                snap = read_snapshot(self.snapshot_path)
                if snap is not None:
                    logger.info(
                        "[index] %d foods from snapshot %s",
                        len(snap),
                        self.snapshot_path,
                    )
                    self._log_event("snapshot", len(snap))
                    self._records = tuple(snap)
                else:
                    self._records = self._build()
            return self._records

    def rebuild(self) -> Tuple[CatalogRecord, ...]:
        """Rebuild from the raw dataset, ignoring the snapshot."""
        with self._lock:
            fresh = self._build()
            self._records = fresh
            return fresh

    def _build(self) -> Tuple[CatalogRecord, ...]:
        try:
            records = ingest_catalog(self.data_path)
        except CatalogError as e:
            # Stays empty until the next explicit rebuild()
            logger.error("[index] %s", e)
            self._log_event("raw", 0, error=str(e))
            return ()
        try:
            write_snapshot(self.snapshot_path, records)
        except OSError as e:
            logger.warning("[snapshot] write failed %s: %s", self.snapshot_path, e)
        logger.info("[index] built %d foods from %s", len(records), self.data_path)
        self._log_event("raw", len(records))
        return tuple(records)

    def _log_event(self, source: str, count: int, error: Optional[str] = None) -> None:
        if self.log_path is None:
            return
        try:
            append_log(
                self.log_path,
                {
                    "source": source,
                    "count": count,
                    "error": error,
                    "path": str(self.data_path),
                },
            )
        except OSError as e:
            logger.warning("[index] event log failed %s: %s", self.log_path, e)


# Process-wide instance used by the web app
INDEX = CatalogIndex(FOODS_PATH, SNAPSHOT_PATH, LOG_DIR / "index.jsonl")
