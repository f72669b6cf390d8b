# ingest.py
from __future__ import annotations
import hashlib, json, logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from charset_normalizer import from_bytes
from jsonschema import validate, ValidationError

from schemas import CatalogRecord
from search_normalize import fold

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    pass


class CatalogFormatError(CatalogError):
    """Raw dataset could not be decoded or parsed into a food list."""


class CatalogMissingError(CatalogError):
    """Raw dataset file does not exist."""


UNKNOWN_NAME = "Unknown"

# Field names seen across dataset exports, in priority order
ID_FIELDS = ("foodId", "id", "code", "foodcode", "FoodId", "FOOD_ID")
NAME_FIELDS = ("foodName", "displayName", "name", "title", "FoodName", "matvare")
KEYWORD_FIELDS = ("searchKeywords", "keywords", "searchTerms", "tags")

# A bare list, or an object carrying the list under "foods" / "data"
RAW_DATASET_SCHEMA = {
    "anyOf": [
        {"type": "array"},
        {
            "type": "object",
            "properties": {
                "foods": {"type": "array"},
                "data": {"type": "array"},
            },
        },
    ]
}

Accessor = Callable[[dict], Any]


def _field(key: str) -> Accessor:
    return lambda entry: entry.get(key)


ID_ACCESSORS: List[Accessor] = [_field(k) for k in ID_FIELDS]
NAME_ACCESSORS: List[Accessor] = [_field(k) for k in NAME_FIELDS]
KEYWORD_ACCESSORS: List[Accessor] = [_field(k) for k in KEYWORD_FIELDS]


def _resolve(entry: dict, accessors: Sequence[Accessor]) -> Optional[Any]:
    """First accessor result that is neither None nor blank."""
    for get in accessors:
        v = get(entry)
        if v is None or v == [] or not str(v).strip():
            continue
        return v
    return None


def _keywords_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v is not None)
    return str(value)


def derived_id(name: str) -> str:
    """Stable id for entries without an identifier: hash of the folded name."""
    return "gen-" + hashlib.sha256(fold(name).encode("utf-8")).hexdigest()[:16]


def _food_list(raw: Any) -> list:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        return raw.get("foods") or raw.get("data") or []
    return []


def normalize_foods(raw: Any) -> List[CatalogRecord]:
    """
    Map a raw food dataset onto uniform catalog records.
    Order follows the raw dataset; non-object entries are skipped.
    """
    out: List[CatalogRecord] = []
    for entry in _food_list(raw):
        if not isinstance(entry, dict):
            continue
        name = _resolve(entry, NAME_ACCESSORS)
        name = str(name).strip() if name is not None else UNKNOWN_NAME
        raw_id = _resolve(entry, ID_ACCESSORS)
        food_id = str(raw_id).strip() if raw_id is not None else derived_id(name)
        if not name or not food_id:
            continue
        keywords = _keywords_text(_resolve(entry, KEYWORD_ACCESSORS))
        out.append(CatalogRecord(id=food_id, name=name, keywords=keywords))
    return out


def _read_text_safely(path: Path) -> str:
    """
    Reads bytes and tries:
      1) UTF-8-SIG (BOM removed),
      2) charset-normalizer (best guess),
      3) latin-1 (lossless, never a DecodeError).
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(data).best()
    if match and match.encoding:
        return data.decode(match.encoding, errors="replace")

    return data.decode("latin-1", errors="replace")


def load_raw_dataset(path: Path) -> Any:
    """Parsed raw dataset document, or CatalogMissingError / CatalogFormatError."""
    path = Path(path)
    if not path.exists():
        raise CatalogMissingError(f"Food dataset missing: {path}")
    try:
        text = _read_text_safely(path)
    except OSError as e:
        raise CatalogFormatError(f"Food dataset unreadable: {path}: {e}") from e
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise CatalogFormatError(f"Food dataset is not JSON: {path}: {e}") from e
    try:
        validate(instance=raw, schema=RAW_DATASET_SCHEMA)
    except ValidationError as e:
        raise CatalogFormatError(
            f"Food dataset has an unexpected shape: {path}: {e.message}"
        ) from e
    return raw


def ingest_catalog(path: Path) -> List[CatalogRecord]:
    """Load + normalize; raises CatalogError subclasses."""
    records = normalize_foods(load_raw_dataset(path))
    logger.info("[ingest] %s -> %d foods", path, len(records))
    return records
