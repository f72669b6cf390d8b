# fs_ops.py
import json, os, tempfile, time
from pathlib import Path
from typing import Any


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write JSON to a temp file next to `path`, then replace `path` with it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def append_log(logfile: Path, record: dict) -> None:
    logfile.parent.mkdir(parents=True, exist_ok=True)
    with logfile.open("a", encoding="utf-8") as f:
        f.write(
            json.dumps({"ts": int(time.time()), **record}, ensure_ascii=False) + "\n"
        )


def load_log(logfile: Path) -> list[dict]:
    """Parse a JSONL log, skipping broken lines."""
    if not logfile.exists():
        return []
    events = []
    with logfile.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return events
