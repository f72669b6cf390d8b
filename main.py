# main.py
import argparse, logging, time
from pathlib import Path

from fs_ops import load_log
from index_store import CatalogIndex
from paths import FOODS_PATH, LOG_DIR, SNAPSHOT_PATH
from watcher import start_observer


def run_once(data: Path, snapshot: Path, *, rebuild: bool, log_path: Path) -> int:
    index = CatalogIndex(data, snapshot, log_path)
    records = index.rebuild() if rebuild else index.ensure_loaded()
    return len(records)


def print_history(log_path: Path, last: int = 10) -> None:
    for ev in load_log(log_path)[-last:]:
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(ev.get("ts", 0)))
        err = f"  error={ev['error']}" if ev.get("error") else ""
        print(f"{ts}  {ev.get('source')}  count={ev.get('count')}{err}")


def parse_args():
    ap = argparse.ArgumentParser(
        description="Build the food catalog snapshot (and optionally keep it fresh)."
    )
    ap.add_argument("--data", type=Path, default=FOODS_PATH)
    ap.add_argument("--snapshot", type=Path, default=SNAPSHOT_PATH)
    ap.add_argument(
        "--rebuild",
        action="store_true",
        help="Ignore an existing snapshot and normalize the raw dataset again",
    )
    ap.add_argument("--history", action="store_true", help="Show recent builds")
    ap.add_argument("--watch", action="store_true")
    ap.add_argument("--polling", action="store_true")
    return ap.parse_args()


def watch_mode(data: Path, snapshot: Path, *, log_path: Path, polling: bool):
    index = CatalogIndex(data, snapshot, log_path)
    print(f"[watch] {len(index.ensure_loaded())} foods loaded. Stop: Ctrl+C")
    obs = start_observer(index, polling=polling)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n[watch] stopped.")
    finally:
        obs.stop()
        obs.join()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    log_path = LOG_DIR / "index.jsonl"
    if args.history:
        print_history(log_path)
    elif args.watch:
        watch_mode(args.data, args.snapshot, log_path=log_path, polling=args.polling)
    else:
        n = run_once(args.data, args.snapshot, rebuild=args.rebuild, log_path=log_path)
        print(f"[done] foods: {n}")
