# watcher.py  — rebuild the food catalog when the raw dataset changes
from __future__ import annotations
from pathlib import Path
import argparse, logging, threading, time

from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver
from watchdog.events import (
    FileSystemEventHandler,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    DirMovedEvent,
)

from index_store import CatalogIndex, INDEX
from paths import canon

logger = logging.getLogger(__name__)


def wait_file_ready(p: Path, timeout=3.0, interval=0.1) -> bool:
    """
    Wait until the file is 'stable': size and mtime unchanged between two
    checks (avoids parsing a dataset that is still being written).
    """
    end = time.time() + timeout
    prev = (-1, -1.0)
    while time.time() < end:
        try:
            stat = p.stat()
            sig = (stat.st_size, stat.st_mtime)
            if sig == prev:
                return True
            prev = sig
        except FileNotFoundError:
            pass
        time.sleep(interval)
    return p.exists()


# --------- Event handler ----------
class DatasetHandler(FileSystemEventHandler):
    def __init__(self, index: CatalogIndex, debounce: float = 2.0, settle: float = 3.0):
        super().__init__()
        self.index = index
        self.target = canon(index.data_path)
        self.debounce = debounce
        self.settle = settle
        self._recent_until = 0.0
        self._lock = threading.Lock()

    def _is_target(self, path) -> bool:
        return canon(Path(path)) == self.target

    def _claim(self) -> bool:
        """True for the first event of a burst; later ones are dropped."""
        now = time.time()
        with self._lock:
            if now < self._recent_until:
                return False
            self._recent_until = now + self.debounce
            return True

    def _reload(self, reason: str):
        if not self._claim():
            return
        if not wait_file_ready(self.target, timeout=self.settle):
            logger.warning("[watch] %s vanished before reload", self.target)
            return
        records = self.index.rebuild()
        logger.info("[watch] %s -> reloaded %d foods", reason, len(records))

    # --- Event callbacks ---
    def on_created(self, event: DirCreatedEvent | FileCreatedEvent):
        if not event.is_directory and self._is_target(event.src_path):
            self._reload("created")

    def on_modified(self, event: DirModifiedEvent | FileModifiedEvent):
        if not event.is_directory and self._is_target(event.src_path):
            self._reload("modified")

    def on_moved(self, event: DirMovedEvent | FileMovedEvent):
        # editors and atomic writers replace the file via rename
        if not event.is_directory and self._is_target(event.dest_path):
            self._reload("replaced")

    def on_deleted(self, event: DirDeletedEvent | FileDeletedEvent):
        if not event.is_directory and self._is_target(event.src_path):
            # keep serving the current catalog; the next rebuild decides
            logger.warning("[watch] dataset deleted: %s", event.src_path)


def start_observer(index: CatalogIndex = INDEX, polling: bool = False):
    """Start watching the dataset directory; caller stops/joins the observer."""
    folder = canon(index.data_path).parent
    if not folder.is_dir():
        raise FileNotFoundError(f"Dataset folder not found: {folder}")
    obs = PollingObserver() if polling else Observer()
    obs.schedule(DatasetHandler(index), str(folder), recursive=False)
    obs.start()
    logger.info(
        "[watch] %s  (%s)", index.data_path, "polling" if polling else "native"
    )
    return obs


def main():
    ap = argparse.ArgumentParser(
        description="Watch the food dataset and rebuild the catalog snapshot on change"
    )
    ap.add_argument("--data", type=Path, default=None)
    ap.add_argument(
        "--polling",
        action="store_true",
        help="PollingObserver (e.g. for network drives)",
    )
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    index = CatalogIndex(args.data) if args.data else INDEX
    index.ensure_loaded()
    obs = start_observer(index, polling=args.polling)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        obs.stop()
        obs.join()


if __name__ == "__main__":
    main()
