"""
Document watcher.

Watches one GraphML file and feeds full-text replacements to a
ViewerSession. watchdog delivers events on its observer thread; the handler
only reads the file and queues the text, and pump() applies updates on the
caller's thread so the session stays single-threaded.

Key Components:
- DocumentEventHandler: watchdog handler filtered to the watched file.
- DocumentWatcher: owns the observer and drains updates into the session.
"""

import logging
import os
import queue
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .session import DocumentUpdated, ViewerSession

logger = logging.getLogger(__name__)


class DocumentEventHandler(FileSystemEventHandler):
    """
    Queues the document text whenever the watched file changes.

    Editors that save through a temporary file and rename are covered by
    the moved/created events.
    """

    def __init__(self, path: Path, updates: "queue.Queue[str]"):
        self.path = path.resolve()
        self.updates = updates

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file modification events."""
        if not event.is_directory and self._matches(event.src_path):
            self._enqueue()

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation events."""
        if not event.is_directory and self._matches(event.src_path):
            self._enqueue()

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle rename-into-place saves."""
        if not event.is_directory and self._matches(event.dest_path):
            self._enqueue()

    def _matches(self, raw_path) -> bool:
        return Path(os.fsdecode(raw_path)).resolve() == self.path

    def _enqueue(self) -> None:
        try:
            # Undecodable bytes are replaced rather than rejected
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Could not read {self.path.name}: {e}")
            return
        logger.debug(f"Change detected: {self.path.name}")
        self.updates.put(text)


class DocumentWatcher:
    """
    Main controller for live reload of one document.
    """

    def __init__(
        self,
        path: Path,
        session: ViewerSession,
        on_update: Callable[[bool], None] | None = None,
    ):
        self.path = path.resolve()
        self.session = session
        self.on_update = on_update
        self.updates: "queue.Queue[str]" = queue.Queue()
        self.observer: Observer | None = None

    def start(self) -> None:
        """Start watching the document's directory."""
        handler = DocumentEventHandler(self.path, self.updates)
        self.observer = Observer()
        self.observer.schedule(handler, str(self.path.parent), recursive=False)
        self.observer.start()
        logger.info(f"Watching {self.path}")

    def stop(self) -> None:
        """Gracefully stop the watcher."""
        logger.info("Stopping watcher...")
        if self.observer:
            self.observer.stop()
            self.observer.join()
            self.observer = None

    def pump(self, timeout: float | None = None) -> int:
        """Apply queued document texts to the session in arrival order.

        Args:
            timeout: Seconds to wait for the first update; None returns
                immediately when nothing is queued

        Returns:
            Number of updates applied
        """
        try:
            first = self.updates.get(timeout=timeout) if timeout else self.updates.get_nowait()
        except queue.Empty:
            return 0

        texts = [first]
        while True:
            try:
                texts.append(self.updates.get_nowait())
            except queue.Empty:
                break

        # One update at a time so on_update sees the status that update left
        for text in texts:
            self.session.post(DocumentUpdated(text))
            for applied in self.session.run_pending():
                if self.on_update:
                    self.on_update(applied)
        return len(texts)

    def run_forever(self, poll_interval: float = 0.5) -> None:
        """Start, pump until interrupted, then stop."""
        self.start()
        try:
            while True:
                self.pump(timeout=poll_interval)
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()
