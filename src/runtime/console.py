"""Background reader that turns console lines into runtime command events."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from queue import Queue
from typing import Any, Optional, TextIO

from .commands import CommandEvent


class ConsoleCommandReader:
    """Reads lines from a text stream on a daemon thread and queues them."""

    def __init__(
        self,
        queue: Queue[Any],
        stream: TextIO,
        logger: Optional[logging.Logger] = None,
    ):
        self._queue = queue
        self._stream = stream
        self._logger = logger or logging.getLogger("runtime.console")
        self._thread: Optional[threading.Thread] = None
        self._closed = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def start(self) -> None:
        if self.is_running:
            return
        self._closed.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="console-reader",
        )
        self._thread.start()

    def join(self, timeout_seconds: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout_seconds)

    def _run(self) -> None:
        try:
            for line in self._stream:
                self._queue.put(CommandEvent(line=line, occurred_at=datetime.now()))
        except (OSError, ValueError) as error:
            # ValueError: the stream was closed underneath the reader.
            self._logger.warning("Console input failed: %s", error)
        finally:
            self._closed.set()
            self._logger.info("Console input closed")
