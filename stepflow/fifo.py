"""A thread-safe first-in first-out queue of processing data."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Mapping

from stepflow.payload import BinaryProcessingData
from stepflow.processingdata import PipelineProcessingData


class PipelineFifo:
    """Queue that hands processing data from listeners to pipeline processors."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: deque[PipelineProcessingData] = deque()

    def enqueue(
        self,
        data: PipelineProcessingData,
        matching_patterns: Mapping[str, str] | None = None,
    ) -> None:
        """Add ``data`` at the end, after applying ``matching_patterns`` to it."""
        if matching_patterns:
            data.add_matching_patterns(matching_patterns)
        with self._lock:
            self._queue.append(data)

    def enqueue_payload(
        self,
        payload_name: str,
        mimetype: str,
        payload: str | BinaryProcessingData,
        matching_patterns: Mapping[str, str] | None = None,
    ) -> PipelineProcessingData:
        """Wrap ``payload`` in new processing data, enqueue it and return it."""
        data = PipelineProcessingData()
        data.add_payload_data(payload_name, mimetype, payload)
        self.enqueue(data, matching_patterns)
        return data

    def dequeue(self) -> PipelineProcessingData | None:
        """Remove and return the oldest element, or None if the queue is empty."""
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)