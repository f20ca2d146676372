"""The container that carries payloads and errors through pipelines."""

from __future__ import annotations

import threading
import time

from stepflow import names
from stepflow.payload import (
    BinaryProcessingData,
    Matchable,
    ProcessingError,
    ProcessingPayload,
)

COUNTER_MAX = (2**31 - 1) // 2


class PipelineProcessingData(Matchable):
    """Collects payloads and errors while data passes through pipelines."""

    _instance_counter = 0
    _counter_lock = threading.Lock()

    def __init__(self) -> None:
        super().__init__()
        self.processing_counter = 0
        self._payloads: list[ProcessingPayload] = []
        self._errors: list[ProcessingPayload] = []
        self._set_default_properties()

    @classmethod
    def _next_formatted_counter(cls) -> str:
        with cls._counter_lock:
            value = cls._instance_counter
            cls._instance_counter += 1
            if value > COUNTER_MAX:
                cls._instance_counter = 0
        return f"{value:09d}"

    def _set_default_properties(self) -> None:
        now = time.localtime()
        self.add_matching_pattern(
            names.PATTERN_TRANSACTION_ID,
            time.strftime("%Y%m%d%H%M%S", now) + "_" + self._next_formatted_counter(),
        )
        self.add_matching_pattern(names.PATTERN_DATE_CREATED, time.strftime("%Y%m%d", now))
        self.add_matching_pattern(names.PATTERN_TIME_CREATED, time.strftime("%H%M%S", now))
        self.set_last_processed_pipeline_name("")

    def add_payload_data(
        self, payload_name: str, mimetype: str, data: str | BinaryProcessingData
    ) -> None:
        """Append a payload; it receives a copy of the current matching patterns."""
        payload = ProcessingPayload(payload_name, mimetype, data)
        payload.add_matching_patterns(self.matching_patterns())
        self._payloads.append(payload)

    def add_error(self, error_code: str, error_message: str) -> None:
        self._errors.append(
            ProcessingPayload(
                names.PAYLOAD_NAME_PROCESSING_ERROR,
                names.MIMETYPE_APPLICATION_OCTET_STREAM,
                ProcessingError(error_code, error_message),
            )
        )

    def has_error(self) -> bool:
        return bool(self._errors)

    def get_all_errors(self) -> list[ProcessingError]:
        return [
            payload.as_binary()
            for payload in self._errors
            if payload.payload_name == names.PAYLOAD_NAME_PROCESSING_ERROR
            and isinstance(payload.as_binary(), ProcessingError)
        ]

    def payloads(self) -> list[ProcessingPayload]:
        return list(self._payloads)

    def get_payload(self, payload_name: str) -> ProcessingPayload | None:
        """The most recently added payload with the given name, if any."""
        return next(
            (p for p in reversed(self._payloads) if p.payload_name == payload_name),
            None,
        )

    def get_last_payload(self) -> ProcessingPayload | None:
        return self._payloads[-1] if self._payloads else None

    def count_payloads(self) -> int:
        return len(self._payloads)

    def formatted_processing_counter(self) -> str:
        return f"{self.processing_counter:05d}"

    def increase_processing_counter(self) -> None:
        self.processing_counter += 1

    def set_last_processed_pipeline_name(self, pipeline_name: str) -> None:
        self.add_matching_pattern(names.PATTERN_LAST_PIPELINE, pipeline_name)

    def last_processed_pipeline_name(self) -> str:
        return self.get_matching_pattern(names.PATTERN_LAST_PIPELINE) or ""

    def to_json(self) -> dict:
        return {
            "processingCounter": self.processing_counter,
            "processingPayloads": [p.to_json() for p in self._payloads],
            "parameters": self.matching_patterns(),
            "processingErrors": [e.to_json() for e in self.get_all_errors()],
        }