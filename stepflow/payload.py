"""Payload containers passed through pipelines, plus pattern matching support."""

from __future__ import annotations

import base64
from collections.abc import Mapping


class Matchable:
    """Holds key/value matching patterns and compares them with another holder."""

    def __init__(self) -> None:
        self._matching_patterns: dict[str, str] = {}

    def add_matching_pattern(self, key: str, value: str) -> None:
        """Set a pattern, replacing any earlier value for the same key."""
        self._matching_patterns[key] = value

    def add_matching_patterns(self, patterns: Mapping[str, str]) -> None:
        """Set every pattern of the given mapping."""
        self._matching_patterns.update(patterns)

    def get_matching_pattern(self, key: str) -> str | None:
        return self._matching_patterns.get(key)

    def remove_matching_pattern(self, key: str) -> None:
        """Remove a pattern; removing an unknown key has no effect."""
        self._matching_patterns.pop(key, None)

    def has_matching_patterns(self) -> bool:
        return bool(self._matching_patterns)

    def count_matching_patterns(self) -> int:
        return len(self._matching_patterns)

    def matching_patterns(self) -> dict[str, str]:
        """A copy of all patterns."""
        return dict(self._matching_patterns)

    def matches_all_of_mine_to_any_of_the_other(self, other: Matchable) -> bool:
        """True if every pattern held here is present with the same value in ``other``."""
        theirs = other._matching_patterns
        return all(
            key in theirs and theirs[key] == value
            for key, value in self._matching_patterns.items()
        )


class BinaryProcessingData:
    """Base class for structured (non-text) payload data."""


class ProcessingError(BinaryProcessingData):
    """An error raised by a worker while processing data."""

    def __init__(self, error_code: str, error_message: str) -> None:
        self.error_code = error_code
        self.error_message = error_message

    def __repr__(self) -> str:
        return f"ProcessingError({self.error_code!r}, {self.error_message!r})"

    def to_json(self) -> dict[str, str]:
        return {"errorMessage": self.error_message, "errorCode": self.error_code}


class ProcessingPayload(Matchable):
    """A named payload holding either text or binary processing data."""

    def __init__(
        self,
        payload_name: str,
        mimetype: str,
        payload: str | BinaryProcessingData,
    ) -> None:
        super().__init__()
        self.payload_name = payload_name
        self.mimetype = mimetype
        self.string_data = ""
        self.binary_data: BinaryProcessingData | None = None
        if isinstance(payload, str):
            self.string_data = payload
        elif isinstance(payload, BinaryProcessingData):
            self.binary_data = payload
        else:
            raise TypeError(
                "payload must be a str or BinaryProcessingData, "
                f"not {type(payload).__name__}"
            )

    def as_string(self) -> str:
        return self.string_data

    def as_base64(self) -> str:
        """The text payload, base64 encoded without line breaks."""
        return base64.b64encode(self.string_data.encode("utf-8")).decode("ascii")

    def as_binary(self) -> BinaryProcessingData | None:
        return self.binary_data

    def to_json(self) -> dict:
        return {
            "payloadName": self.payload_name,
            "mimetype": self.mimetype,
            "payload": self.as_base64(),
            "parameters": self.matching_patterns(),
        }