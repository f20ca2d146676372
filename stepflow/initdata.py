"""Named arguments handed to a pipeline step when it is initialised."""

from __future__ import annotations


class PipelineStepInitData:
    """A multimap of named string arguments; lookups return the first value added."""

    def __init__(self) -> None:
        self._named_arguments: dict[str, list[str]] = {}

    def add_named_argument(self, name: str, value: str) -> None:
        self._named_arguments.setdefault(name, []).append(value)

    def get_named_argument(self, name: str) -> str | None:
        values = self._named_arguments.get(name)
        return values[0] if values else None