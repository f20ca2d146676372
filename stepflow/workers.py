"""Worker modules run by pipeline steps, and the registry that provides them.

A worker is initialised once after it is loaded, runs once for every
processing of data in a pipeline, and is finished once before it is unloaded.
Errors met while processing are reported through
``PipelineProcessingData.add_error`` rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from stepflow import names
from stepflow.initdata import PipelineStepInitData
from stepflow.payload import ProcessingError
from stepflow.processingdata import PipelineProcessingData

logger = logging.getLogger(__name__)


class WorkerModule:
    """Base worker: every hook does nothing unless a subclass overrides it."""

    def init(self, init_data: PipelineStepInitData) -> None:
        """Called once, directly after the worker has been loaded."""

    def process(self, processing_data: PipelineProcessingData) -> None:
        """Called once for every execution of the step in a pipeline."""

    def finish(self) -> None:
        """Called once, directly before the worker is unloaded."""


class HelloWorld(WorkerModule):
    """Greets, adds a text payload and marks the data as processed by it."""

    def process(self, processing_data: PipelineProcessingData) -> None:
        print("Hello World")
        processing_data.add_payload_data(
            "data to be sent back to the http client",
            names.MIMETYPE_TEXT_PLAIN,
            "hello world",
        )
        processing_data.add_matching_pattern("processed_by_hello_world", "true")
        what = processing_data.get_matching_pattern(
            names.PATTERN_HTTP_URL_PARAMS_PREFIX + "what"
        )
        if what == "throwError":
            processing_data.add_error("-42", "this error has been thrown on purpose")


def _argument(init_data: PipelineStepInitData, name: str, current: str) -> str:
    value = init_data.get_named_argument(name)
    return current if value is None else value


class ArgumentsProcessor(WorkerModule):
    """Writes its arguments to a file, answers a question and raises configured errors."""

    def __init__(self) -> None:
        self.output_file_name = ""
        self.first_argument = ""
        self.second_argument = ""
        self.error_01 = ""
        self.error_02 = ""

    def init(self, init_data: PipelineStepInitData) -> None:
        self.output_file_name = _argument(init_data, "outputFileName", self.output_file_name)
        self.first_argument = _argument(init_data, "first argument", self.first_argument)
        self.second_argument = _argument(init_data, "second argument", self.second_argument)
        self.error_01 = _argument(init_data, "raise Error 01", self.error_01)
        self.error_02 = _argument(init_data, "raise Error 02", self.error_02)

    def process(self, processing_data: PipelineProcessingData) -> None:
        self._write_arguments()
        self._answer_question(processing_data)
        if self.error_01:
            processing_data.add_error("first error", self.error_01)
        if self.error_02:
            processing_data.add_error("second error", self.error_02)

    def _write_arguments(self) -> None:
        if not self.output_file_name:
            return
        for value in (self.output_file_name, self.first_argument, self.second_argument):
            print(f"pipeline_step_module_process: {value}")
        Path(self.output_file_name).write_text(
            f"{self.first_argument}\n{self.second_argument}\n", encoding="utf-8"
        )

    @staticmethod
    def _answer_question(processing_data: PipelineProcessingData) -> None:
        question = processing_data.get_payload("question")
        if question is not None and question.as_string() == "What is the answer?":
            print("adding the answer to the question")
            processing_data.add_payload_data(
                "answer", names.MIMETYPE_TEXT_PLAIN, "the answer is 42"
            )
        else:
            print("NOT adding the answer to the question")


class BinaryDataProcessor(WorkerModule):
    """Adds a binary payload built from its two arguments."""

    def __init__(self) -> None:
        self.first_argument = ""
        self.second_argument = ""

    def init(self, init_data: PipelineStepInitData) -> None:
        self.first_argument = _argument(init_data, "first argument", self.first_argument)
        self.second_argument = _argument(init_data, "second argument", self.second_argument)

    def process(self, processing_data: PipelineProcessingData) -> None:
        data = ProcessingError(
            "ProcessingError",
            "ProcessingError is the only BinaryDataPayload, that currently is supported. "
            f"firstArgument: {self.first_argument} "
            f"secondArgument: {self.second_argument}",
        )
        processing_data.add_payload_data("myBinaryPayloadData", "", data)


_REGISTRY: dict[str, Callable[[], WorkerModule]] = {
    "helloWorld": HelloWorld,
    "argumentsProcessor": ArgumentsProcessor,
    "binaryDataProcessor": BinaryDataProcessor,
}


def register_worker(library_name: str, factory: Callable[[], WorkerModule]) -> None:
    """Make ``factory`` available under ``library_name``, replacing any earlier one."""
    if not callable(factory):
        raise TypeError(f"worker factory for {library_name!r} is not callable")
    _REGISTRY[library_name] = factory


def create_worker(library_name: str) -> WorkerModule:
    """A new worker for ``library_name``; raises KeyError if none is registered."""
    try:
        factory = _REGISTRY[library_name]
    except KeyError:
        raise KeyError(f"no worker module registered under {library_name!r}") from None
    return factory()