"""Pipeline processors: run every configured pipeline on incoming data."""

from __future__ import annotations

import json
import logging
import os
import threading

from stepflow.fifo import PipelineFifo
from stepflow.pipeline import UNDEFINED, Pipeline, PipelineError
from stepflow.processingdata import PipelineProcessingData

logger = logging.getLogger(__name__)

_PIPELINES = "pipelines"
_PIPELINE_CONFIG_FILE = "pipelineConfigFile"
_PROCESS_NAME = "processName"
_MATCHING_PATTERNS = "matchingPatterns"

_MAX_SLEEP = 0.5
_MIN_SLEEP = 0.000001


class PipelineProcessor:
    """Holds the pipelines of one process and feeds them data, optionally from a fifo."""

    def __init__(self) -> None:
        self.process_name = ""
        self._config_dir = ""
        self._pipelines: list[Pipeline] = []
        self._execution_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config_file(
        cls, config_file_path: str, pipelines_dir: str | None = None
    ) -> PipelineProcessor | None:
        """Load a processor from a JSON file; None (with the error logged) on failure."""
        processor = cls()
        logger.info("Loading pipeline processor configuration from file: %s", config_file_path)
        try:
            processor.load_config(config_file_path, pipelines_dir)
        except (OSError, ValueError, PipelineError) as exc:
            logger.error(
                "Failed loading pipeline processor configuration from %s : %s",
                config_file_path,
                exc,
            )
            processor.close()
            return None
        return processor

    def load_config(self, config_file_path: str, pipelines_dir: str | None = None) -> None:
        """Read the process name and its pipelines; raises on any failure.

        Pipeline files are looked up in ``pipelines_dir`` if given, otherwise
        in the directory of the process configuration file.
        """
        if pipelines_dir is not None:
            logger.info("pipeline config directory is supplied by the caller")
            self._config_dir = pipelines_dir
        else:
            logger.info("pipeline config directory is the same as the processes config directory")
            self._config_dir = os.path.dirname(config_file_path)
        logger.info("Reading pipeline config files from directory: '%s'", self._config_dir)
        with open(config_file_path, encoding="utf-8") as config_file:
            json_data = json.load(config_file)
        if not isinstance(json_data, dict):
            raise PipelineError("Failed to load pipelines: configuration is not a JSON object")
        self._load_header(json_data)
        self._load_pipelines(json_data)

    def _load_header(self, json_data: dict) -> None:
        name = json_data.get(_PROCESS_NAME)
        if isinstance(name, str):
            self.process_name = name
            logger.info("Setting processName to: %s", name)
        else:
            logger.warning(
                "Property '%s' not found while loading the process definition!", _PROCESS_NAME
            )

    def _load_pipelines(self, json_data: dict) -> None:
        definitions = json_data.get(_PIPELINES)
        if not isinstance(definitions, list):
            raise PipelineError("Failed to load pipelines: No pipelines array found in json.")
        for definition in definitions:
            if not isinstance(definition, dict):
                raise PipelineError("Failed to load pipelines: pipeline entry is not a JSON object")
            file_name = self._pipeline_config_file(definition)
            pipeline = Pipeline.from_config_file(file_name)
            if pipeline is None:
                raise PipelineError(f"Failed to load pipeline from file: {file_name}")
            self._pipelines.append(pipeline)
            self._read_matching_patterns(pipeline, definition)

    def _pipeline_config_file(self, definition: dict) -> str:
        file_name = definition.get(_PIPELINE_CONFIG_FILE, UNDEFINED)
        if not isinstance(file_name, str):
            raise PipelineError(f"Failed to load pipelines: {_PIPELINE_CONFIG_FILE} is not a string")
        if self._config_dir:
            file_name = os.path.join(self._config_dir, file_name)
        logger.info("Loading pipeline from config file: %s", file_name)
        return file_name

    @staticmethod
    def _read_matching_patterns(pipeline: Pipeline, definition: dict) -> None:
        patterns = definition.get(_MATCHING_PATTERNS)
        if not isinstance(patterns, list):
            return
        logger.debug("Reading %s for pipeline", _MATCHING_PATTERNS)
        for pattern in patterns:
            if not isinstance(pattern, dict):
                raise PipelineError("Failed to load pipelines: matching pattern is not an object")
            for key, value in pattern.items():
                if not isinstance(value, str):
                    raise PipelineError(f"Matching pattern '{key}' must have a string value")
                logger.debug("%s = %s", key, value)
                pipeline.add_matching_pattern(key, value)

    def pipeline_count(self) -> int:
        return len(self._pipelines)

    def get_pipeline_by_name(self, pipeline_name: str) -> Pipeline | None:
        return next((p for p in self._pipelines if p.pipeline_name == pipeline_name), None)

    def execute(self, processing_data: PipelineProcessingData) -> PipelineProcessingData:
        """Offer the data to every pipeline in order; return the data."""
        with self._execution_lock:
            for pipeline in self._pipelines:
                pipeline.execute(processing_data)
        return processing_data

    def _processing_loop(self, fifo: PipelineFifo) -> None:
        logger.debug("processing loop started")
        sleep_time = _MAX_SLEEP
        while not self._stop.is_set():
            data = fifo.dequeue()
            if data is not None:
                sleep_time = _MIN_SLEEP
                try:
                    self.execute(data)
                except Exception:
                    logger.exception("processing of data from the fifo failed")
            elif sleep_time < _MAX_SLEEP:
                sleep_time *= 2
            self._stop.wait(sleep_time)
        logger.debug("processing loop ending")

    def start_processing_loop(self, fifo: PipelineFifo) -> None:
        """Process data from ``fifo`` in a background thread until stopped."""
        if self._thread is not None:
            raise RuntimeError("the processing loop is already running")
        logger.debug("starting the processing loop")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._processing_loop, args=(fifo,), daemon=True
        )
        self._thread.start()

    def is_processing_loop_running(self) -> bool:
        return self._thread is not None

    def stop_processing_loop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            logger.debug("stopping the processing loop")
            self._thread.join()
            self._thread = None

    def close(self) -> None:
        """Stop the loop and unload every pipeline."""
        logger.info("Unloading the PipelineProcessor")
        self.stop_processing_loop()
        for pipeline in self._pipelines:
            pipeline.close()

    def __enter__(self) -> PipelineProcessor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()