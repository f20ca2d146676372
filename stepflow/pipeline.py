"""Pipelines: named sequences of worker steps loaded from JSON configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from stepflow import names
from stepflow.initdata import PipelineStepInitData
from stepflow.payload import Matchable
from stepflow.processingdata import PipelineProcessingData
from stepflow.workers import WorkerModule, create_worker

logger = logging.getLogger(__name__)

UNDEFINED = "undefined"

_PIPELINE_NAME = "pipelineName"
_PIPELINE_STEPS = "pipelineSteps"
_STEP_NAME = "stepName"
_LIBRARY_NAME = "libraryName"
_NAMED_ARGUMENTS = "namedArguments"


class PipelineError(Exception):
    """Raised when a pipeline or one of its steps cannot be loaded."""


class PipelineStep:
    """One step of a pipeline, backed by a worker module."""

    def __init__(self, step_name: str = UNDEFINED, library_name: str = UNDEFINED) -> None:
        self.step_name = step_name
        self.library_name = library_name
        self.init_data = PipelineStepInitData()
        self._worker: WorkerModule | None = None

    def load_named_arguments(self, json_data: Mapping) -> None:
        """Read the ``namedArguments`` object of a step definition, if present."""
        arguments = json_data.get(_NAMED_ARGUMENTS)
        if not isinstance(arguments, dict):
            return
        for key, value in arguments.items():
            if not isinstance(value, str):
                raise PipelineError(
                    f"Named argument '{key}' of step '{self.step_name}' must be a string"
                )
            self.init_data.add_named_argument(key, value)

    def load_lib(self) -> None:
        """Create the worker; on failure the step stays disabled."""
        logger.info("Loading worker module into pipeline: %s", self.library_name)
        try:
            self._worker = create_worker(self.library_name)
        except Exception as exc:
            logger.error(
                "loading worker module %s failed. Exception was raised: %s",
                self.library_name,
                exc,
            )
            logger.error(
                "library module %s must stay disabled due to previous errors "
                "during loading of the module!",
                self.library_name,
            )
        self.run_init()

    def is_init_complete(self) -> bool:
        return (
            self.step_name != UNDEFINED
            and self.library_name != UNDEFINED
            and self._worker is not None
        )

    def run_init(self) -> None:
        if self.is_init_complete():
            self._worker.init(self.init_data)
        else:
            logger.warning(
                "init of module '%s' was called without being fully initialized "
                "before and will not be executed",
                self.library_name,
            )

    def run_processing(self, processing_data: PipelineProcessingData) -> None:
        if self.is_init_complete():
            self._worker.process(processing_data)
        else:
            logger.warning(
                "process of module '%s' was called without being fully initialized "
                "before and will not be executed",
                self.library_name,
            )

    def run_finish(self) -> None:
        if self.is_init_complete():
            logger.info("Invoking the finish function for: %s", self.library_name)
            self._worker.finish()
        else:
            logger.warning(
                "finish of module '%s' was called without being fully initialized "
                "before and will not be executed",
                self.library_name,
            )

    def close(self) -> None:
        """Finish and release the worker; further calls do nothing."""
        if self._worker is None:
            return
        self.run_finish()
        logger.info("Unloading worker module from pipeline: %s", self.library_name)
        self._worker = None


class Pipeline(Matchable):
    """A named sequence of steps, run only on data matching its patterns."""

    def __init__(self, pipeline_name: str = "") -> None:
        super().__init__()
        self.pipeline_name = pipeline_name
        self._steps: list[PipelineStep] = []

    @classmethod
    def from_config_file(cls, config_file_path: str) -> Pipeline | None:
        """Load a pipeline from a JSON file; None (with the error logged) on failure."""
        pipeline = cls()
        try:
            pipeline.load_config(config_file_path)
        except (OSError, ValueError, PipelineError) as exc:
            logger.error(
                "Failed loading pipeline configuration from %s : %s", config_file_path, exc
            )
            pipeline.close()
            return None
        return pipeline

    def load_config(self, config_file_path: str) -> None:
        """Read name and steps from a JSON file; raises on any failure."""
        with open(config_file_path, encoding="utf-8") as config_file:
            json_data = json.load(config_file)
        if not isinstance(json_data, dict):
            raise PipelineError("Failed to load pipeline: configuration is not a JSON object")
        self._load_meta_data(json_data)
        self._load_steps(json_data)

    def _load_meta_data(self, json_data: dict) -> None:
        if _PIPELINE_NAME not in json_data:
            raise PipelineError("Failed to load pipeline metadata. pipelineName not set")
        name = json_data[_PIPELINE_NAME]
        if not isinstance(name, str):
            raise PipelineError("Failed to load pipeline metadata. pipelineName is not a string")
        self.pipeline_name = name

    def _load_steps(self, json_data: dict) -> None:
        steps = json_data.get(_PIPELINE_STEPS)
        if not isinstance(steps, list):
            raise PipelineError(
                "Failed to load pipeline step: No pipeline steps array found in json."
            )
        for definition in steps:
            if not isinstance(definition, dict):
                raise PipelineError(
                    "Failed to load pipeline step: step definition is not a JSON object"
                )
            step = PipelineStep(
                definition.get(_STEP_NAME, UNDEFINED),
                definition.get(_LIBRARY_NAME, UNDEFINED),
            )
            step.load_named_arguments(definition)
            step.load_lib()
            if not step.is_init_complete():
                step.close()
                raise PipelineError(
                    "Failed to load pipeline step: Definition of pipeline steps "
                    "in json might be incomplete."
                )
            self._steps.append(step)

    def step_count(self) -> int:
        return len(self._steps)

    def get_step_by_name(self, step_name: str) -> PipelineStep | None:
        return next((s for s in self._steps if s.step_name == step_name), None)

    def execute(
        self, processing_data: PipelineProcessingData | None = None
    ) -> PipelineProcessingData:
        """Run every step on the data if the patterns match; return the data."""
        if processing_data is None:
            processing_data = PipelineProcessingData()
        neither_has_patterns = (
            not self.has_matching_patterns() and not processing_data.has_matching_patterns()
        )
        if neither_has_patterns or self.matches_all_of_mine_to_any_of_the_other(processing_data):
            logger.info("Start processing payload by pipeline '%s'", self.pipeline_name)
            processing_data.increase_processing_counter()
            processing_data.set_last_processed_pipeline_name(self.pipeline_name)
            for number, step in enumerate(self._steps, start=1):
                self._add_footprint(step, processing_data, number)
                step.run_processing(processing_data)
        else:
            logger.info(
                "Pipeline '%s' rejects processing of payload because of non matching patterns.",
                self.pipeline_name,
            )
        return processing_data

    def _add_footprint(
        self, step: PipelineStep, processing_data: PipelineProcessingData, number: int
    ) -> None:
        key = ".".join(
            (
                names.PATTERN_PROCESSED_BY_PREFIX + processing_data.formatted_processing_counter(),
                self.pipeline_name.replace(" ", "_"),
                f"{number:05d}",
                step.step_name.replace(" ", "_"),
            )
        )
        processing_data.add_matching_pattern(key, "true")

    def close(self) -> None:
        """Finish and unload every step."""
        for step in self._steps:
            step.close()

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()