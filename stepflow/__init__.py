"""Configurable data-processing pipelines built from pluggable worker modules."""

__version__ = "1.0.0"

__all__ = [
    "names",
    "payload",
    "initdata",
    "processingdata",
    "workers",
    "fifo",
    "pipeline",
    "processor",
    "car",
]