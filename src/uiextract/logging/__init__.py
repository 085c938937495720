"""Logging module for uiextract."""

from .logger import DetectionLogger, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "DetectionLogger",
]
