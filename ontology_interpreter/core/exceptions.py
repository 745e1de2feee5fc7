#!/usr/bin/env python3
"""
Exceptions raised while interpreting an ontology file.
"""

from typing import Optional


class InterpreterError(Exception):
    """Base class for all interpreter errors."""


class OntologyFileNotFoundError(InterpreterError, FileNotFoundError):
    """The ontology file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Ontology file not found: {path}")
        self.path = path


class OntologyFileError(InterpreterError):
    """The file exists but is not an interpretable ontology document."""

    def __init__(self, path: str, message: str = "this ontology file is not interpretable."):
        super().__init__(f"{path}: {message}")
        self.path = path


class InstanceBuildError(InterpreterError):
    """Building an instance failed inside a worker."""

    def __init__(self, individual: str, reason: Optional[BaseException] = None):
        detail = f": {reason}" if reason is not None else ""
        super().__init__(f"Failed to build instance for {individual}{detail}")
        self.individual = individual


class InterpreterStateError(InterpreterError):
    """An interpreter was asked to run a stage out of order or a second time."""


class ConfigError(InterpreterError, ValueError):
    """Invalid interpreter configuration."""
