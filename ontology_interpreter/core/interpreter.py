#!/usr/bin/env python3
"""
Interpreter: build an Ontology from one RDF/OWL file.

The pipeline is fixed:
    read source -> resolve prefix -> create Ontology -> register types,
    value types, relation types -> derive hierarchy -> build instances
    (parallel) -> build relations -> seal
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .config import InterpreterSettings
from .domain import Ontology
from .exceptions import InterpreterStateError
from .instances import InstanceBuilder
from .prefix import PrefixResolver, UriSelector
from .registry import (
    derive_hierarchy,
    register_relation_types,
    register_types,
    register_value_types,
)
from .relations import build_relations
from .source import SourceModel

logger = logging.getLogger(__name__)


class BuildState(Enum):
    UNSTARTED = "unstarted"
    TYPES_REGISTERED = "types_registered"
    HIERARCHY_DERIVED = "hierarchy_derived"
    INSTANCES_BUILT = "instances_built"
    COMPLETE = "complete"
    FAILED = "failed"


_ORDER = [
    BuildState.UNSTARTED,
    BuildState.TYPES_REGISTERED,
    BuildState.HIERARCHY_DERIVED,
    BuildState.INSTANCES_BUILT,
    BuildState.COMPLETE,
]


class Interpreter:
    """Single-use builder of one Ontology.

    Args:
        filepath: RDF/OWL file to read
        select_uri: Asked at most once to pick a namespace when the file
            declares no default prefix
        settings: Worker and failure-policy settings
        max_workers: Overrides the worker count from ``settings``
    """

    def __init__(self, filepath: Union[str, Path], select_uri: UriSelector,
                 settings: Optional[InterpreterSettings] = None,
                 max_workers: Optional[int] = None):
        self.filepath = Path(filepath)
        self.select_uri = select_uri
        self.settings = settings or InterpreterSettings()
        self.max_workers = max_workers if max_workers is not None else self.settings.max_workers
        self._state = BuildState.UNSTARTED
        self._warnings: List[str] = []
        self.ontology: Optional[Ontology] = None

    @property
    def state(self) -> BuildState:
        return self._state

    @property
    def warnings(self) -> List[str]:
        """Human-readable warnings collected during the build, in order."""
        return list(self._warnings)

    def get_error_messages(self) -> List[str]:
        return self.warnings

    def _advance(self, state: BuildState):
        if _ORDER.index(state) != _ORDER.index(self._state) + 1:
            raise InterpreterStateError(f"Cannot move from {self._state.value} to {state.value}")
        self._state = state
        logger.debug(f"{self.filepath.name}: {state.value}")

    def build_ontology(self) -> Ontology:
        """Run the whole pipeline.

        Raises:
            OntologyFileNotFoundError: the file does not exist
            OntologyFileError: the file is not a readable ontology
            InstanceBuildError: an individual failed under fail_fast
            InterpreterStateError: this interpreter already ran
        """
        if self._state is not BuildState.UNSTARTED:
            raise InterpreterStateError(
                f"Interpreter for {self.filepath} already ran (state: {self._state.value})")

        try:
            return self._run()
        except Exception:
            self._state = BuildState.FAILED
            raise

    def _run(self) -> Ontology:
        logger.info(f"Interpreting ontology file: {self.filepath}")
        source = SourceModel.load(self.filepath)

        prefix = PrefixResolver(source, self.select_uri, self._warnings).resolve()
        ontology = Ontology(prefix, self.filepath.stem)
        self.ontology = ontology

        root, types = register_types(source, ontology, prefix)
        value_types = register_value_types(source, ontology)
        relation_types = register_relation_types(source, ontology)
        self._advance(BuildState.TYPES_REGISTERED)

        derive_hierarchy(source, types, root)
        self._advance(BuildState.HIERARCHY_DERIVED)

        builder = InstanceBuilder(
            source, types, value_types,
            max_workers=self.max_workers,
            reserved_cores=self.settings.reserved_cores,
            failure_policy=self.settings.failure_policy,
        )
        instances = builder.build(ontology, self._warnings)
        self._advance(BuildState.INSTANCES_BUILT)

        build_relations(source, ontology, instances, relation_types, prefix)
        ontology.seal()
        self._advance(BuildState.COMPLETE)

        logger.info(f"Interpreted {ontology.name}: {len(ontology.types)} types, "
                    f"{ontology.number_of_instances} instances, "
                    f"{ontology.number_of_relations} relations")
        return ontology


class InterpreterFactory(ABC):
    """Creates interpreters for one kind of ontology file."""

    @abstractmethod
    def get_interpreter(self, filepath: Union[str, Path], select_uri: UriSelector) -> Interpreter:
        ...


class RDFInterpreterFactory(InterpreterFactory):
    """Factory for RDF/OWL files, sharing one settings object."""

    def __init__(self, settings: Optional[InterpreterSettings] = None):
        self.settings = settings

    def get_interpreter(self, filepath: Union[str, Path], select_uri: UriSelector) -> Interpreter:
        return Interpreter(filepath, select_uri, settings=self.settings)
