#!/usr/bin/env python3
"""
InstanceBuilder: materialize one Instance per individual, in parallel.

Individuals are split into contiguous chunks and handed to a thread pool
created for this build only. Every worker fills its own result buffer; the
coordinator merges the buffers in chunk order after all workers finished
and is the only writer of the Ontology.
"""

import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple, TypeVar

from rdflib import URIRef

from .domain import Instance, InstanceType, Ontology, PropertyValue
from .exceptions import InstanceBuildError
from .registry import TypeMap, ValueTypeMap
from .source import SourceModel, local_name

logger = logging.getLogger(__name__)

T = TypeVar('T')

FAIL_FAST = "fail_fast"
BEST_EFFORT = "best_effort"
FAILURE_POLICIES = (FAIL_FAST, BEST_EFFORT)

DEFAULT_RESERVED_CORES = 6


def available_parallelism() -> int:
    """CPUs usable by this process."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


def worker_count(reserved_cores: int = DEFAULT_RESERVED_CORES,
                 available: Optional[int] = None) -> int:
    """max(1, available - reserved): leave headroom on the host."""
    if available is None:
        available = available_parallelism()
    return max(1, available - reserved_cores)


def partition(items: Sequence[T], parts: int) -> List[List[T]]:
    """Split items into at most ``parts`` contiguous chunks of ceil(n/parts)."""
    if not items:
        return []
    size = math.ceil(len(items) / max(1, parts))
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


@dataclass
class ChunkResult:
    """Instances built by one worker."""
    chunk_idx: int
    instances: List[Tuple[URIRef, Instance]] = field(default_factory=list)
    errors: List[Tuple[URIRef, Exception]] = field(default_factory=list)
    elapsed_ms: float = 0.0


def qualifying_individuals(source: SourceModel, types: TypeMap) -> List[URIRef]:
    """Individuals that are a member of at least one registered class, by IRI."""
    found: Set[URIRef] = set()
    for cls in types:
        found |= source.individuals_of(cls)
    return sorted(found)


def collect_types(source: SourceModel, individual: URIRef,
                  types: TypeMap) -> Set[InstanceType]:
    """Registered classes the individual belongs to, ancestors included."""
    memberships: Set[InstanceType] = set()
    for cls in source.classes_of(individual):
        if cls not in types:
            continue
        memberships.add(types[cls])
        for ancestor in source.ancestors(cls):
            if ancestor in types:
                memberships.add(types[ancestor])
    return memberships


def collect_values(source: SourceModel, individual: URIRef,
                   value_types: ValueTypeMap) -> Set[PropertyValue]:
    values: Set[PropertyValue] = set()
    for prop, value_type in value_types.items():
        for literal in source.literal_values(individual, prop):
            values.add(PropertyValue(value_type, literal))
    return values


def build_instance(source: SourceModel, individual: URIRef,
                   types: TypeMap, value_types: ValueTypeMap) -> Instance:
    """Construct (but do not register) the Instance for one individual."""
    return Instance(
        local_name(individual),
        str(individual),
        collect_types(source, individual, types),
        collect_values(source, individual, value_types),
    )


class InstanceBuilder:
    """Build all instances of an ontology with a bounded worker pool.

    Args:
        source: Parsed ontology model
        types: Class -> InstanceType map from the type registry
        value_types: Datatype property -> ValueType map
        max_workers: Explicit worker count; derived from the host if None
        reserved_cores: CPUs left free when deriving the worker count
        failure_policy: ``fail_fast`` raises on the first failed individual,
            ``best_effort`` skips it and records a warning
    """

    def __init__(self, source: SourceModel, types: TypeMap, value_types: ValueTypeMap,
                 max_workers: Optional[int] = None,
                 reserved_cores: int = DEFAULT_RESERVED_CORES,
                 failure_policy: str = FAIL_FAST):
        if failure_policy not in FAILURE_POLICIES:
            raise ValueError(f"Unknown failure policy: {failure_policy}")
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.source = source
        self.types = types
        self.value_types = value_types
        self.max_workers = max_workers or worker_count(reserved_cores)
        self.failure_policy = failure_policy
        self.workers_spawned = 0

    def _process_chunk(self, chunk_idx: int, chunk: List[URIRef]) -> ChunkResult:
        start = time.time()
        result = ChunkResult(chunk_idx=chunk_idx)
        for individual in chunk:
            try:
                instance = build_instance(self.source, individual, self.types, self.value_types)
            except Exception as e:
                result.errors.append((individual, e))
                if self.failure_policy == FAIL_FAST:
                    break
                continue
            result.instances.append((individual, instance))
        result.elapsed_ms = (time.time() - start) * 1000
        logger.debug(f"Chunk {chunk_idx}: {len(result.instances)} instances "
                     f"in {result.elapsed_ms:.1f} ms")
        return result

    def build(self, ontology: Ontology,
              warnings: Optional[List[str]] = None) -> Dict[URIRef, Instance]:
        """Build, then register, every qualifying individual.

        Returns:
            individual -> Instance map for the relation stage

        Raises:
            InstanceBuildError: a worker failed under the fail_fast policy
        """
        individuals = qualifying_individuals(self.source, self.types)
        if not individuals:
            logger.info("No individuals to build")
            return {}

        # Fill the ancestor cache up front so workers only read shared state
        for cls in self.types:
            self.source.ancestors(cls)

        chunks = partition(individuals, self.max_workers)
        self.workers_spawned = len(chunks)
        logger.info(f"Building {len(individuals)} instances with {len(chunks)} workers")

        with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
            futures = [
                executor.submit(self._process_chunk, i, chunk)
                for i, chunk in enumerate(chunks)
            ]
            # Leaving the block waits for every worker
        results = [future.result() for future in futures]

        instances: Dict[URIRef, Instance] = {}
        for result in results:
            for individual, error in result.errors:
                logger.error(f"Failed to build instance {individual}: {error}")
                if self.failure_policy == FAIL_FAST:
                    raise InstanceBuildError(str(individual), error) from error
                if warnings is not None:
                    warnings.append(f"Skipped individual {individual}: {error}")
            for individual, instance in result.instances:
                instances[individual] = ontology.add_instance(instance)

        logger.info(f"Built {len(instances)} instances")
        return instances
