#!/usr/bin/env python3
"""
Type, value-type and relation-type registration.

Each function reads from the SourceModel, creates the domain objects on the
Ontology, and returns a map from the source resource to the created object
so later stages can look them up without shared state.
"""

import logging
from typing import Dict, Tuple

from rdflib import URIRef

from .domain import InstanceType, Ontology, RelationType, ValueType
from .source import SourceModel, local_name

logger = logging.getLogger(__name__)

ROOT_TYPE_NAME = "owl:Thing"

TypeMap = Dict[URIRef, InstanceType]
ValueTypeMap = Dict[URIRef, ValueType]
RelationTypeMap = Dict[URIRef, RelationType]


def root_type_iri(prefix: str) -> str:
    return prefix + "#" + ROOT_TYPE_NAME


def register_types(source: SourceModel, ontology: Ontology,
                   prefix: str) -> Tuple[InstanceType, TypeMap]:
    """Create the universal root and one InstanceType per named class.

    Returns:
        (root type, class -> InstanceType map)
    """
    root = ontology.add_type(ROOT_TYPE_NAME, root_type_iri(prefix))
    types: TypeMap = {}
    for cls in source.named_classes():
        types[cls] = ontology.add_type(local_name(cls), str(cls))
    logger.info(f"Registered {len(types)} instance types (+ {ROOT_TYPE_NAME})")
    return root, types


def register_value_types(source: SourceModel, ontology: Ontology) -> ValueTypeMap:
    value_types: ValueTypeMap = {}
    for prop in source.datatype_properties():
        value_types[prop] = ontology.add_value_type(local_name(prop), str(prop))
    logger.info(f"Registered {len(value_types)} value types")
    return value_types


def register_relation_types(source: SourceModel, ontology: Ontology) -> RelationTypeMap:
    relation_types: RelationTypeMap = {}
    for prop in source.object_properties():
        relation_types[prop] = ontology.add_relation_type(local_name(prop), str(prop))
    logger.info(f"Registered {len(relation_types)} relation types")
    return relation_types


def derive_hierarchy(source: SourceModel, types: TypeMap, root: InstanceType) -> int:
    """Link every type to its direct registered superclasses.

    Types left without a supertype are attached under ``root``.

    Returns:
        Number of types attached directly to the root
    """
    for cls, instance_type in types.items():
        for parent in source.direct_superclasses(cls):
            supertype = types.get(parent)
            if supertype is not None:
                instance_type.add_supertype(supertype)

    orphans = 0
    for instance_type in types.values():
        if instance_type.is_root:
            instance_type.add_supertype(root)
            orphans += 1

    # Subclass cycles leave types with supertypes that never reach the root
    for cls in sorted(types):
        if not _reaches(types[cls], root):
            types[cls].add_supertype(root)
            orphans += 1
            logger.debug(f"Attached cyclic class {cls} under {ROOT_TYPE_NAME}")

    logger.info(f"Derived type hierarchy: {orphans} top-level types under {ROOT_TYPE_NAME}")
    return orphans


def _reaches(start: InstanceType, target: InstanceType) -> bool:
    pending = [start]
    seen = set()
    while pending:
        current = pending.pop()
        if current is target:
            return True
        if id(current) in seen:
            continue
        seen.add(id(current))
        pending.extend(current.supertypes)
    return False
