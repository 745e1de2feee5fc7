#!/usr/bin/env python3
"""
RelationBuilder: turn object-property assertions into Relations.
"""

import logging
from typing import Dict

from rdflib import URIRef

from .domain import Instance, Ontology
from .registry import RelationTypeMap
from .source import SourceModel

logger = logging.getLogger(__name__)


def relation_iri(property_iri: str, origin_iri: str, destination_iri: str, prefix: str) -> str:
    """Compact relation identity: ``property:origin->destination`` without the prefix."""
    path = origin_iri + "->" + destination_iri
    if prefix:
        path = path.replace(prefix, "")
    return property_iri + ":" + path


def build_relations(source: SourceModel, ontology: Ontology,
                    instances: Dict[URIRef, Instance],
                    relation_types: RelationTypeMap, prefix: str) -> int:
    """Create one Relation per object-property value between built instances.

    Must run after every instance exists. Values that do not name a built
    instance are skipped.

    Returns:
        Number of relations created
    """
    created = 0
    for individual in sorted(instances):
        origin = instances[individual]
        for prop in sorted(relation_types):
            relation_type = relation_types[prop]
            for target in source.resource_values(individual, prop):
                destination = instances.get(target)
                if destination is None:
                    logger.debug(f"Skipping {prop} from {individual}: "
                                 f"{target} is not a known instance")
                    continue
                iri = relation_iri(str(prop), origin.iri, destination.iri, prefix)
                ontology.add_relation(iri, relation_type, origin, destination)
                created += 1

    logger.info(f"Built {created} relations")
    return created
