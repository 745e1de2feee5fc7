#!/usr/bin/env python3
"""
Pydantic models for API request/response validation
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from .domain import Ontology


class InterpretRequest(BaseModel):
    """Model for an interpretation request."""
    file_path: str = Field(..., description="Path of the RDF/OWL file, absolute or relative to the data root")
    preferred_uri: Optional[str] = Field(default=None, description="Namespace to use when the file declares no default prefix")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Worker count override")


class OntologySummary(BaseModel):
    """Model for an interpreted ontology."""
    iri: str
    name: str
    instance_types: int
    value_types: int
    relation_types: int
    instances: int
    relations: int
    hierarchy: Dict[str, List[str]] = Field(default_factory=dict, description="Type IRI -> supertype IRIs")
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_ontology(cls, ontology: Ontology, warnings: Optional[List[str]] = None) -> "OntologySummary":
        hierarchy = {
            t.iri: sorted(s.iri for s in t.supertypes)
            for t in sorted(ontology.types, key=lambda t: t.iri)
        }
        return cls(
            iri=ontology.iri,
            name=ontology.name,
            instance_types=len(ontology.types),
            value_types=len(ontology.value_types),
            relation_types=len(ontology.relation_types),
            instances=ontology.number_of_instances,
            relations=ontology.number_of_relations,
            hierarchy=hierarchy,
            warnings=list(warnings or []),
        )
