#!/usr/bin/env python3
"""
SourceModel: read-only view of an RDF/OWL document loaded with rdflib.

The interpreter never touches the rdflib graph directly; it asks this model
for named classes, properties, individuals and namespace metadata.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from rdflib import Graph, Literal, OWL, RDF, RDFS, URIRef
from rdflib.util import guess_format

from .exceptions import OntologyFileError, OntologyFileNotFoundError

logger = logging.getLogger(__name__)

# Classes that never become an InstanceType of their own
_BUILTIN_CLASSES = {OWL.Thing, OWL.Nothing, RDFS.Resource}

_OBJECT_PROPERTY_KINDS = (
    OWL.ObjectProperty,
    OWL.TransitiveProperty,
    OWL.SymmetricProperty,
    OWL.AsymmetricProperty,
    OWL.ReflexiveProperty,
    OWL.IrreflexiveProperty,
    OWL.InverseFunctionalProperty,
)


def local_name(iri: Union[str, URIRef]) -> str:
    """Return the part of an IRI after its last '#', '/' or ':'."""
    text = str(iri)
    for separator in ("#", "/", ":"):
        head, sep, tail = text.rpartition(separator)
        if sep and tail:
            return tail
    return text


class DeclaringGraph(Graph):
    """Graph that keeps every namespace declaration its parser reports.

    rdflib's namespace manager keeps one prefix per namespace URI, so a file
    declaring ``xmlns:zoo`` before ``xmlns`` for the same URI would lose its
    default prefix. ``declarations`` holds (prefix, uri) pairs in document
    order, the empty string standing for the default prefix.
    """

    def __init__(self, *args, **kwargs):
        self.declarations: List[Tuple[str, str]] = []
        kwargs.setdefault("bind_namespaces", "none")
        super().__init__(*args, **kwargs)

    def bind(self, prefix, namespace, override=True, replace=False):
        if namespace is not None and str(namespace):
            self.declarations.append((prefix or "", str(namespace)))
        super().bind(prefix, namespace, override=override, replace=replace)


class SourceModel:
    """Queryable class/property/individual model of one ontology file."""

    def __init__(self, graph: Graph, path: Optional[Path] = None):
        self.graph = graph
        self.path = path
        self._class_cache: Optional[List[URIRef]] = None
        self._ancestor_cache: Dict[URIRef, Set[URIRef]] = {}

    @property
    def declarations(self) -> List[Tuple[str, str]]:
        """(prefix, uri) namespace declarations of the source."""
        declared = getattr(self.graph, "declarations", None)
        if declared is not None:
            return list(declared)
        return [(str(prefix), str(namespace)) for prefix, namespace in self.graph.namespaces()]

    @classmethod
    def load(cls, path: Union[str, Path], rdf_format: Optional[str] = None) -> "SourceModel":
        """Parse a file into a SourceModel.

        Raises:
            OntologyFileNotFoundError: the path does not name an existing file
            OntologyFileError: the content cannot be parsed as RDF or holds no statements
        """
        path = Path(path)
        if not path.is_file():
            raise OntologyFileNotFoundError(str(path))

        rdf_format = rdf_format or guess_format(str(path)) or "xml"
        # Only namespaces declared by the file itself are wanted
        graph = DeclaringGraph()
        try:
            graph.parse(str(path), format=rdf_format)
        except Exception as e:
            logger.error(f"Failed to parse {path}: {e}")
            raise OntologyFileError(str(path)) from e

        # Well-formed XML in another vocabulary parses to an empty graph
        if len(graph) == 0:
            logger.error(f"No RDF statements in {path}")
            raise OntologyFileError(str(path), "the file contains no RDF statements.")

        logger.debug(f"Parsed {path} ({rdf_format}): {len(graph)} triples")
        return cls(graph, path)

    # Namespace metadata

    def default_namespace(self) -> Optional[str]:
        """URI bound to the empty prefix, if the file declares one."""
        for prefix, namespace in self.declarations:
            if prefix == "" and namespace:
                return namespace
        return None

    def namespace_uris(self) -> Set[str]:
        """All distinct namespace URIs declared in the file."""
        return {namespace for _, namespace in self.declarations if namespace}

    # Classes

    def named_classes(self) -> List[URIRef]:
        if self._class_cache is None:
            found = set()
            for kind in (OWL.Class, RDFS.Class):
                for subject in self.graph.subjects(RDF.type, kind):
                    if isinstance(subject, URIRef) and subject not in _BUILTIN_CLASSES:
                        found.add(subject)
            self._class_cache = sorted(found)
        return self._class_cache

    def _asserted_superclasses(self, cls: URIRef) -> Set[URIRef]:
        return {
            parent for parent in self.graph.objects(cls, RDFS.subClassOf)
            if isinstance(parent, URIRef) and parent != cls
        }

    def ancestors(self, cls: URIRef) -> Set[URIRef]:
        """Transitive named superclasses of a class, excluding itself."""
        cached = self._ancestor_cache.get(cls)
        if cached is not None:
            return cached
        result: Set[URIRef] = set()
        pending = list(self._asserted_superclasses(cls))
        while pending:
            parent = pending.pop()
            if parent in result or parent == cls:
                continue
            result.add(parent)
            pending.extend(self._asserted_superclasses(parent))
        self._ancestor_cache[cls] = result
        return result

    def direct_superclasses(self, cls: URIRef) -> Set[URIRef]:
        """Asserted superclasses that are not implied by another asserted one."""
        asserted = self._asserted_superclasses(cls)
        implied = set()
        for parent in asserted:
            implied |= self.ancestors(parent) - {parent}
        return asserted - implied

    def direct_subclasses(self, cls: URIRef) -> Set[URIRef]:
        return {
            child for child in self.graph.subjects(RDFS.subClassOf, cls)
            if isinstance(child, URIRef) and cls in self.direct_superclasses(child)
        }

    def individuals_of(self, cls: URIRef) -> Set[URIRef]:
        """Individuals asserted to be members of a class."""
        return {
            subject for subject in self.graph.subjects(RDF.type, cls)
            if isinstance(subject, URIRef)
        }

    def classes_of(self, individual: URIRef) -> Set[URIRef]:
        """Classes an individual is asserted to be a member of."""
        return {
            cls for cls in self.graph.objects(individual, RDF.type)
            if isinstance(cls, URIRef)
        }

    # Properties

    def datatype_properties(self) -> List[URIRef]:
        return sorted(
            subject for subject in set(self.graph.subjects(RDF.type, OWL.DatatypeProperty))
            if isinstance(subject, URIRef)
        )

    def object_properties(self) -> List[URIRef]:
        found = set()
        for kind in _OBJECT_PROPERTY_KINDS:
            for subject in self.graph.subjects(RDF.type, kind):
                if isinstance(subject, URIRef):
                    found.add(subject)
        return sorted(found)

    def literal_values(self, individual: URIRef, prop: URIRef) -> List[str]:
        """Lexical forms of the literal values of a datatype property."""
        return [str(value) for value in self.graph.objects(individual, prop)
                if isinstance(value, Literal)]

    def resource_values(self, individual: URIRef, prop: URIRef) -> List[URIRef]:
        """Named resources an individual points to through an object property."""
        return sorted(value for value in self.graph.objects(individual, prop)
                      if isinstance(value, URIRef))
