#!/usr/bin/env python3
"""
Domain model built by the interpreter.

An Ontology owns every InstanceType, ValueType, RelationType, Instance and
Relation created during one build. Entities hash by IRI and compare
structurally, so two builds of the same file yield equal ontologies.
"""

from typing import Dict, FrozenSet, Iterable, NamedTuple, Optional, Set


class ValueType:
    """Domain representation of a datatype property."""

    __slots__ = ("name", "iri")

    def __init__(self, name: str, iri: str):
        self.name = name
        self.iri = iri

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ValueType):
            return NotImplemented
        return self.name == other.name and self.iri == other.iri

    def __hash__(self):
        return hash(self.iri)

    def __lt__(self, other: "ValueType"):
        return self.name < other.name

    def __repr__(self):
        return f"ValueType({self.name!r}, {self.iri!r})"


class PropertyValue(NamedTuple):
    """A literal value of one datatype property on an instance."""
    value_type: ValueType
    value: str


def _iris(entities) -> FrozenSet[str]:
    return frozenset(e.iri for e in entities)


class InstanceType:
    """Domain representation of an ontology class."""

    def __init__(self, name: str, iri: str):
        self.name = name
        self.iri = iri
        self._supertypes: Set["InstanceType"] = set()
        self._subtypes: Set["InstanceType"] = set()
        self._instances: Set["Instance"] = set()
        self._value_types: Set[ValueType] = set()

    @property
    def supertypes(self) -> FrozenSet["InstanceType"]:
        return frozenset(self._supertypes)

    @property
    def subtypes(self) -> FrozenSet["InstanceType"]:
        return frozenset(self._subtypes)

    @property
    def instances(self) -> FrozenSet["Instance"]:
        """Instances of this type or of any of its subtypes."""
        return frozenset(self._instances)

    @property
    def value_types(self) -> FrozenSet[ValueType]:
        """Value types used by the instances of this type."""
        return frozenset(self._value_types)

    @property
    def is_root(self) -> bool:
        return not self._supertypes

    def add_supertype(self, supertype: "InstanceType"):
        """Link both directions of a subclass edge."""
        self._supertypes.add(supertype)
        supertype._subtypes.add(self)

    def _add_instance(self, instance: "Instance"):
        # Propagate membership and value types up to the root.
        pending = [self]
        seen = set()
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            current._instances.add(instance)
            current._value_types.update(v.value_type for v in instance.values)
            pending.extend(current._supertypes)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, InstanceType):
            return NotImplemented
        return (self.iri == other.iri
                and self.name == other.name
                and _iris(self._supertypes) == _iris(other._supertypes)
                and self._value_types == other._value_types)

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return f"InstanceType({self.name!r}, {self.iri!r})"


class RelationType:
    """Domain representation of an object property."""

    def __init__(self, name: str, iri: str):
        self.name = name
        self.iri = iri
        self._relations: Set["Relation"] = set()

    @property
    def relations(self) -> FrozenSet["Relation"]:
        return frozenset(self._relations)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, RelationType):
            return NotImplemented
        return self.name == other.name and self.iri == other.iri

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return f"RelationType({self.name!r}, {self.iri!r})"


class Instance:
    """Domain representation of an individual."""

    def __init__(self, name: str, iri: str,
                 types: Iterable[InstanceType],
                 values: Optional[Iterable[PropertyValue]] = None):
        self.name = name
        self.iri = iri
        self._types = frozenset(types)
        self._values = frozenset(values or ())
        self._outgoing: Set["Relation"] = set()
        self._incoming: Set["Relation"] = set()

    @property
    def types(self) -> FrozenSet[InstanceType]:
        return self._types

    @property
    def values(self) -> FrozenSet[PropertyValue]:
        return self._values

    @property
    def outgoing(self) -> FrozenSet["Relation"]:
        return frozenset(self._outgoing)

    @property
    def incoming(self) -> FrozenSet["Relation"]:
        return frozenset(self._incoming)

    @property
    def relations(self) -> FrozenSet["Relation"]:
        return frozenset(self._outgoing | self._incoming)

    def values_of(self, value_type: ValueType) -> Set[str]:
        """Literal values this instance holds for one value type."""
        return {v.value for v in self._values if v.value_type == value_type}

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Instance):
            return NotImplemented
        return (self.name == other.name
                and self.iri == other.iri
                and self._types == other._types
                and self._values == other._values)

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return f"Instance({self.name!r}, {self.iri!r})"


class Relation:
    """A typed, directed edge between two instances."""

    __slots__ = ("iri", "relation_type", "origin", "destination")

    def __init__(self, iri: str, relation_type: RelationType,
                 origin: Instance, destination: Instance):
        self.iri = iri
        self.relation_type = relation_type
        self.origin = origin
        self.destination = destination

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Relation):
            return NotImplemented
        return (self.iri == other.iri
                and self.relation_type == other.relation_type
                and self.origin == other.origin
                and self.destination == other.destination)

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return f"Relation({self.iri!r})"


class Ontology:
    """Root aggregate of one interpreted ontology file.

    The ``add_*`` methods are only callable while the ontology is being
    built; :meth:`seal` freezes it once the pipeline completes.
    """

    def __init__(self, iri: str, name: str):
        self.iri = iri
        self.name = name
        self._types: Dict[str, InstanceType] = {}
        self._value_types: Dict[str, ValueType] = {}
        self._relation_types: Dict[str, RelationType] = {}
        self._instances: Dict[str, Instance] = {}
        self._relations: Dict[str, Relation] = {}
        self._sealed = False

    @property
    def types(self) -> FrozenSet[InstanceType]:
        return frozenset(self._types.values())

    @property
    def value_types(self) -> FrozenSet[ValueType]:
        return frozenset(self._value_types.values())

    @property
    def relation_types(self) -> FrozenSet[RelationType]:
        return frozenset(self._relation_types.values())

    @property
    def instances(self) -> FrozenSet[Instance]:
        return frozenset(self._instances.values())

    @property
    def relations(self) -> FrozenSet[Relation]:
        return frozenset(self._relations.values())

    @property
    def number_of_instances(self) -> int:
        return len(self._instances)

    @property
    def number_of_relations(self) -> int:
        return len(self._relations)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def root(self) -> Optional[InstanceType]:
        """The single type without supertypes, once the hierarchy is derived."""
        roots = [t for t in self._types.values() if t.is_root]
        return roots[0] if len(roots) == 1 else None

    def get_type(self, iri: str) -> Optional[InstanceType]:
        return self._types.get(iri)

    def get_instance(self, iri: str) -> Optional[Instance]:
        return self._instances.get(iri)

    def get_relation(self, iri: str) -> Optional[Relation]:
        return self._relations.get(iri)

    def _check_open(self):
        if self._sealed:
            raise RuntimeError(f"Ontology {self.name!r} is sealed")

    def add_type(self, name: str, iri: str) -> InstanceType:
        self._check_open()
        instance_type = InstanceType(name, iri)
        self._types[iri] = instance_type
        return instance_type

    def add_value_type(self, name: str, iri: str) -> ValueType:
        self._check_open()
        value_type = ValueType(name, iri)
        self._value_types[iri] = value_type
        return value_type

    def add_relation_type(self, name: str, iri: str) -> RelationType:
        self._check_open()
        relation_type = RelationType(name, iri)
        self._relation_types[iri] = relation_type
        return relation_type

    def add_instance(self, instance: Instance) -> Instance:
        """Register a built instance and its membership on every type."""
        self._check_open()
        if instance.iri in self._instances:
            raise ValueError(f"Duplicate instance IRI: {instance.iri}")
        for instance_type in instance.types:
            instance_type._add_instance(instance)
        self._instances[instance.iri] = instance
        return instance

    def add_relation(self, iri: str, relation_type: RelationType,
                     origin: Instance, destination: Instance) -> Relation:
        self._check_open()
        if iri in self._relations:
            raise ValueError(f"Duplicate relation IRI: {iri}")
        relation = Relation(iri, relation_type, origin, destination)
        self._relations[iri] = relation
        relation_type._relations.add(relation)
        origin._outgoing.add(relation)
        destination._incoming.add(relation)
        return relation

    def seal(self):
        self._sealed = True

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Ontology):
            return NotImplemented
        return (self.iri == other.iri
                and self.name == other.name
                and self.instances == other.instances
                and self.types == other.types
                and self.value_types == other.value_types
                and self.relation_types == other.relation_types
                and self.relations == other.relations)

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return (f"Ontology({self.name!r}, types={len(self._types)}, "
                f"instances={len(self._instances)}, relations={len(self._relations)})")
