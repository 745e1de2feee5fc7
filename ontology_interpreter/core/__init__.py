"""
Core Module - Ontology Interpretation
"""
from .config import get_config
from .domain import Instance, InstanceType, Ontology, Relation, RelationType, ValueType
from .interpreter import BuildState, Interpreter, RDFInterpreterFactory

__all__ = [
    'get_config', 'Interpreter', 'BuildState', 'RDFInterpreterFactory',
    'Ontology', 'InstanceType', 'ValueType', 'RelationType', 'Instance', 'Relation',
]
