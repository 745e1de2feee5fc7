"""
Ontology Interpreter: build typed instance graphs from RDF/OWL files.
"""
from .core import Interpreter, Ontology

__all__ = ['Interpreter', 'Ontology']
