"""
Shared fixtures: small RDF/XML ontologies written to a temporary directory.
"""
from pathlib import Path
from typing import List

import pytest

from ontology_interpreter.core.config import set_config

ZOO = "http://example.org/zoo#"

# Property elements are written as "PFX:name"; write_ontology maps PFX to the
# default namespace or to an explicit zoo: prefix.
HEADER = """<?xml version="1.0"?>
<rdf:RDF NAMESPACE
     xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
     xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
     xmlns:owl="http://www.w3.org/2002/07/owl#"
     xmlns:xsd="http://www.w3.org/2001/XMLSchema#">
  <owl:Ontology rdf:about="http://example.org/zoo"/>
"""

SCHEMA = """
  <owl:Class rdf:about="http://example.org/zoo#A"/>
  <owl:Class rdf:about="http://example.org/zoo#B">
    <rdfs:subClassOf rdf:resource="http://example.org/zoo#A"/>
  </owl:Class>
  <owl:DatatypeProperty rdf:about="http://example.org/zoo#age"/>
  <owl:ObjectProperty rdf:about="http://example.org/zoo#livesIn"/>
"""

INDIVIDUALS = """
  <owl:NamedIndividual rdf:about="http://example.org/zoo#i1">
    <rdf:type rdf:resource="http://example.org/zoo#B"/>
    <PFX:age rdf:datatype="http://www.w3.org/2001/XMLSchema#integer">5</PFX:age>
    <PFX:livesIn rdf:resource="http://example.org/zoo#i2"/>
  </owl:NamedIndividual>
  <owl:NamedIndividual rdf:about="http://example.org/zoo#i2">
    <rdf:type rdf:resource="http://example.org/zoo#A"/>
  </owl:NamedIndividual>
"""

FOOTER = "</rdf:RDF>\n"


def write_ontology(path: Path, body: str, default_namespace: bool = True) -> Path:
    if default_namespace:
        header = HEADER.replace("NAMESPACE", f'xmlns="{ZOO}"')
        body = body.replace("PFX:", "")
    else:
        header = HEADER.replace("NAMESPACE", f'xmlns:zoo="{ZOO}"')
        body = body.replace("PFX:", "zoo:")
    path.write_text(header + body + FOOTER, encoding="utf-8")
    return path


def many_individuals(count: int) -> str:
    """Individuals ind0..ind{count-1} of class B, each living in the next one."""
    parts: List[str] = []
    for i in range(count):
        target = f"ind{(i + 1) % count}"
        parts.append(f"""
  <owl:NamedIndividual rdf:about="http://example.org/zoo#ind{i}">
    <rdf:type rdf:resource="http://example.org/zoo#B"/>
    <PFX:age>{i}</PFX:age>
    <PFX:age>{i * 10}</PFX:age>
    <PFX:livesIn rdf:resource="http://example.org/zoo#{target}"/>
  </owl:NamedIndividual>""")
    return "".join(parts)


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts from the packaged configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def zoo_path(tmp_path):
    """Classes A, B (B under A); i1: B with age 5 lives in i2: A."""
    return write_ontology(tmp_path / "zoo.owl", SCHEMA + INDIVIDUALS)


@pytest.fixture
def no_individuals_path(tmp_path):
    return write_ontology(tmp_path / "schema_only.owl", SCHEMA)


@pytest.fixture
def no_prefix_path(tmp_path):
    return write_ontology(tmp_path / "no_prefix.rdf", SCHEMA + INDIVIDUALS, default_namespace=False)


@pytest.fixture
def named_prefix_first_path(tmp_path):
    """Declares zoo: and then the default prefix, both for the zoo namespace."""
    header = HEADER.replace("NAMESPACE", f'xmlns:zoo="{ZOO}" xmlns="{ZOO}"')
    body = (SCHEMA + INDIVIDUALS).replace("PFX:", "zoo:")
    path = tmp_path / "zoo_named_first.owl"
    path.write_text(header + body + FOOTER, encoding="utf-8")
    return path


@pytest.fixture
def large_path(tmp_path):
    return write_ontology(tmp_path / "large.owl", SCHEMA + many_individuals(40))


@pytest.fixture
def invalid_path(tmp_path):
    path = tmp_path / "broken.owl"
    path.write_text("this is not an ontology <rdf:RDF", encoding="utf-8")
    return path


@pytest.fixture
def html_path(tmp_path):
    """Well-formed XML without any RDF content."""
    path = tmp_path / "page.owl"
    path.write_text('<?xml version="1.0"?><html><body>hi</body></html>', encoding="utf-8")
    return path
