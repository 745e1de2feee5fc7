"""
Tests for parallel instance building.
"""
import pytest

from ontology_interpreter.core import instances as instances_module
from ontology_interpreter.core.domain import Ontology
from ontology_interpreter.core.exceptions import InstanceBuildError
from ontology_interpreter.core.instances import (
    BEST_EFFORT,
    FAIL_FAST,
    InstanceBuilder,
    partition,
    qualifying_individuals,
    worker_count,
)
from ontology_interpreter.core.registry import (
    derive_hierarchy,
    register_types,
    register_value_types,
)
from ontology_interpreter.core.source import SourceModel

from conftest import ZOO, write_ontology


def _prepare(path):
    source = SourceModel.load(path)
    ontology = Ontology(ZOO, path.stem)
    root, types = register_types(source, ontology, ZOO)
    value_types = register_value_types(source, ontology)
    derive_hierarchy(source, types, root)
    return source, ontology, types, value_types


class TestWorkerSizing:

    def test_reserves_six_cores_by_default(self):
        assert worker_count(available=16) == 10
        assert worker_count(available=8) == 2

    def test_never_below_one(self):
        assert worker_count(available=6) == 1
        assert worker_count(available=2) == 1
        assert worker_count(reserved_cores=0, available=4) == 4

    def test_partition_is_contiguous_with_ceil_chunks(self):
        assert partition(list(range(10)), 3) == [[0, 1, 2, 3], [4, 5, 6, 7], [8, 9]]
        assert partition(list(range(4)), 8) == [[0], [1], [2], [3]]
        assert partition([], 4) == []

    def test_partition_keeps_every_item_once(self):
        items = list(range(97))
        chunks = partition(items, 7)

        assert len(chunks) <= 7
        assert [i for chunk in chunks for i in chunk] == items


class TestInstanceBuilder:

    def test_example_instances(self, zoo_path):
        source, ontology, types, value_types = _prepare(zoo_path)

        built = InstanceBuilder(source, types, value_types, max_workers=2).build(ontology)

        by_name = {i.name: i for i in built.values()}
        assert set(by_name) == {"i1", "i2"}
        i1 = by_name["i1"]
        type_names = {t.name for t in i1.types}
        assert "B" in type_names
        # Full membership: ancestors of asserted classes are included
        assert "A" in type_names
        assert {(v.value_type.name, v.value) for v in i1.values} == {("age", "5")}
        assert {t.name for t in by_name["i2"].types} == {"A"}
        assert ontology.number_of_instances == 2

    def test_instances_registered_on_types(self, zoo_path):
        source, ontology, types, value_types = _prepare(zoo_path)

        InstanceBuilder(source, types, value_types, max_workers=1).build(ontology)

        a = next(t for t in ontology.types if t.name == "A")
        b = next(t for t in ontology.types if t.name == "B")
        assert {i.name for i in a.instances} == {"i1", "i2"}
        assert {i.name for i in b.instances} == {"i1"}
        assert {v.name for v in a.value_types} == {"age"}

    def test_multi_valued_properties(self, large_path):
        source, ontology, types, value_types = _prepare(large_path)

        built = InstanceBuilder(source, types, value_types, max_workers=3).build(ontology)

        ind3 = next(i for i in built.values() if i.name == "ind3")
        ind0 = next(i for i in built.values() if i.name == "ind0")
        assert {v.value for v in ind3.values} == {"3", "30"}
        # "0" and "0" collapse into one pair
        assert {v.value for v in ind0.values} == {"0"}

    def test_one_worker_equals_many_workers(self, large_path):
        results = []
        for workers in (1, 4, 16):
            source, ontology, types, value_types = _prepare(large_path)
            builder = InstanceBuilder(source, types, value_types, max_workers=workers)
            builder.build(ontology)
            results.append(ontology.instances)
            assert builder.workers_spawned == len(partition(list(range(40)), workers))

        assert results[0] == results[1] == results[2]
        assert len(results[0]) == 40

    def test_no_individuals_spawns_no_workers(self, no_individuals_path):
        source, ontology, types, value_types = _prepare(no_individuals_path)
        builder = InstanceBuilder(source, types, value_types, max_workers=4)

        assert builder.build(ontology) == {}
        assert builder.workers_spawned == 0
        assert ontology.number_of_instances == 0

    def test_individuals_outside_known_classes_are_excluded(self, tmp_path):
        body = """
  <owl:Class rdf:about="http://example.org/zoo#A"/>
  <owl:NamedIndividual rdf:about="http://example.org/zoo#known">
    <rdf:type rdf:resource="http://example.org/zoo#A"/>
  </owl:NamedIndividual>
  <owl:NamedIndividual rdf:about="http://example.org/zoo#stranger">
    <rdf:type rdf:resource="http://example.org/elsewhere#Alien"/>
  </owl:NamedIndividual>
"""
        source, ontology, types, value_types = _prepare(write_ontology(tmp_path / "mixed.owl", body))

        assert [str(i) for i in qualifying_individuals(source, types)] == [ZOO + "known"]

    def test_rejects_unknown_policy(self, zoo_path):
        source, ontology, types, value_types = _prepare(zoo_path)

        with pytest.raises(ValueError):
            InstanceBuilder(source, types, value_types, failure_policy="ignore")
        with pytest.raises(ValueError):
            InstanceBuilder(source, types, value_types, max_workers=0)


class TestFailurePolicy:

    @pytest.fixture
    def failing_values(self, monkeypatch):
        original = instances_module.collect_values

        def collect_values(source, individual, value_types):
            if str(individual).endswith("#i1"):
                raise RuntimeError("broken literal")
            return original(source, individual, value_types)

        monkeypatch.setattr(instances_module, "collect_values", collect_values)

    def test_fail_fast_raises(self, zoo_path, failing_values):
        source, ontology, types, value_types = _prepare(zoo_path)
        builder = InstanceBuilder(source, types, value_types, failure_policy=FAIL_FAST)

        with pytest.raises(InstanceBuildError) as excinfo:
            builder.build(ontology)

        assert excinfo.value.individual == ZOO + "i1"

    def test_best_effort_skips_and_warns(self, zoo_path, failing_values):
        source, ontology, types, value_types = _prepare(zoo_path)
        warnings = []
        builder = InstanceBuilder(source, types, value_types, failure_policy=BEST_EFFORT)

        built = builder.build(ontology, warnings)

        assert [i.name for i in built.values()] == ["i2"]
        assert len(warnings) == 1
        assert "i1" in warnings[0]
