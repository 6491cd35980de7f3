"""
Tests for the type dependency graph and cycle detection.
"""

from pathlib import Path

from unity_auditor.graph import (
    DependencyType,
    build_dependency_graph,
    direct_dependencies,
    find_cycles,
)
from unity_auditor.scripts.models import (
    ClassDefinition,
    DesignPatternType,
    MethodDefinition,
    ParameterDefinition,
)
from unity_auditor.scripts.script_analyzer import ScriptAnalyzer


def make_class(name: str, bases=(), namespace: str = "", methods=()) -> ClassDefinition:
    return ClassDefinition(
        name=name,
        namespace=namespace,
        file_path=f"{name}.cs",
        base_classes=list(bases),
        methods=list(methods),
    )


def test_chain_has_no_cycles():
    """A -> B -> C -> D -> E is acyclic."""
    names = ["A", "B", "C", "D", "E"]
    classes = [
        make_class(name, bases=[names[i + 1]] if i + 1 < len(names) else [])
        for i, name in enumerate(names)
    ]

    graph = build_dependency_graph(classes)

    assert graph.total_nodes == 5
    assert graph.total_edges == 4
    assert graph.get_circular_dependencies() == []


def test_triangle_reports_one_cycle():
    classes = [
        make_class("A", bases=["B"]),
        make_class("B", bases=["C"]),
        make_class("C", bases=["A"]),
    ]

    graph = build_dependency_graph(classes)

    assert graph.get_circular_dependencies() == ["A -> B -> C -> A"]


def test_cycle_output_is_independent_of_input_order():
    forward = [make_class("A", bases=["B"]), make_class("B", bases=["A"])]
    backward = list(reversed(forward))

    assert (
        build_dependency_graph(forward).get_circular_dependencies()
        == build_dependency_graph(backward).get_circular_dependencies()
        == ["A -> B -> A"]
    )


def test_three_class_inheritance_scenario(temp_dir: Path, sequential_config):
    """ClassA : ClassB, ClassB : ClassC, ClassC: two edges, no cycles or patterns."""
    path = temp_dir / "Chain.cs"
    path.write_text(
        "public class ClassA : ClassB { }\n"
        "public class ClassB : ClassC { }\n"
        "public class ClassC { }\n",
        encoding="utf-8",
    )

    result = ScriptAnalyzer(sequential_config).analyze(path)
    graph = result.dependency_graph

    assert graph.total_nodes == result.total_classes == 3
    assert [(e.source, e.target, e.type) for e in graph.edges] == [
        ("ClassA", "ClassB", DependencyType.INHERITANCE),
        ("ClassB", "ClassC", DependencyType.INHERITANCE),
    ]
    assert graph.get_circular_dependencies() == []
    kinds = {p.type for p in result.patterns}
    assert DesignPatternType.SINGLETON not in kinds
    assert DesignPatternType.FACTORY not in kinds


def test_node_count_matches_class_count(complex_cs_file: Path, sequential_config):
    result = ScriptAnalyzer(sequential_config).analyze(complex_cs_file)
    assert result.dependency_graph.total_nodes == len(result.classes) == 4


def test_usage_edges_from_method_signatures():
    """Return and parameter types become usage edges; primitives are skipped."""
    method = MethodDefinition(
        name="Spawn",
        return_type="List<Enemy>",
        parameters=[
            ParameterDefinition(name="count", type="int"),
            ParameterDefinition(name="origin", type="Vector3"),
        ],
    )
    spawner = make_class("Spawner", methods=[method])

    assert direct_dependencies(spawner) == ["List", "Enemy", "Vector3"]

    graph = build_dependency_graph([spawner, make_class("Enemy")])
    assert [(e.target, e.type) for e in graph.edges] == [
        ("List", DependencyType.USAGE),
        ("Enemy", DependencyType.USAGE),
        ("Vector3", DependencyType.USAGE),
    ]
    assert graph.internal_edges()[0].target == "Enemy"


def test_duplicate_dependency_produces_one_edge():
    method = MethodDefinition(
        name="Attach", return_type="void", parameters=[ParameterDefinition("other", "Base")]
    )
    graph = build_dependency_graph([make_class("Derived", bases=["Base"], methods=[method])])

    assert len(graph.edges) == 1
    assert graph.edges[0].type == DependencyType.INHERITANCE


def test_external_targets_are_not_in_adjacency():
    graph = build_dependency_graph([make_class("Player", bases=["MonoBehaviour"])])

    assert graph.get_dependencies("Player") == ["MonoBehaviour"]
    assert graph.adjacency() == {"Player": []}
    assert graph.find_node("MonoBehaviour") is None


def test_resolve_prefers_same_namespace():
    classes = [
        make_class("Health", namespace="Game.Player"),
        make_class("Health", namespace="Game.Enemy"),
        make_class("Boss", bases=["Health"], namespace="Game.Enemy"),
    ]

    graph = build_dependency_graph(classes)

    assert graph.get_dependencies("Game.Enemy.Boss") == ["Game.Enemy.Health"]
    assert graph.get_dependents("Game.Enemy.Health") == ["Game.Enemy.Boss"]


def test_duplicate_full_names_share_one_node():
    first = make_class("Shared", bases=["A"])
    second = ClassDefinition(name="Shared", namespace="", file_path="Other.cs", base_classes=["B"])

    graph = build_dependency_graph([first, second])

    assert graph.total_nodes == 1
    assert sorted(graph.get_dependencies("Shared")) == ["A", "B"]


def test_self_reference_is_not_an_edge():
    method = MethodDefinition(name="Clone", return_type="Node")
    graph = build_dependency_graph([make_class("Node", methods=[method])])
    assert graph.edges == []


def test_find_cycles_rotates_to_smallest_member():
    adjacency = {"c": ["a"], "a": ["b"], "b": ["c"], "d": ["external"]}
    assert find_cycles(adjacency) == [["a", "b", "c"]]


def test_find_cycles_reports_each_cycle_once():
    adjacency = {"a": ["b", "c"], "b": ["a"], "c": ["a"]}
    assert find_cycles(adjacency) == [["a", "b"], ["a", "c"]]


def test_find_cycles_does_not_reenter_finished_nodes():
    adjacency = {"a": ["b", "c"], "b": ["a"], "c": ["b"]}
    assert find_cycles(adjacency) == [["a", "b"]]
