"""
Tests for architecture derivation.
"""

from unity_auditor.architecture import ArchitectureAnalyzer, categorize, layer_for
from unity_auditor.graph import build_dependency_graph
from unity_auditor.models import (
    ArchitectureIssueSeverity,
    ArchitectureIssueType,
    ArchitecturePattern,
    ComponentCategory,
    ConnectionType,
)
from unity_auditor.scripts.models import (
    ClassDefinition,
    MethodDefinition,
    ParameterDefinition,
    ScriptAnalysisResult,
)


def make_class(name, bases=(), methods=0, namespace="Game"):
    return ClassDefinition(
        name=name,
        namespace=namespace,
        file_path=f"{name}.cs",
        base_classes=list(bases),
        methods=[MethodDefinition(name=f"M{i}", return_type="void") for i in range(methods)],
    )


def scripts_for(classes):
    return ScriptAnalysisResult(
        classes=classes, dependency_graph=build_dependency_graph(classes)
    )


def test_empty_scripts_give_empty_analysis():
    analysis = ArchitectureAnalyzer().analyze(ScriptAnalysisResult())

    assert analysis.components == []
    assert analysis.pattern == ArchitecturePattern.NONE
    assert analysis.metrics is None


def test_categorize():
    assert categorize(make_class("MainMenuUI", bases=["MonoBehaviour"])) == ComponentCategory.GAMEPLAY
    assert categorize(make_class("HudCanvas")) == ComponentCategory.UI
    assert categorize(make_class("SaveService")) == ComponentCategory.CORE
    assert categorize(make_class("MathHelper")) == ComponentCategory.UTILITY
    assert categorize(make_class("Inventory")) == ComponentCategory.CORE


def test_layer_levels():
    assert layer_for(ComponentCategory.UI) == ("Presentation", 1)
    assert layer_for(ComponentCategory.UTILITY) == ("Utility", 4)


def test_mvc_pattern():
    classes = [
        make_class("PlayerController"),
        make_class("PlayerView", bases=["MonoBehaviour"]),
        make_class("PlayerModel"),
    ]
    assert ArchitectureAnalyzer().analyze(scripts_for(classes)).pattern == ArchitecturePattern.MVC


def test_service_oriented_pattern():
    classes = [make_class("GameManager"), make_class("AudioService")]
    analysis = ArchitectureAnalyzer().analyze(scripts_for(classes))
    assert analysis.pattern == ArchitecturePattern.SERVICE_ORIENTED


def test_component_based_pattern():
    classes = [
        make_class("Mover", bases=["MonoBehaviour"]),
        make_class("Shooter", bases=["MonoBehaviour"]),
        make_class("Spawner", bases=["MonoBehaviour"]),
        make_class("Score"),
    ]
    analysis = ArchitectureAnalyzer().analyze(scripts_for(classes))
    assert analysis.pattern == ArchitecturePattern.COMPONENT_BASED


def test_connections_only_between_project_classes():
    classes = [
        make_class("Unit", bases=["MonoBehaviour"]),
        make_class("Enemy", bases=["Unit"]),
    ]
    analysis = ArchitectureAnalyzer().analyze(scripts_for(classes))

    assert [(c.source, c.target, c.type) for c in analysis.connections] == [
        ("Enemy", "Unit", ConnectionType.INHERITANCE)
    ]
    assert analysis.metrics.total_connections == 1
    assert analysis.metrics.average_coupling == 0.5


def test_layers_ordered_by_level():
    classes = [
        make_class("MathHelper"),
        make_class("HudCanvas"),
        make_class("Player", bases=["MonoBehaviour"]),
    ]
    layers = ArchitectureAnalyzer().analyze(scripts_for(classes)).layers

    assert [(layer.name, layer.level, layer.components) for layer in layers] == [
        ("Presentation", 1, ["HudCanvas"]),
        ("Gameplay", 2, ["Player"]),
        ("Utility", 4, ["MathHelper"]),
    ]


def test_god_class_issue():
    analysis = ArchitectureAnalyzer().analyze(scripts_for([make_class("Everything", methods=21)]))

    assert [(i.type, i.description) for i in analysis.issues] == [
        (ArchitectureIssueType.GOD_CLASS, "Class Everything has too many methods and responsibilities")
    ]
    assert analysis.issues[0].severity == ArchitectureIssueSeverity.MAJOR


def test_mutual_dependency_is_tight_coupling():
    player = make_class("Player")
    player.methods.append(
        MethodDefinition(name="Equip", return_type="void", parameters=[ParameterDefinition("w", "Weapon")])
    )
    weapon = make_class("Weapon")
    weapon.methods.append(MethodDefinition(name="Owner", return_type="Player"))

    analysis = ArchitectureAnalyzer().analyze(scripts_for([player, weapon]))

    coupled = [i for i in analysis.issues if i.type == ArchitectureIssueType.TIGHT_COUPLING]
    assert [i.description for i in coupled] == [
        "Game.Player and Game.Weapon depend on each other"
    ]
    assert coupled[0].severity == ArchitectureIssueSeverity.MINOR


def test_placeholder_metrics():
    analysis = ArchitectureAnalyzer().analyze(scripts_for([make_class("Solo")]))

    assert analysis.metrics.total_components == 1
    assert analysis.metrics.average_cohesion == 0.8
    assert analysis.metrics.instability == 0.3
    assert analysis.metrics.abstractness == 0.5
