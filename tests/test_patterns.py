"""
Tests for design pattern detection.
"""

from pathlib import Path

from unity_auditor.scripts.models import (
    AccessModifier,
    ClassDefinition,
    DesignPatternType,
    FieldDefinition,
    MethodDefinition,
)
from unity_auditor.scripts.patterns import (
    detect_factories,
    detect_observers,
    detect_patterns,
    detect_singletons,
)
from unity_auditor.scripts.script_analyzer import ScriptAnalyzer


def constructor(name: str, access: AccessModifier) -> MethodDefinition:
    return MethodDefinition(name=name, return_type="", access_modifier=access, is_constructor=True)


def test_singleton_requires_static_instance_and_private_constructor():
    cls = ClassDefinition(
        name="AudioHub",
        namespace="",
        file_path="AudioHub.cs",
        fields=[FieldDefinition(name="instance", type="AudioHub", is_static=True)],
        methods=[constructor("AudioHub", AccessModifier.PRIVATE)],
    )

    patterns = detect_singletons([cls])

    assert len(patterns) == 1
    assert patterns[0].type == DesignPatternType.SINGLETON
    assert patterns[0].involved_classes == ["AudioHub"]
    assert patterns[0].confidence == 0.9
    assert patterns[0].evidence == "Has static instance field and private constructor"


def test_singleton_not_detected_with_public_constructor():
    cls = ClassDefinition(
        name="AudioHub",
        namespace="",
        file_path="AudioHub.cs",
        fields=[FieldDefinition(name="instance", type="AudioHub", is_static=True)],
        methods=[constructor("AudioHub", AccessModifier.PUBLIC)],
    )
    assert detect_singletons([cls]) == []


def test_singleton_not_detected_without_static_field():
    cls = ClassDefinition(
        name="AudioHub",
        namespace="",
        file_path="AudioHub.cs",
        fields=[FieldDefinition(name="instance", type="AudioHub")],
        methods=[constructor("AudioHub", AccessModifier.PRIVATE)],
    )
    assert detect_singletons([cls]) == []


def test_factory_needs_create_method():
    with_create = ClassDefinition(
        name="BulletFactory",
        namespace="",
        file_path="BulletFactory.cs",
        methods=[MethodDefinition(name="CreateBullet", return_type="Bullet")],
    )
    without_create = ClassDefinition(
        name="ShieldFactory",
        namespace="",
        file_path="ShieldFactory.cs",
        methods=[MethodDefinition(name="Build", return_type="Shield")],
    )

    patterns = detect_factories([with_create, without_create])

    assert [p.involved_classes for p in patterns] == [["BulletFactory"]]
    assert patterns[0].confidence == 0.8


def test_observer_needs_events_and_notify_method():
    observer = ClassDefinition(
        name="Inventory",
        namespace="",
        file_path="Inventory.cs",
        fields=[FieldDefinition(name="Changed", type="Action", is_event=True)],
        methods=[MethodDefinition(name="NotifyChanged", return_type="void")],
    )
    silent = ClassDefinition(
        name="Wallet",
        namespace="",
        file_path="Wallet.cs",
        fields=[FieldDefinition(name="Changed", type="Action", is_event=True)],
        methods=[MethodDefinition(name="Add", return_type="void")],
    )

    patterns = detect_observers([observer, silent])

    assert [p.name for p in patterns] == ["Observer: Inventory"]
    assert patterns[0].confidence == 0.7


def test_delegate_typed_field_counts_as_event():
    cls = ClassDefinition(
        name="Timer",
        namespace="",
        file_path="Timer.cs",
        fields=[FieldDefinition(name="onTick", type="UnityEvent")],
        methods=[MethodDefinition(name="UpdateTimer", return_type="void")],
    )
    assert len(detect_observers([cls])) == 1


def test_sample_file_patterns(sample_cs_file: Path, sequential_config):
    """GameManager is both a singleton and an observer."""
    result = ScriptAnalyzer(sequential_config).analyze(sample_cs_file)

    assert [(p.type, p.involved_classes) for p in result.patterns] == [
        (DesignPatternType.SINGLETON, ["GameManager"]),
        (DesignPatternType.OBSERVER, ["GameManager"]),
    ]


def test_complex_file_factory(complex_cs_file: Path, sequential_config):
    result = ScriptAnalyzer(sequential_config).analyze(complex_cs_file)

    assert [p.name for p in result.patterns] == ["Factory: EnemyFactory"]
    assert result.patterns[0].evidence == "Class name contains 'Factory' and has Create method"


def test_custom_rules_run_in_order():
    cls = ClassDefinition(name="Plain", namespace="", file_path="Plain.cs")
    calls = []

    def first(classes):
        calls.append("first")
        return []

    def second(classes):
        calls.append("second")
        return []

    assert detect_patterns([cls], rules=(first, second)) == []
    assert calls == ["first", "second"]
