"""
Design pattern detection.

Each rule is an independent function over the extracted classes. Rules look
only at structural facts (names, field types, constructor access), so they
report evidence with a fixed confidence rather than a proof.
"""

import logging
from typing import Callable, Iterable, List, Sequence

from unity_auditor.scripts.models import (
    AccessModifier,
    ClassDefinition,
    DesignPattern,
    DesignPatternType,
)

logger = logging.getLogger(__name__)

SINGLETON_CONFIDENCE = 0.9
FACTORY_CONFIDENCE = 0.8
OBSERVER_CONFIDENCE = 0.7

OBSERVER_FIELD_MARKERS = ("Action", "Event", "delegate")
OBSERVER_METHOD_PREFIXES = ("Notify", "Update")

PatternRule = Callable[[Sequence[ClassDefinition]], List[DesignPattern]]


def detect_singletons(classes: Sequence[ClassDefinition]) -> List[DesignPattern]:
    """Static field typed as the declaring class plus a private constructor."""
    patterns = []
    for cls in classes:
        has_instance = any(f.is_static and f.type == cls.name for f in cls.fields)
        has_private_ctor = any(
            m.access_modifier == AccessModifier.PRIVATE for m in cls.constructors
        )
        if has_instance and has_private_ctor:
            patterns.append(
                DesignPattern(
                    type=DesignPatternType.SINGLETON,
                    name=f"Singleton: {cls.name}",
                    confidence=SINGLETON_CONFIDENCE,
                    involved_classes=[cls.name],
                    evidence="Has static instance field and private constructor",
                )
            )
    return patterns


def detect_factories(classes: Sequence[ClassDefinition]) -> List[DesignPattern]:
    patterns = []
    for cls in classes:
        if "Factory" not in cls.name:
            continue
        if any(m.name.startswith("Create") for m in cls.methods if not m.is_constructor):
            patterns.append(
                DesignPattern(
                    type=DesignPatternType.FACTORY,
                    name=f"Factory: {cls.name}",
                    confidence=FACTORY_CONFIDENCE,
                    involved_classes=[cls.name],
                    evidence="Class name contains 'Factory' and has Create method",
                )
            )
    return patterns


def detect_observers(classes: Sequence[ClassDefinition]) -> List[DesignPattern]:
    patterns = []
    for cls in classes:
        has_events = any(
            f.is_event or any(marker in f.type for marker in OBSERVER_FIELD_MARKERS)
            for f in cls.fields
        )
        has_notify = any(
            m.name.startswith(OBSERVER_METHOD_PREFIXES)
            for m in cls.methods
            if not m.is_constructor
        )
        if has_events and has_notify:
            patterns.append(
                DesignPattern(
                    type=DesignPatternType.OBSERVER,
                    name=f"Observer: {cls.name}",
                    confidence=OBSERVER_CONFIDENCE,
                    involved_classes=[cls.name],
                    evidence="Has event fields and notify/update methods",
                )
            )
    return patterns


PATTERN_RULES = (detect_singletons, detect_factories, detect_observers)


def detect_patterns(
    classes: Sequence[ClassDefinition], rules: Iterable[PatternRule] = PATTERN_RULES
) -> List[DesignPattern]:
    """Run every rule and concatenate the results in rule order.

    Args:
        classes: Extracted class definitions
        rules: Pattern rules to apply

    Returns:
        List of detected patterns
    """
    patterns: List[DesignPattern] = []
    for rule in rules:
        found = rule(classes)
        logger.debug(f"{rule.__name__}: {len(found)} match(es)")
        patterns.extend(found)
    return patterns
