"""
Base extractor interfaces.

File-level extractors find type declarations in a SourceUnit and populate a
ScriptFile. Member extractors run one independent pattern pass over a
TypeScope and populate the declaration being built.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, List, Set, Tuple

from unity_auditor.scripts.models import AccessModifier, ParameterDefinition, ScriptFile
from unity_auditor.scripts.source import SourceUnit, TypeScope, split_top_level, strip_generics

logger = logging.getLogger(__name__)

ACCESS_WORDS = ("public", "private", "protected", "internal")
PARAMETER_FLAGS = ("out", "ref", "in", "params", "this", "scoped", "readonly")
LEADING_ATTRIBUTES = re.compile(r"^\s*(?:\[[^\]]*\]\s*)+")


def modifier_words(text: str) -> Set[str]:
    return set(text.split()) if text else set()


def access_of(words: Set[str]) -> AccessModifier:
    """First access keyword present, private when there is none."""
    for word in ACCESS_WORDS:
        if word in words:
            return AccessModifier(word)
    return AccessModifier.PRIVATE


class BaseExtractor(ABC):
    """Base class for file-level extractors.

    Each extractor is responsible for one kind of type declaration.
    """

    @abstractmethod
    def extract(self, unit: SourceUnit, result: ScriptFile) -> None:
        """Extract declarations from a source unit and populate result.

        Args:
            unit: Masked source file
            result: ScriptFile to populate
        """
        pass


class MemberExtractor(ABC):
    """Base class for extractors that run inside one type body."""

    @abstractmethod
    def extract(self, scope: TypeScope, definition: Any) -> None:
        """Run one pattern pass over a type body.

        Args:
            scope: Type body with its member view
            definition: ClassDefinition or InterfaceDefinition to populate
        """
        pass


def parse_parameters(text: str) -> List[ParameterDefinition]:
    """Parse a parameter list such as ``int a, out float b = 1f``.

    The last word of each parameter is its name and everything before it
    (after flags) is its type.
    """
    parameters = []
    for raw in split_top_level(text):
        part = LEADING_ATTRIBUTES.sub("", raw).strip()
        default_value = None
        if "=" in part:
            part, default_value = (s.strip() for s in part.split("=", 1))

        words = part.split()
        flags = set()
        while words and words[0] in PARAMETER_FLAGS:
            flags.add(words.pop(0))
        if len(words) < 2:
            logger.debug(f"Skipping unparseable parameter: {raw!r}")
            continue

        parameters.append(
            ParameterDefinition(
                name=words[-1],
                type=" ".join(words[:-1]),
                default_value=default_value,
                is_out="out" in flags,
                is_ref="ref" in flags,
                is_params="params" in flags,
            )
        )
    return parameters


def split_inheritance(text: str) -> Tuple[List[str], List[str]]:
    """Split an inheritance list into (base types, interfaces).

    An entry is treated as an interface when it starts with ``I`` followed by
    an uppercase letter. This is a naming heuristic, not type resolution.
    """
    bases: List[str] = []
    interfaces: List[str] = []
    for item in split_top_level(text):
        name = strip_generics(item)
        if not name:
            continue
        is_interface = len(name) > 1 and name[0] == "I" and name[1].isupper()
        target = interfaces if is_interface else bases
        if name not in target:
            target.append(name)
    return bases, interfaces
