"""
Property extraction from type bodies.
"""

import logging
import re

from unity_auditor.scripts.extractors.base import MemberExtractor, access_of, modifier_words
from unity_auditor.scripts.models import ClassDefinition, PropertyDefinition
from unity_auditor.scripts.source import (
    NON_TYPE_KEYWORDS,
    TYPE_PATTERN,
    TypeScope,
    extract_block,
)

logger = logging.getLogger(__name__)

PROPERTY_MODIFIERS = (
    "public|private|protected|internal|static|virtual|override|abstract|sealed|new|extern"
)

PROPERTY_PATTERN = re.compile(
    r"(?<![\w.])"
    rf"(?P<modifiers>(?:(?:{PROPERTY_MODIFIERS})\s+)*)"
    rf"(?P<type>{TYPE_PATTERN})\s+"
    r"(?P<name>[A-Za-z_]\w*)\s*(?P<open>\{|=>)"
)

GETTER = re.compile(r"\bget\b")
SETTER = re.compile(r"\bset\b|\binit\b")
AUTO_ACCESSOR = re.compile(r"\b(?:get|set|init)\s*;")


class PropertyExtractor(MemberExtractor):
    """Extracts properties, including expression-bodied getters."""

    def extract(self, scope: TypeScope, definition: ClassDefinition) -> None:
        for match in PROPERTY_PATTERN.finditer(scope.members):
            prop_type = match.group("type").strip()
            name = match.group("name")
            if prop_type in NON_TYPE_KEYWORDS or name in NON_TYPE_KEYWORDS:
                continue
            words = modifier_words(match.group("modifiers"))

            if match.group("open") == "=>":
                has_getter, has_setter, is_auto = True, False, False
            else:
                block = extract_block(scope.body, match.end() - 1, scope.max_depth)
                accessors = block.body(scope.body)
                has_getter = bool(GETTER.search(accessors))
                has_setter = bool(SETTER.search(accessors))
                is_auto = bool(AUTO_ACCESSOR.search(accessors))

            definition.properties.append(
                PropertyDefinition(
                    name=name,
                    type=prop_type,
                    access_modifier=access_of(words),
                    is_static="static" in words,
                    has_getter=has_getter,
                    has_setter=has_setter,
                    is_auto_property=is_auto,
                )
            )
