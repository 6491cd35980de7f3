"""
Field and event-field extraction from type bodies.
"""

import logging
import re

from unity_auditor.scripts.extractors.base import MemberExtractor, access_of, modifier_words
from unity_auditor.scripts.models import ClassDefinition, FieldDefinition
from unity_auditor.scripts.source import NON_TYPE_KEYWORDS, TYPE_PATTERN, TypeScope

logger = logging.getLogger(__name__)

FIELD_MODIFIERS = (
    "public|private|protected|internal|static|readonly|const|volatile|new|event"
)

FIELD_PATTERN = re.compile(
    r"(?<![\w.])"
    rf"(?P<modifiers>(?:(?:{FIELD_MODIFIERS})\s+)*)"
    rf"(?P<type>{TYPE_PATTERN})\s+"
    r"(?P<name>[A-Za-z_]\w*)\s*"
    r"(?:=(?!>)\s*(?P<value>[^;]*?))?\s*;"
)


class FieldExtractor(MemberExtractor):
    """Extracts fields, constants and event fields from a class body."""

    def extract(self, scope: TypeScope, definition: ClassDefinition) -> None:
        """Populate ``definition.fields``.

        Args:
            scope: Class body
            definition: ClassDefinition to populate
        """
        for match in FIELD_PATTERN.finditer(scope.members):
            field_type = match.group("type").strip()
            name = match.group("name")
            if field_type in NON_TYPE_KEYWORDS or name in NON_TYPE_KEYWORDS:
                continue

            words = modifier_words(match.group("modifiers"))
            value = match.group("value")
            definition.fields.append(
                FieldDefinition(
                    name=name,
                    type=field_type,
                    access_modifier=access_of(words),
                    is_static="static" in words or "const" in words,
                    is_readonly="readonly" in words,
                    is_const="const" in words,
                    is_event="event" in words,
                    default_value=value.strip() if value else None,
                )
            )
