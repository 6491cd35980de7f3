"""
Attribute extraction.

Collects the names of ``[Attribute]`` annotations used inside a class body
(on fields, methods and properties) and those placed directly before the
class declaration itself.
"""

import logging
import re
from typing import List

from unity_auditor.scripts.extractors.base import MemberExtractor
from unity_auditor.scripts.models import ClassDefinition
from unity_auditor.scripts.source import TypeScope, split_top_level

logger = logging.getLogger(__name__)

ATTRIBUTE_PATTERN = re.compile(r"(?<![\w\]])\[\s*([A-Za-z_][^\[\]]*)\]")
ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_][\w.]*$")
TRAILING_ATTRIBUTES = re.compile(r"(?:\[[^\[\]]*\]\s*)+$")


def attribute_names(text: str) -> List[str]:
    """Names found in every ``[...]`` group of ``text``, in order.

    ``[SerializeField, Range(0, 1)]`` yields ``SerializeField`` and ``Range``.
    Index expressions such as ``[i]`` or ``[0]`` are rejected because their
    content is not a bare identifier followed by optional arguments.
    """
    names = []
    for group in ATTRIBUTE_PATTERN.findall(text):
        for part in split_top_level(group):
            name = part.split("(", 1)[0].strip()
            if ":" in name:
                # target specifier, e.g. [field: SerializeField]
                name = name.split(":", 1)[1].strip()
            if not ATTRIBUTE_NAME.match(name) or not name[0].isupper():
                continue
            if name not in names:
                names.append(name)
    return names


def preceding_attributes(masked: str, declaration_start: int) -> List[str]:
    """Attribute names placed immediately before a declaration."""
    match = TRAILING_ATTRIBUTES.search(masked[:declaration_start].rstrip())
    return attribute_names(match.group(0)) if match else []


class AttributeExtractor(MemberExtractor):
    """Extracts attribute names used on class members."""

    def extract(self, scope: TypeScope, definition: ClassDefinition) -> None:
        for name in attribute_names(scope.members):
            if name not in definition.attributes:
                definition.attributes.append(name)
