"""
Interface extraction.
"""

import logging
import re

from unity_auditor.scripts.extractors.base import (
    BaseExtractor,
    access_of,
    modifier_words,
    parse_parameters,
)
from unity_auditor.scripts.extractors.methods import METHOD_PATTERN
from unity_auditor.scripts.extractors.properties import (
    GETTER,
    PROPERTY_PATTERN,
    SETTER,
)
from unity_auditor.scripts.models import (
    InterfaceDefinition,
    MethodSignature,
    PropertySignature,
    ScriptFile,
)
from unity_auditor.scripts.source import (
    NON_TYPE_KEYWORDS,
    SourceUnit,
    TypeScope,
    extract_block,
    split_top_level,
    strip_generics,
)

logger = logging.getLogger(__name__)

INTERFACE_PATTERN = re.compile(
    r"(?<![\w.])"
    r"(?P<modifiers>(?:(?:public|private|protected|internal|partial|unsafe|new)\s+)*)"
    r"interface\s+(?P<name>[A-Za-z_]\w*)\s*(?:<[^<>{]*>)?\s*"
    r"(?::\s*(?P<bases>[^{;]+?))?\s*(?:where\s+[^{;]+)?\{"
)


class InterfaceExtractor(BaseExtractor):
    """Extracts interface declarations with their method and property signatures."""

    def __init__(self, max_depth: int = 64):
        self.max_depth = max_depth

    def extract(self, unit: SourceUnit, result: ScriptFile) -> None:
        """Extract every interface declared in the file.

        Args:
            unit: Masked source file
            result: ScriptFile to populate
        """
        for match in INTERFACE_PATTERN.finditer(unit.masked):
            name = match.group("name")
            block = extract_block(unit.masked, match.end() - 1, self.max_depth)

            base_interfaces = []
            for item in split_top_level(match.group("bases") or ""):
                base = strip_generics(item)
                if base and base not in base_interfaces:
                    base_interfaces.append(base)

            definition = InterfaceDefinition(
                name=name,
                namespace=unit.namespace,
                file_path=unit.path,
                access_modifier=access_of(modifier_words(match.group("modifiers"))),
                base_interfaces=base_interfaces,
                start_line=unit.line_of(match.start()),
                lines_of_code=block.line_count(unit.masked),
            )

            scope = TypeScope.from_block(unit, name, block, self.max_depth)
            self._extract_signatures(scope, definition)
            result.interfaces.append(definition)

    def _extract_signatures(self, scope: TypeScope, definition: InterfaceDefinition) -> None:
        for match in METHOD_PATTERN.finditer(scope.members):
            return_type = match.group("type").strip()
            method_name = match.group("name")
            if return_type in NON_TYPE_KEYWORDS or method_name in NON_TYPE_KEYWORDS:
                continue
            definition.methods.append(
                MethodSignature(
                    name=method_name,
                    return_type=return_type,
                    parameters=parse_parameters(match.group("params")),
                )
            )

        for match in PROPERTY_PATTERN.finditer(scope.members):
            prop_type = match.group("type").strip()
            prop_name = match.group("name")
            if prop_type in NON_TYPE_KEYWORDS or prop_name in NON_TYPE_KEYWORDS:
                continue
            if match.group("open") == "=>":
                has_getter, has_setter = True, False
            else:
                accessors = extract_block(scope.body, match.end() - 1, scope.max_depth).body(
                    scope.body
                )
                has_getter = bool(GETTER.search(accessors))
                has_setter = bool(SETTER.search(accessors))

            definition.properties.append(
                PropertySignature(
                    name=prop_name,
                    type=prop_type,
                    has_getter=has_getter,
                    has_setter=has_setter,
                )
            )
