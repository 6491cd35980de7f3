"""
Method and constructor extraction from type bodies.
"""

import logging
import re

from unity_auditor.scripts.extractors.base import (
    MemberExtractor,
    access_of,
    modifier_words,
    parse_parameters,
)
from unity_auditor.scripts.models import ClassDefinition, MethodDefinition
from unity_auditor.scripts.source import (
    NON_TYPE_KEYWORDS,
    TYPE_PATTERN,
    TypeScope,
    branch_count,
    extract_block,
)

logger = logging.getLogger(__name__)

METHOD_MODIFIERS = (
    "public|private|protected|internal|static|virtual|override|abstract|async|"
    "sealed|new|extern|unsafe|partial|delegate"
)

METHOD_PATTERN = re.compile(
    r"(?<![\w.~])"
    rf"(?P<modifiers>(?:(?:{METHOD_MODIFIERS})\s+)*)"
    rf"(?P<type>{TYPE_PATTERN})\s+"
    r"(?P<name>[A-Za-z_]\w*)\s*(?:<[^<>()]*>)?\s*"
    r"\((?P<params>[^)]*)\)\s*(?:where\s+[^{;=]+)?(?P<end>\{|;|=>)"
)

CONSTRUCTOR_TEMPLATE = (
    r"(?<![\w.~])(?<!new )"
    r"(?P<modifiers>(?:(?:public|private|protected|internal|static|extern|unsafe)\s+)*)"
    r"{name}\s*\((?P<params>[^)]*)\)\s*"
    r"(?::\s*(?:base|this)\s*\([^)]*\)\s*)?\{{"
)


class MethodExtractor(MemberExtractor):
    """Extracts methods and constructors from a class body."""

    def extract(self, scope: TypeScope, definition: ClassDefinition) -> None:
        """Populate ``definition.methods``.

        Constructors are matched by the declaring type's name; every other
        ``Type Name(params) {`` or abstract ``;`` form is a method.

        Args:
            scope: Class body
            definition: ClassDefinition to populate
        """
        constructor_pattern = re.compile(
            CONSTRUCTOR_TEMPLATE.format(name=re.escape(definition.name))
        )
        for match in constructor_pattern.finditer(scope.members):
            words = modifier_words(match.group("modifiers"))
            method = MethodDefinition(
                name=definition.name,
                return_type="",
                parameters=parse_parameters(match.group("params")),
                access_modifier=access_of(words),
                is_static="static" in words,
                is_constructor=True,
                start_line=scope.line_of(match.start()),
            )
            self._measure(scope, method, match.end() - 1)
            definition.methods.append(method)

        for match in METHOD_PATTERN.finditer(scope.members):
            words = modifier_words(match.group("modifiers"))
            return_type = match.group("type").strip()
            name = match.group("name")
            end = match.group("end")
            if "delegate" in words or name == definition.name:
                continue
            if return_type in NON_TYPE_KEYWORDS or name in NON_TYPE_KEYWORDS:
                continue

            method = MethodDefinition(
                name=name,
                return_type=return_type,
                parameters=parse_parameters(match.group("params")),
                access_modifier=access_of(words),
                is_static="static" in words,
                is_virtual="virtual" in words,
                is_override="override" in words,
                is_abstract="abstract" in words or (end == ";" and "extern" not in words),
                is_async="async" in words,
                start_line=scope.line_of(match.start()),
            )
            if end == "{":
                self._measure(scope, method, match.end() - 1)
            else:
                method.lines_of_code = 1
            definition.methods.append(method)

        definition.methods.sort(key=lambda m: m.start_line)

    def _measure(self, scope: TypeScope, method: MethodDefinition, open_index: int) -> None:
        block = extract_block(scope.body, open_index, scope.max_depth)
        if not block.closed:
            logger.debug(f"Body of {scope.name}.{method.name} truncated in {scope.unit.path}")
        method.lines_of_code = block.line_count(scope.body)
        method.cyclomatic_complexity = 1 + branch_count(block.body(scope.body))
