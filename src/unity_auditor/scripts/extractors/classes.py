"""
Class and struct extraction.

Declarations are located in the masked source; the body of each one is
recovered with the bounded brace scan and handed to the member extractors.
"""

import logging
import re

from unity_auditor.scripts.extractors.attributes import AttributeExtractor, preceding_attributes
from unity_auditor.scripts.extractors.base import (
    BaseExtractor,
    access_of,
    modifier_words,
    split_inheritance,
)
from unity_auditor.scripts.extractors.fields import FieldExtractor
from unity_auditor.scripts.extractors.methods import MethodExtractor
from unity_auditor.scripts.extractors.properties import PropertyExtractor
from unity_auditor.scripts.models import ClassDefinition, ClassKind, ScriptFile
from unity_auditor.scripts.source import SourceUnit, TypeScope, branch_count, extract_block

logger = logging.getLogger(__name__)

CLASS_PATTERN = re.compile(
    r"(?<![\w.])"
    r"(?P<modifiers>(?:(?:public|private|protected|internal|abstract|sealed|static|"
    r"partial|unsafe|new|readonly|ref)\s+)*)"
    r"(?P<kind>class|struct)\s+(?P<name>[A-Za-z_]\w*)\s*(?:<[^<>{]*>)?\s*"
    r"(?::\s*(?P<bases>[^{;]+?))?\s*(?:where\s+[^{;]+)?\{"
)


class ClassExtractor(BaseExtractor):
    """Extracts class and struct declarations with their members."""

    def __init__(self, max_depth: int = 64):
        self.max_depth = max_depth
        self.method_extractor = MethodExtractor()
        self.field_extractor = FieldExtractor()
        self.property_extractor = PropertyExtractor()
        self.attribute_extractor = AttributeExtractor()

    def extract(self, unit: SourceUnit, result: ScriptFile) -> None:
        """Extract every class and struct declared in the file.

        Nested types are reported as separate declarations; their bodies are
        hidden from the enclosing type's member passes.

        Args:
            unit: Masked source file
            result: ScriptFile to populate
        """
        for match in CLASS_PATTERN.finditer(unit.masked):
            name = match.group("name")
            words = modifier_words(match.group("modifiers"))
            bases, interfaces = split_inheritance(match.group("bases") or "")

            block = extract_block(unit.masked, match.end() - 1, self.max_depth)
            if not block.closed:
                logger.warning(f"Body of {name} in {unit.path} could not be fully balanced")

            definition = ClassDefinition(
                name=name,
                namespace=unit.namespace,
                file_path=unit.path,
                access_modifier=access_of(words),
                kind=ClassKind(match.group("kind")),
                is_abstract="abstract" in words,
                is_static="static" in words,
                is_sealed="sealed" in words,
                base_classes=bases,
                interfaces=interfaces,
                attributes=preceding_attributes(unit.masked, match.start()),
                start_line=unit.line_of(match.start()),
                lines_of_code=block.line_count(unit.masked),
            )

            scope = TypeScope.from_block(unit, name, block, self.max_depth)
            definition.complexity = 1 + branch_count(scope.body)
            self._run_member_extractions(scope, definition)
            result.classes.append(definition)

    def _run_member_extractions(self, scope: TypeScope, definition: ClassDefinition) -> None:
        """Run each member pass independently so one failure keeps the rest."""
        try:
            self.method_extractor.extract(scope, definition)
        except Exception as e:
            logger.error(f"Method extraction failed for {definition.name}: {e}")

        try:
            self.field_extractor.extract(scope, definition)
        except Exception as e:
            logger.error(f"Field extraction failed for {definition.name}: {e}")

        try:
            self.property_extractor.extract(scope, definition)
        except Exception as e:
            logger.error(f"Property extraction failed for {definition.name}: {e}")

        try:
            self.attribute_extractor.extract(scope, definition)
        except Exception as e:
            logger.error(f"Attribute extraction failed for {definition.name}: {e}")
