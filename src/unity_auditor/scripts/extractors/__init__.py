"""
Extractors for C# declarations.

- classes: class and struct declarations, delegating to the member passes
- interfaces: interface declarations and their signatures
- methods, fields, properties, attributes: one pattern pass each over a type body
"""

from unity_auditor.scripts.extractors.attributes import AttributeExtractor
from unity_auditor.scripts.extractors.base import BaseExtractor, MemberExtractor
from unity_auditor.scripts.extractors.classes import ClassExtractor
from unity_auditor.scripts.extractors.fields import FieldExtractor
from unity_auditor.scripts.extractors.interfaces import InterfaceExtractor
from unity_auditor.scripts.extractors.methods import MethodExtractor
from unity_auditor.scripts.extractors.properties import PropertyExtractor

__all__ = [
    "BaseExtractor",
    "MemberExtractor",
    "ClassExtractor",
    "InterfaceExtractor",
    "MethodExtractor",
    "FieldExtractor",
    "PropertyExtractor",
    "AttributeExtractor",
]
