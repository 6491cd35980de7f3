"""
Category generator plumbing shared by the insight and recommendation engines.

A category generator is a function of an AnalysisResult that returns a list
of items. Running it through ``run_generator`` turns the outcome into an
explicit GeneratorResult, so one failing category never discards the output
of the others.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from unity_auditor.models import AnalysisResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GeneratorResult(Generic[T]):
    """Outcome of one category generator.

    Attributes:
        category: Category name, e.g. "structure"
        items: Generated items (empty on failure)
        error: Failure message, None on success
    """

    category: str
    items: Tuple[T, ...] = ()
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, category: str, items: List[T]) -> "GeneratorResult[T]":
        return cls(category=category, items=tuple(items))

    @classmethod
    def failure(cls, category: str, error: str) -> "GeneratorResult[T]":
        return cls(category=category, error=error)


def run_generator(
    category: str, generator: Callable[[AnalysisResult], List[T]], result: AnalysisResult
) -> GeneratorResult[T]:
    """Run one category generator, capturing any exception as a failure."""
    try:
        items = generator(result)
    except Exception as e:
        logger.error(f"{category} generator failed: {e}")
        return GeneratorResult.failure(category, str(e))
    return GeneratorResult.ok(category, items)
