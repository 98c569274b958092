"""
Importance scoring strategies used by the indexer.

Two scorers exist and each keeps its own threshold table:
- FastHeuristicScorer: the file-utility heuristic (80/50/20).
- DetailedClassifierScorer: the full priority classifier (100/60/20).

The thresholds are never merged; a score is always categorized by the table of
the scorer that produced it.
"""

from dataclasses import replace
from typing import Optional, Protocol

from constants import DETAILED_THRESHOLDS, FAST_THRESHOLDS
from core.classifier import FilePriorityClassifier
from core.file_utils import DefaultFileUtils, FileUtils
from core.models import CategoryThresholds, ImportanceScore
from models import FileType, ScoringStrategy

__all__ = [
    "DetailedClassifierScorer",
    "FastHeuristicScorer",
    "ImportanceScorer",
    "create_scorer",
]


class ImportanceScorer(Protocol):
    """Protocol for components that assign an ImportanceScore to a file."""

    thresholds: CategoryThresholds

    def score(
        self, path: str, content: Optional[str] = None, type: Optional[FileType] = None
    ) -> ImportanceScore:
        """
        Score a file.

        Args:
            path: Normalized file path.
            content: Optional text content.
            type: The file type resolved by the indexer.

        Returns:
            ImportanceScore categorized by this scorer's thresholds.
        """


def _recategorize(
    importance: ImportanceScore, thresholds: CategoryThresholds
) -> ImportanceScore:
    category = thresholds.categorize(importance.score)
    if category == importance.category:
        return importance
    return replace(importance, category=category)


class FastHeuristicScorer:
    def __init__(
        self,
        file_utils: Optional[FileUtils] = None,
        thresholds: CategoryThresholds = FAST_THRESHOLDS,
    ):
        self.file_utils = file_utils or DefaultFileUtils()
        self.thresholds = thresholds

    def score(
        self, path: str, content: Optional[str] = None, type: Optional[FileType] = None
    ) -> ImportanceScore:
        importance = self.file_utils.calculate_importance_score(path, content)
        return _recategorize(importance, self.thresholds)


class DetailedClassifierScorer:
    def __init__(
        self,
        classifier: Optional[FilePriorityClassifier] = None,
        thresholds: CategoryThresholds = DETAILED_THRESHOLDS,
    ):
        self.classifier = classifier or FilePriorityClassifier()
        self.thresholds = thresholds

    def score(
        self, path: str, content: Optional[str] = None, type: Optional[FileType] = None
    ) -> ImportanceScore:
        importance = self.classifier.classify_file(path, content, type).importance
        return _recategorize(importance, self.thresholds)


def create_scorer(
    strategy: ScoringStrategy,
    file_utils: Optional[FileUtils] = None,
    classifier: Optional[FilePriorityClassifier] = None,
) -> ImportanceScorer:
    """
    Build the scorer for a strategy.

    Args:
        strategy: Which scorer to build.
        file_utils: File utilities used by the fast scorer.
        classifier: Classifier used by the detailed scorer.

    Returns:
        The scorer instance.

    Raises:
        ValueError: If the strategy is not a known ScoringStrategy.
    """
    if ScoringStrategy(strategy) == ScoringStrategy.DETAILED:
        return DetailedClassifierScorer(classifier)
    return FastHeuristicScorer(file_utils)
