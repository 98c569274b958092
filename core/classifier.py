"""
Detailed file priority classification.

This module scores a single file by architectural importance. Classification is
a pure function of (path, content, declared type) and the classifier options:
it never touches the filesystem and never raises for malformed input.

The pipeline is:
1. Characteristics: independent predicates (entry point, configuration, schema,
   test, ...) plus exactly one architectural role.
2. Base score from the characteristic and role weight tables.
3. Project-type, language and framework adjustments.
4. Caller-supplied scoring rules.
5. Content complexity bonus (capped).
6. Clamping to [0, 200] and categorization with DETAILED_THRESHOLDS.

All pattern lists and weights live in `constants.py`.
"""

from dataclasses import dataclass
import logging
from typing import Iterable, Optional

from constants import (
    API_DIRS,
    API_NAME_MARKERS,
    BUILD_SYSTEM_NAME_MARKERS,
    CHARACTERISTIC_REASONS,
    CHARACTERISTIC_WEIGHTS,
    CLASS_DECLARATION_PATTERN,
    CLASSIFIER_DOC_DIRS,
    CLASSIFIER_DOC_SUFFIXES,
    CLASSIFIER_GENERATED_CONTENT_MARKERS,
    CLASSIFIER_GENERATED_DIRS,
    CLASSIFIER_GENERATED_NAME_MARKERS,
    CLASSIFIER_INFRA_DIRS,
    CLASSIFIER_INFRA_FILE_NAMES,
    CLASSIFIER_INFRA_NAME_MARKERS,
    CLASSIFIER_SCHEMA_SUFFIXES,
    CLASSIFIER_TEST_DIRS,
    CLASSIFIER_TEST_NAME_MARKERS,
    CLASSIFIER_TEST_NAME_SUFFIXES,
    COMPLEX_LOGIC_PATTERNS,
    COMPLEX_LOGIC_THRESHOLD,
    COMPLEXITY_EXTENSIONS,
    CONFIG_FILE_PATTERNS,
    CONTENT_COMPLEXITY_CAP,
    DATA_ACCESS_DIRS,
    DATA_ACCESS_NAME_MARKERS,
    DEFAULT_TOP_PRIORITY_LIMIT,
    DEPLOYMENT_DIRS,
    DEPLOYMENT_NAME_MARKERS,
    DETAILED_THRESHOLDS,
    DOCUMENTATION_PENALTY,
    ENTRY_POINT_FILES,
    EXTERNAL_DEPENDENCY_PATTERNS,
    FRAMEWORK_ADJUSTMENTS,
    FUNCTION_DECLARATION_PATTERN,
    GENERATED_PENALTY,
    IMPORT_PATTERN,
    LANGUAGE_ADJUSTMENTS,
    MAX_SCORE,
    MIN_SCORE,
    MONITORING_NAME_MARKERS,
    PACKAGE_FILES,
    PROJECT_TYPE_ADJUSTMENTS,
    PUBLIC_INTERFACE_DIRS,
    PUBLIC_INTERFACE_NAME_MARKERS,
    PUBLIC_INTERFACE_PATTERNS,
    ROLE_REASONS,
    ROLE_SCORES,
    SCHEMA_NAME_MARKERS,
    SECURITY_NAME_MARKERS,
    SOURCE_EXTENSION_BONUS,
    SOURCE_EXTENSIONS,
    TEST_PENALTY,
    UTILITY_DIRS,
    UTILITY_NAME_MARKERS,
)
from core.log import get_logger
from core.models import (
    ClassificationRecommendation,
    FileCharacteristics,
    FileClassification,
    FileEntry,
    FileIndexEntry,
    ImportanceScore,
    PathInfo,
    ScoringRule,
)
from models import (
    ArchitecturalRole,
    CharacteristicBonus,
    FileType,
    ImportanceCategory,
    ProjectType,
    RecommendationPriority,
    RecommendationType,
)


@dataclass(frozen=True)
class ClassifierOptions:
    """
    Options that bias the priority classifier.

    Attributes:
        custom_scoring_rules: Caller-supplied rules; every matching rule applies.
        project_type: Project archetype used for project-type adjustments.
        primary_language: Language name used for language adjustments
            (case-insensitive).
        framework: Framework name used for framework adjustments
            (case-insensitive). Empty means no framework adjustment.
        enable_content_analysis: If False, content never adds a complexity bonus.
    """

    custom_scoring_rules: tuple[ScoringRule, ...] = ()
    project_type: ProjectType = ProjectType.WEB_APP
    primary_language: str = "javascript"
    framework: str = ""
    enable_content_analysis: bool = True


class FilePriorityClassifier:
    """
    Scores files by architectural importance.

    Attributes:
        options: The classifier options.
        logger: Logger used for debug output of each classification.
    """

    def __init__(
        self,
        options: Optional[ClassifierOptions] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.options = options or ClassifierOptions()
        self.logger = logger or get_logger("classifier")

    def classify_file(
        self,
        path: str,
        content: Optional[str] = None,
        type: Optional[FileType] = None,
    ) -> FileClassification:
        """
        Classify a file and determine its importance.

        Args:
            path: "/"-separated path of the file.
            content: Optional text content. Content-based predicates are False
                when it is None or empty.
            type: Optional declared file type.

        Returns:
            FileClassification with importance, characteristics and
            recommendations.
        """
        info = PathInfo(path)
        characteristics = self._analyze_characteristics(info, content, type)

        score = self._calculate_base_score(info, characteristics)
        score += self._project_type_adjustment(characteristics)
        score += self._language_framework_adjustment(info)

        matched_rules = [
            rule for rule in self.options.custom_scoring_rules if rule.matches(path)
        ]
        score += sum(rule.score_adjustment for rule in matched_rules)

        if self.options.enable_content_analysis and content:
            score += self._content_complexity(content, info.extension)

        score = min(max(score, MIN_SCORE), MAX_SCORE)

        reasons = self._build_reasons(characteristics)
        reasons.extend(rule.reason for rule in matched_rules)

        importance = ImportanceScore(
            score=score,
            reasons=tuple(reasons),
            category=DETAILED_THRESHOLDS.categorize(score),
        )

        self.logger.debug(
            "Classified %s: score=%d category=%s role=%s",
            path,
            importance.score,
            importance.category,
            characteristics.architectural_role,
        )

        return FileClassification(
            importance=importance,
            characteristics=characteristics,
            recommendations=self._generate_recommendations(characteristics),
        )

    def batch_classify(self, files: Iterable[FileEntry]) -> list[FileClassification]:
        """Classify each file, preserving input order."""
        return [self.classify_file(f.path, f.content, f.type) for f in files]

    def get_top_priority_files(
        self, entries: list[FileIndexEntry], limit: int = DEFAULT_TOP_PRIORITY_LIMIT
    ) -> list[FileIndexEntry]:
        return get_top_priority_files(entries, limit)

    # ------------------------------------------------------------------
    # Characteristics
    # ------------------------------------------------------------------

    def _analyze_characteristics(
        self, info: PathInfo, content: Optional[str], type: Optional[FileType]
    ) -> FileCharacteristics:
        return FileCharacteristics(
            is_entry_point=_is_entry_point(info),
            is_configuration=_is_configuration(info, type),
            is_package_definition=info.name in PACKAGE_FILES,
            is_schema=_is_schema(info),
            is_infrastructure=_is_infrastructure(info),
            is_test=_is_test(info),
            is_documentation=_is_documentation(info, type),
            is_generated=_is_generated(info, content),
            has_complex_logic=_has_complex_logic(content),
            has_external_dependencies=_has_external_dependencies(content),
            is_public_interface=_is_public_interface(info, content),
            architectural_role=_determine_role(info, type),
        )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _calculate_base_score(
        self, info: PathInfo, characteristics: FileCharacteristics
    ) -> int:
        score = _sum_bonuses(CHARACTERISTIC_WEIGHTS, characteristics)
        score += ROLE_SCORES[characteristics.architectural_role]

        if info.extension in SOURCE_EXTENSIONS:
            score += SOURCE_EXTENSION_BONUS

        if characteristics.is_test:
            score -= TEST_PENALTY
        if characteristics.is_generated:
            score -= GENERATED_PENALTY
        if characteristics.is_documentation and not characteristics.is_schema:
            score -= DOCUMENTATION_PENALTY

        return score

    def _project_type_adjustment(self, characteristics: FileCharacteristics) -> int:
        bonuses = PROJECT_TYPE_ADJUSTMENTS.get(self.options.project_type, ())
        return _sum_bonuses(bonuses, characteristics)

    def _language_framework_adjustment(self, info: PathInfo) -> int:
        language_bonuses = LANGUAGE_ADJUSTMENTS.get(
            self.options.primary_language.lower(), ()
        )
        framework_bonuses = FRAMEWORK_ADJUSTMENTS.get(self.options.framework.lower(), ())

        return sum(
            bonus.bonus
            for bonus in (*language_bonuses, *framework_bonuses)
            if bonus.matches(info.name)
        )

    def _content_complexity(self, content: str, extension: str) -> int:
        complexity = 0

        line_count = content.count("\n") + 1
        if line_count > 500:
            complexity += 15
        elif line_count > 200:
            complexity += 10
        elif line_count > 100:
            complexity += 5

        if extension in COMPLEXITY_EXTENSIONS:
            functions = len(FUNCTION_DECLARATION_PATTERN.findall(content))
            if functions > 20:
                complexity += 10
            elif functions > 10:
                complexity += 5

            classes = len(CLASS_DECLARATION_PATTERN.findall(content))
            if classes > 5:
                complexity += 10
            elif classes > 2:
                complexity += 5

            if len(IMPORT_PATTERN.findall(content)) > 20:
                complexity += 5

        return min(complexity, CONTENT_COMPLEXITY_CAP)

    def _build_reasons(self, characteristics: FileCharacteristics) -> list[str]:
        reasons = [
            reason
            for attribute, reason in CHARACTERISTIC_REASONS
            if getattr(characteristics, attribute)
        ]

        role_reason = ROLE_REASONS.get(characteristics.architectural_role)
        if role_reason:
            reasons.append(role_reason)

        if characteristics.is_test:
            reasons.append("Test file (lower priority)")
        if characteristics.is_generated:
            reasons.append("Generated file (lower priority)")
        if characteristics.is_documentation and not characteristics.is_schema:
            reasons.append("Documentation file")

        return reasons

    def _generate_recommendations(
        self, characteristics: FileCharacteristics
    ) -> tuple[ClassificationRecommendation, ...]:
        recommendations: list[ClassificationRecommendation] = []

        if characteristics.is_entry_point or characteristics.is_package_definition:
            recommendations.append(
                ClassificationRecommendation(
                    type=RecommendationType.ANALYSIS,
                    priority=RecommendationPriority.HIGH,
                    description="Critical file for understanding application structure",
                    action="Analyze first for tech stack detection",
                )
            )

        if characteristics.is_schema:
            recommendations.append(
                ClassificationRecommendation(
                    type=RecommendationType.GENERATION,
                    priority=RecommendationPriority.HIGH,
                    description="API schema affects infrastructure requirements",
                    action="Use for API gateway and service mesh configuration",
                )
            )

        if characteristics.is_infrastructure:
            recommendations.append(
                ClassificationRecommendation(
                    type=RecommendationType.ANALYSIS,
                    priority=RecommendationPriority.MEDIUM,
                    description="Existing infrastructure configuration",
                    action="Analyze for current deployment patterns",
                )
            )

        if characteristics.has_complex_logic:
            recommendations.append(
                ClassificationRecommendation(
                    type=RecommendationType.MONITORING,
                    priority=RecommendationPriority.MEDIUM,
                    description="Complex logic may need monitoring",
                    action="Consider performance monitoring and logging",
                )
            )

        if characteristics.architectural_role == ArchitecturalRole.SECURITY:
            recommendations.append(
                ClassificationRecommendation(
                    type=RecommendationType.SECURITY,
                    priority=RecommendationPriority.HIGH,
                    description="Security-related component",
                    action="Apply security best practices in generated configs",
                )
            )

        return tuple(recommendations)


def get_top_priority_files(
    entries: list[FileIndexEntry], limit: int = DEFAULT_TOP_PRIORITY_LIMIT
) -> list[FileIndexEntry]:
    """
    Select the most important entries.

    Keeps entries categorized critical or important, sorts them by score
    (descending, stable for ties) and truncates to `limit`. The input list is
    not modified.

    Args:
        entries: Index entries to select from.
        limit: Maximum number of entries to return.

    Returns:
        A new list of at most `limit` entries.
    """
    selected = [
        entry
        for entry in entries
        if entry.importance.category
        in (ImportanceCategory.CRITICAL, ImportanceCategory.IMPORTANT)
    ]
    selected = sorted(selected, key=lambda e: e.importance.score, reverse=True)
    return selected[: max(limit, 0)]


def _sum_bonuses(
    bonuses: Iterable[CharacteristicBonus], characteristics: FileCharacteristics
) -> int:
    return sum(
        bonus.bonus
        for bonus in bonuses
        if getattr(characteristics, bonus.attribute) == bonus.expected
    )


def _is_entry_point(info: PathInfo) -> bool:
    return info.name in ENTRY_POINT_FILES or info.name.endswith("Application.java")


def _is_configuration(info: PathInfo, type: Optional[FileType]) -> bool:
    if type == FileType.CONFIG:
        return True
    return any(pattern.search(info.name) for pattern in CONFIG_FILE_PATTERNS)


def _is_schema(info: PathInfo) -> bool:
    return (
        info.name_contains(SCHEMA_NAME_MARKERS)
        or "schema" in info.parents
        or info.name.endswith(CLASSIFIER_SCHEMA_SUFFIXES)
    )


def _is_infrastructure(info: PathInfo) -> bool:
    return (
        info.name_contains(CLASSIFIER_INFRA_NAME_MARKERS)
        or info.name in CLASSIFIER_INFRA_FILE_NAMES
        or info.in_dir(CLASSIFIER_INFRA_DIRS)
    )


def _is_test(info: PathInfo) -> bool:
    return (
        info.name_contains(CLASSIFIER_TEST_NAME_MARKERS)
        or info.name.endswith(CLASSIFIER_TEST_NAME_SUFFIXES)
        or info.in_dir(CLASSIFIER_TEST_DIRS)
    )


def _is_documentation(info: PathInfo, type: Optional[FileType]) -> bool:
    if type == FileType.DOCUMENTATION:
        return True
    return info.name.endswith(CLASSIFIER_DOC_SUFFIXES) or info.in_dir(
        CLASSIFIER_DOC_DIRS
    )


def _is_generated(info: PathInfo, content: Optional[str]) -> bool:
    if info.name_contains(CLASSIFIER_GENERATED_NAME_MARKERS) or info.in_dir(
        CLASSIFIER_GENERATED_DIRS
    ):
        return True
    if content:
        return any(marker in content for marker in CLASSIFIER_GENERATED_CONTENT_MARKERS)
    return False


def _has_complex_logic(content: Optional[str]) -> bool:
    if not content:
        return False
    matches = sum(len(pattern.findall(content)) for pattern in COMPLEX_LOGIC_PATTERNS)
    return matches > COMPLEX_LOGIC_THRESHOLD


def _has_external_dependencies(content: Optional[str]) -> bool:
    if not content:
        return False
    return any(pattern.search(content) for pattern in EXTERNAL_DEPENDENCY_PATTERNS)


def _is_public_interface(info: PathInfo, content: Optional[str]) -> bool:
    if info.name_contains(PUBLIC_INTERFACE_NAME_MARKERS) or info.in_dir(
        PUBLIC_INTERFACE_DIRS
    ):
        return True
    if content:
        return any(pattern.search(content) for pattern in PUBLIC_INTERFACE_PATTERNS)
    return False


def _determine_role(info: PathInfo, type: Optional[FileType]) -> ArchitecturalRole:
    """Return the first matching architectural role."""
    if _is_infrastructure(info):
        return ArchitecturalRole.INFRASTRUCTURE
    if info.name_contains(DEPLOYMENT_NAME_MARKERS) or info.in_dir(DEPLOYMENT_DIRS):
        return ArchitecturalRole.DEPLOYMENT
    if info.name_contains(BUILD_SYSTEM_NAME_MARKERS):
        return ArchitecturalRole.BUILD_SYSTEM
    if _is_configuration(info, type):
        return ArchitecturalRole.CONFIGURATION
    if _is_test(info):
        return ArchitecturalRole.TESTING
    if _is_documentation(info, type):
        return ArchitecturalRole.DOCUMENTATION
    if (
        info.name_contains(API_NAME_MARKERS)
        or info.in_dir(API_DIRS)
        or _is_schema(info)
    ):
        return ArchitecturalRole.API_INTERFACE
    if info.name_contains(DATA_ACCESS_NAME_MARKERS) or info.in_dir(DATA_ACCESS_DIRS):
        return ArchitecturalRole.DATA_ACCESS
    if info.name_contains(SECURITY_NAME_MARKERS):
        return ArchitecturalRole.SECURITY
    if info.name_contains(MONITORING_NAME_MARKERS):
        return ArchitecturalRole.MONITORING
    if info.name_contains(UTILITY_NAME_MARKERS) or info.in_dir(UTILITY_DIRS):
        return ArchitecturalRole.UTILITY
    if type == FileType.SOURCE and not _is_test(info):
        return ArchitecturalRole.CORE_BUSINESS_LOGIC
    return ArchitecturalRole.UNKNOWN
