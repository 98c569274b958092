"""
Type definitions and data models used across the indexing application.

This module contains the shared enumerations and small rule records that are
used throughout the codebase. The enum values are the wire strings used in
reports and JSONL exports, and they are used as keys in the heuristic tables
defined in `constants.py`.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal


class FileType(StrEnum):
    """Coarse type of a file in the uploaded codebase."""

    PACKAGE = "package"
    CONFIG = "config"
    SOURCE = "source"
    TEST = "test"
    DOCUMENTATION = "documentation"
    ASSET = "asset"
    BUILD = "build"
    SCHEMA = "schema"


class ImportanceCategory(StrEnum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    NORMAL = "normal"
    IGNORE = "ignore"


class ArchitecturalRole(StrEnum):
    """
    Architectural role of a file in the project.

    Exactly one role is assigned per file. The order in which roles are checked
    lives in `core.classifier.FilePriorityClassifier`.
    """

    CORE_BUSINESS_LOGIC = "core-business-logic"
    DATA_ACCESS = "data-access"
    API_INTERFACE = "api-interface"
    CONFIGURATION = "configuration"
    INFRASTRUCTURE = "infrastructure"
    TESTING = "testing"
    DOCUMENTATION = "documentation"
    BUILD_SYSTEM = "build-system"
    DEPLOYMENT = "deployment"
    MONITORING = "monitoring"
    SECURITY = "security"
    UTILITY = "utility"
    UNKNOWN = "unknown"


class ProjectType(StrEnum):
    """
    Project archetypes that bias file prioritization.

    The values are used in user interfaces and prompts, and as keys in
    PROJECT_TYPE_ADJUSTMENTS.
    """

    WEB_APP = "web-app"
    API_SERVICE = "api-service"
    LIBRARY = "library"
    CLI_TOOL = "cli-tool"
    MOBILE_APP = "mobile-app"
    DESKTOP_APP = "desktop-app"
    MICROSERVICE = "microservice"
    MONOREPO = "monorepo"


class RecommendationType(StrEnum):
    ANALYSIS = "analysis"
    GENERATION = "generation"
    MONITORING = "monitoring"
    SECURITY = "security"


class RecommendationPriority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ErrorCategory(StrEnum):
    ANALYSIS = "analysis"
    GENERATION = "generation"
    VALIDATION = "validation"
    INTEGRATION = "integration"
    RECOMMENDATION = "recommendation"


class ScoringStrategy(StrEnum):
    """
    Importance scorer used by the indexer.

    FAST is the simple file-utility heuristic (thresholds 80/50/20).
    DETAILED runs the full priority classifier (thresholds 100/60/20).
    """

    FAST = "fast"
    DETAILED = "detailed"


@dataclass(frozen=True)
class CharacteristicBonus:
    """
    A score adjustment applied when a file characteristic has a given value.

    Attributes:
        attribute: Name of the FileCharacteristics field to inspect
            (e.g., "is_schema", "architectural_role").
        expected: The value that triggers the bonus (True for boolean flags,
            an ArchitecturalRole for the role field).
        bonus: Points added to the score on a match.
    """

    attribute: str
    expected: object
    bonus: int


@dataclass(frozen=True)
class FileNameBonus:
    """
    A score adjustment applied when a file name matches any of `values`.

    Attributes:
        match: How each value is compared with the file name.
        values: Candidate strings; any single match triggers the bonus once.
        bonus: Points added to the score on a match.
    """

    match: Literal["equals", "endswith", "contains"]
    values: tuple[str, ...]
    bonus: int

    def matches(self, file_name: str) -> bool:
        if self.match == "equals":
            return file_name in self.values
        if self.match == "endswith":
            return file_name.endswith(self.values)
        return any(value in file_name for value in self.values)
