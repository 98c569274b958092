"""
Downstream analysis stages that consume a CodebaseIndex.

Technology stack detection, dependency analysis and architecture detection are
not built yet. Their default implementations return a CapabilityResult with
status UNIMPLEMENTED instead of raising, so callers can tell "found nothing"
(EMPTY) from "not built" (UNIMPLEMENTED) and keep going.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional, Protocol

from core.models import CodebaseIndex


class CapabilityStatus(StrEnum):
    FOUND = "found"
    EMPTY = "empty"
    UNIMPLEMENTED = "unimplemented"


@dataclass(frozen=True)
class CapabilityResult:
    """
    Outcome of one analysis capability.

    Attributes:
        capability: Name of the capability (e.g., "tech_stack.language").
        status: Whether a value was found, nothing was found, or the capability
            does not exist yet.
        value: The detected value when status is FOUND.
        message: Human-readable detail for reports.
    """

    capability: str
    status: CapabilityStatus
    value: Any = None
    message: str = ""

    @classmethod
    def found(cls, capability: str, value: Any) -> "CapabilityResult":
        return cls(capability, CapabilityStatus.FOUND, value)

    @classmethod
    def empty(cls, capability: str, message: str = "") -> "CapabilityResult":
        return cls(capability, CapabilityStatus.EMPTY, message=message)

    @classmethod
    def unimplemented(
        cls, capability: str, message: Optional[str] = None
    ) -> "CapabilityResult":
        return cls(
            capability,
            CapabilityStatus.UNIMPLEMENTED,
            message=message or f"{capability} is not implemented yet",
        )

    @property
    def is_available(self) -> bool:
        return self.status != CapabilityStatus.UNIMPLEMENTED


class TechStackDetector(Protocol):
    def detect_language(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_framework(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_runtime(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_build_tools(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect(self, index: CodebaseIndex) -> CapabilityResult: ...


class DependencyAnalyzer(Protocol):
    def analyze_dependencies(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_databases(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_caches(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_message_queues(self, index: CodebaseIndex) -> CapabilityResult: ...

    def detect_external_services(self, index: CodebaseIndex) -> CapabilityResult: ...

    def build_dependency_graph(self, index: CodebaseIndex) -> CapabilityResult: ...


class ArchitectureDetector(Protocol):
    def detect_architecture_type(self, index: CodebaseIndex) -> CapabilityResult: ...

    def identify_services(self, index: CodebaseIndex) -> CapabilityResult: ...

    def analyze_communication_patterns(
        self, index: CodebaseIndex
    ) -> CapabilityResult: ...

    def detect_architecture(self, index: CodebaseIndex) -> CapabilityResult: ...


class DefaultTechStackDetector:
    def detect_language(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("tech_stack.language")

    def detect_framework(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("tech_stack.framework")

    def detect_runtime(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("tech_stack.runtime")

    def detect_build_tools(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("tech_stack.build_tools")

    def detect(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("tech_stack")


class DefaultDependencyAnalyzer:
    def analyze_dependencies(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies")

    def detect_databases(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies.databases")

    def detect_caches(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies.caches")

    def detect_message_queues(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies.message_queues")

    def detect_external_services(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies.external_services")

    def build_dependency_graph(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("dependencies.graph")


class DefaultArchitectureDetector:
    def detect_architecture_type(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("architecture.type")

    def identify_services(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("architecture.services")

    def analyze_communication_patterns(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("architecture.communication_patterns")

    def detect_architecture(self, index: CodebaseIndex) -> CapabilityResult:
        return CapabilityResult.unimplemented("architecture")


def run_downstream_capabilities(
    index: CodebaseIndex,
    tech_stack_detector: Optional[TechStackDetector] = None,
    dependency_analyzer: Optional[DependencyAnalyzer] = None,
    architecture_detector: Optional[ArchitectureDetector] = None,
) -> list[CapabilityResult]:
    """
    Run the top-level operation of every downstream stage on an index.

    Args:
        index: The codebase index to analyze.
        tech_stack_detector: Defaults to DefaultTechStackDetector.
        dependency_analyzer: Defaults to DefaultDependencyAnalyzer.
        architecture_detector: Defaults to DefaultArchitectureDetector.

    Returns:
        One result per stage: tech stack, dependencies, architecture.
    """
    tech_stack_detector = tech_stack_detector or DefaultTechStackDetector()
    dependency_analyzer = dependency_analyzer or DefaultDependencyAnalyzer()
    architecture_detector = architecture_detector or DefaultArchitectureDetector()

    return [
        tech_stack_detector.detect(index),
        dependency_analyzer.analyze_dependencies(index),
        architecture_detector.detect_architecture(index),
    ]
