"""
Custom exception classes for the indexer.

This module defines the structured error convention shared by every component:
an `InfrastructureError` carries a stable string code, a category tag, a
recoverability flag, human-readable suggestions, optional partial results and
fallback options. Category subclasses preset the category and the default
recoverability.

It also defines the file I/O exceptions raised by `core.file_io`, and helper
functions that turn arbitrary exceptions into the structured shape for
reporting.
"""

import logging
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any, Final, Mapping, Optional

from core.log import get_logger
from models import ErrorCategory


class ErrorCode(StrEnum):
    # Analysis errors
    CODEBASE_PARSING_FAILED = "CODEBASE_PARSING_FAILED"
    TECH_STACK_DETECTION_FAILED = "TECH_STACK_DETECTION_FAILED"
    DEPENDENCY_ANALYSIS_FAILED = "DEPENDENCY_ANALYSIS_FAILED"
    ARCHITECTURE_DETECTION_FAILED = "ARCHITECTURE_DETECTION_FAILED"
    FILE_INDEXING_FAILED = "FILE_INDEXING_FAILED"
    AST_PARSING_FAILED = "AST_PARSING_FAILED"

    # Generation errors
    DOCKER_GENERATION_FAILED = "DOCKER_GENERATION_FAILED"
    KUBERNETES_GENERATION_FAILED = "KUBERNETES_GENERATION_FAILED"
    CICD_GENERATION_FAILED = "CICD_GENERATION_FAILED"
    CONFIG_GENERATION_FAILED = "CONFIG_GENERATION_FAILED"
    TEMPLATE_RENDERING_FAILED = "TEMPLATE_RENDERING_FAILED"

    # Validation errors
    INVALID_CODEBASE_INPUT = "INVALID_CODEBASE_INPUT"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"

    # Integration errors
    REPOSITORY_ACCESS_FAILED = "REPOSITORY_ACCESS_FAILED"
    FILE_UPLOAD_FAILED = "FILE_UPLOAD_FAILED"
    EXTERNAL_SERVICE_UNAVAILABLE = "EXTERNAL_SERVICE_UNAVAILABLE"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # Recommendation errors
    COST_CALCULATION_FAILED = "COST_CALCULATION_FAILED"
    RESOURCE_ESTIMATION_FAILED = "RESOURCE_ESTIMATION_FAILED"
    RECOMMENDATION_GENERATION_FAILED = "RECOMMENDATION_GENERATION_FAILED"
    OPTIMIZATION_FAILED = "OPTIMIZATION_FAILED"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Default message of each error code, used when an error is raised without one.
ERROR_MESSAGES: Final[Mapping[ErrorCode, str]] = {
    ErrorCode.CODEBASE_PARSING_FAILED: "Failed to parse the uploaded codebase",
    ErrorCode.TECH_STACK_DETECTION_FAILED: "Unable to detect the technology stack",
    ErrorCode.DEPENDENCY_ANALYSIS_FAILED: "Failed to analyze project dependencies",
    ErrorCode.ARCHITECTURE_DETECTION_FAILED: "Could not determine the application architecture",
    ErrorCode.FILE_INDEXING_FAILED: "Failed to index project files",
    ErrorCode.AST_PARSING_FAILED: "Abstract syntax tree parsing failed",
    ErrorCode.DOCKER_GENERATION_FAILED: "Failed to generate Docker configuration",
    ErrorCode.KUBERNETES_GENERATION_FAILED: "Failed to generate Kubernetes manifests",
    ErrorCode.CICD_GENERATION_FAILED: "Failed to generate CI/CD pipeline configuration",
    ErrorCode.CONFIG_GENERATION_FAILED: "Configuration generation failed",
    ErrorCode.TEMPLATE_RENDERING_FAILED: "Template rendering failed",
    ErrorCode.INVALID_CODEBASE_INPUT: "Invalid codebase input provided",
    ErrorCode.INVALID_CONFIGURATION: "Invalid configuration detected",
    ErrorCode.VALIDATION_FAILED: "Validation failed",
    ErrorCode.SCHEMA_VALIDATION_FAILED: "Schema validation failed",
    ErrorCode.REPOSITORY_ACCESS_FAILED: "Failed to access the repository",
    ErrorCode.FILE_UPLOAD_FAILED: "File upload failed",
    ErrorCode.EXTERNAL_SERVICE_UNAVAILABLE: "External service is unavailable",
    ErrorCode.API_REQUEST_FAILED: "API request failed",
    ErrorCode.AUTHENTICATION_FAILED: "Authentication failed",
    ErrorCode.COST_CALCULATION_FAILED: "Cost calculation failed",
    ErrorCode.RESOURCE_ESTIMATION_FAILED: "Resource estimation failed",
    ErrorCode.RECOMMENDATION_GENERATION_FAILED: "Failed to generate recommendations",
    ErrorCode.OPTIMIZATION_FAILED: "Optimization process failed",
    ErrorCode.UNKNOWN_ERROR: "An unknown error occurred",
}


@dataclass(frozen=True)
class FallbackOption:
    type: str
    description: str
    action: str


FALLBACK_OPTIONS: Final[Mapping[str, FallbackOption]] = {
    "retry_with_defaults": FallbackOption(
        "retry", "Retry with default configuration", "retry_with_defaults"
    ),
    "manual_configuration": FallbackOption(
        "manual", "Proceed with manual configuration", "manual_config"
    ),
    "skip_step": FallbackOption("skip", "Skip this step and continue", "skip_step"),
    "use_basic_template": FallbackOption(
        "template", "Use basic template instead", "use_basic_template"
    ),
    "contact_support": FallbackOption(
        "support", "Contact support for assistance", "contact_support"
    ),
}


class InfrastructureError(Exception):
    """
    Base exception for every structured error raised by the application.

    Attributes:
        code: Stable machine-readable error code (e.g., "FILE_INDEXING_FAILED").
        message: A human-readable error message. Defaults to the code's entry in
            ERROR_MESSAGES.
        category: Which stage of the pipeline failed.
        recoverable: True if the caller may retry or continue with a fallback.
        suggestions: Human-readable hints for resolving the error.
        partial_results: Whatever was computed before the failure, if anything.
        fallback_options: Alternative courses of action offered to the caller.
    """

    default_category: ErrorCategory = ErrorCategory.ANALYSIS
    default_recoverable: bool = False

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        category: Optional[ErrorCategory] = None,
        recoverable: Optional[bool] = None,
        suggestions: Optional[list[str]] = None,
        partial_results: Any = None,
        fallback_options: Optional[list[FallbackOption]] = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(
            code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR]
        )
        super().__init__(self.message)
        self.category = category if category is not None else self.default_category
        self.recoverable = (
            recoverable if recoverable is not None else self.default_recoverable
        )
        self.suggestions = list(suggestions or [])
        self.partial_results = partial_results
        self.fallback_options = list(fallback_options or [])

    def to_error_response(self, context: Optional[str] = None) -> dict[str, Any]:
        """
        Convert the error to the response shape used by reporting layers.

        Args:
            context: Optional prefix for the message (e.g., the operation name).

        Returns:
            A dictionary with "error", "partialResults" and "fallbackOptions" keys.
        """
        message = f"{context}: {self.message}" if context else self.message
        return {
            "error": {
                "code": str(self.code),
                "message": message,
                "category": str(self.category),
                "recoverable": self.recoverable,
                "suggestions": list(self.suggestions),
            },
            "partialResults": self.partial_results,
            "fallbackOptions": [asdict(option) for option in self.fallback_options],
        }


class AnalysisError(InfrastructureError):
    default_category = ErrorCategory.ANALYSIS
    default_recoverable = False


class GenerationError(InfrastructureError):
    default_category = ErrorCategory.GENERATION
    default_recoverable = False


class ValidationError(InfrastructureError):
    default_category = ErrorCategory.VALIDATION
    default_recoverable = True


class IntegrationError(InfrastructureError):
    default_category = ErrorCategory.INTEGRATION
    default_recoverable = True


class RecommendationError(InfrastructureError):
    default_category = ErrorCategory.RECOMMENDATION
    default_recoverable = True


class FileIndexingError(AnalysisError):
    """
    Raised when a codebase cannot be indexed at all.

    This is the indexer's only fatal failure: it is raised when no files are
    supplied, or when post-processing fails unexpectedly. Per-file problems are
    never raised; they are reported in the run's errors and warnings.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        suggestions: Optional[list[str]] = None,
        partial_results: Any = None,
    ):
        super().__init__(
            ErrorCode.FILE_INDEXING_FAILED,
            message=message,
            recoverable=False,
            suggestions=suggestions,
            partial_results=partial_results,
        )


_CATEGORY_ERRORS: Final[Mapping[ErrorCategory, type[InfrastructureError]]] = {
    ErrorCategory.ANALYSIS: AnalysisError,
    ErrorCategory.GENERATION: GenerationError,
    ErrorCategory.VALIDATION: ValidationError,
    ErrorCategory.INTEGRATION: IntegrationError,
    ErrorCategory.RECOMMENDATION: RecommendationError,
}


def from_unknown_error(
    error: object,
    category: ErrorCategory = ErrorCategory.ANALYSIS,
    default_code: str = ErrorCode.UNKNOWN_ERROR,
) -> InfrastructureError:
    """
    Convert any raised object into an InfrastructureError.

    InfrastructureErrors are returned unchanged. Other exceptions keep their
    message; anything else becomes a generic unknown error. The result is never
    recoverable.

    Args:
        error: The object that was raised.
        category: Category assigned to the converted error.
        default_code: Code assigned to the converted error.

    Returns:
        An InfrastructureError describing `error`.
    """
    if isinstance(error, InfrastructureError):
        return error

    error_cls = _CATEGORY_ERRORS[category]
    if isinstance(error, Exception):
        return error_cls(
            default_code,
            message=str(error) or type(error).__name__,
            recoverable=False,
            suggestions=["Check the error details and try again"],
        )

    return error_cls(
        default_code,
        message="An unknown error occurred",
        recoverable=False,
        suggestions=["Check the system logs for more details"],
    )


def handle_error(error: object, context: Optional[str] = None) -> dict[str, Any]:
    """Format any raised object as an error response, optionally prefixed with context."""
    return from_unknown_error(error).to_error_response(context)


def is_recoverable(error: object) -> bool:
    if isinstance(error, InfrastructureError):
        return error.recoverable
    return False


def get_suggestions(error: object) -> list[str]:
    if isinstance(error, InfrastructureError):
        return list(error.suggestions)
    return ["Check the error details and try again"]


def get_fallback_options(error: object) -> list[FallbackOption]:
    if isinstance(error, InfrastructureError):
        return list(error.fallback_options)
    return [
        FALLBACK_OPTIONS["retry_with_defaults"],
        FALLBACK_OPTIONS["contact_support"],
    ]


def log_error(error: object, logger: Optional[logging.Logger] = None) -> None:
    """
    Log an error at ERROR level with a prefix that depends on its kind.

    Args:
        error: The object that was raised.
        logger: Logger to write to. Defaults to the "errors" component logger.
    """
    log = logger if logger is not None else get_logger("errors")

    if isinstance(error, InfrastructureError):
        log.error(
            "[%s] %s: %s",
            str(error.category).upper(),
            error.code,
            error.message,
            exc_info=error,
        )
    elif isinstance(error, Exception):
        log.error("Unexpected error: %s", error, exc_info=error)
    else:
        log.error("Unknown error: %s", error)


class FileIOError(Exception):
    """
    Base exception for file read/write errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path of the file involved, if known.
        original_exception: The underlying exception that caused this error, if any.
    """

    default_message = "An error occurred during file I/O operation"

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception


class InvalidFilePathError(FileIOError):
    """Raised when a path cannot be used (no path set, missing or read-only parent)."""

    default_message = "Invalid file path provided"


class FileReadError(FileIOError):
    """Raised when an existing file cannot be read."""

    default_message = "Failed to read file"


class FileWriteError(FileIOError):
    """Raised when data cannot be written to a file."""

    default_message = "Failed to write to file"
