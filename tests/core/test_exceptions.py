"""
Tests for the exceptions module.

Tests cover:
- InfrastructureError and its category subclasses
- FileIndexingError
- to_error_response
- from_unknown_error, handle_error, is_recoverable, get_suggestions,
  get_fallback_options, log_error
- File I/O exceptions
"""

import logging

import pytest

from core.exceptions import (
    FALLBACK_OPTIONS,
    AnalysisError,
    ErrorCode,
    FileIndexingError,
    FileIOError,
    FileReadError,
    FileWriteError,
    GenerationError,
    InfrastructureError,
    IntegrationError,
    InvalidFilePathError,
    RecommendationError,
    ValidationError,
    from_unknown_error,
    get_fallback_options,
    get_suggestions,
    handle_error,
    is_recoverable,
    log_error,
)
from models import ErrorCategory


# ============================================================================
# Tests for InfrastructureError and subclasses
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "error_cls,category,recoverable",
    [
        (AnalysisError, ErrorCategory.ANALYSIS, False),
        (GenerationError, ErrorCategory.GENERATION, False),
        (ValidationError, ErrorCategory.VALIDATION, True),
        (IntegrationError, ErrorCategory.INTEGRATION, True),
        (RecommendationError, ErrorCategory.RECOMMENDATION, True),
    ],
)
def test_category_subclass_defaults(error_cls, category, recoverable):
    """Should preset the category and default recoverability."""
    error = error_cls(ErrorCode.VALIDATION_FAILED)

    assert isinstance(error, InfrastructureError)
    assert error.category == category
    assert error.recoverable is recoverable


@pytest.mark.unit
def test_default_message_from_code():
    """Should use the code's default message when none is given."""
    error = AnalysisError(ErrorCode.FILE_INDEXING_FAILED)

    assert error.message == "Failed to index project files"
    assert str(error) == "Failed to index project files"


@pytest.mark.unit
def test_unknown_code_uses_unknown_message():
    """Should fall back to the unknown error message for unknown codes."""
    error = InfrastructureError("SOMETHING_ELSE")

    assert error.code == "SOMETHING_ELSE"
    assert error.message == "An unknown error occurred"


@pytest.mark.unit
def test_explicit_values_override_defaults():
    """Should keep explicitly passed values."""
    error = ValidationError(
        ErrorCode.INVALID_CONFIGURATION,
        message="Bad settings",
        recoverable=False,
        suggestions=["Fix it"],
        partial_results={"done": 1},
        fallback_options=[FALLBACK_OPTIONS["skip_step"]],
    )

    assert error.message == "Bad settings"
    assert error.recoverable is False
    assert error.suggestions == ["Fix it"]
    assert error.partial_results == {"done": 1}
    assert error.fallback_options == [FALLBACK_OPTIONS["skip_step"]]


@pytest.mark.unit
def test_file_indexing_error():
    """Should be a non-recoverable analysis error with its own code."""
    error = FileIndexingError(
        message="File indexing failed: nope",
        suggestions=["Check file permissions"],
        partial_results={"processed_files": 0},
    )

    assert isinstance(error, AnalysisError)
    assert error.code == ErrorCode.FILE_INDEXING_FAILED
    assert error.category == ErrorCategory.ANALYSIS
    assert error.recoverable is False
    assert error.partial_results == {"processed_files": 0}


# ============================================================================
# Tests for to_error_response
# ============================================================================


@pytest.mark.unit
def test_to_error_response():
    """Should convert the error to the response shape."""
    error = IntegrationError(
        ErrorCode.REPOSITORY_ACCESS_FAILED,
        suggestions=["Check the URL"],
        partial_results=[1, 2],
        fallback_options=[FALLBACK_OPTIONS["retry_with_defaults"]],
    )

    response = error.to_error_response()

    assert response == {
        "error": {
            "code": "REPOSITORY_ACCESS_FAILED",
            "message": "Failed to access the repository",
            "category": "integration",
            "recoverable": True,
            "suggestions": ["Check the URL"],
        },
        "partialResults": [1, 2],
        "fallbackOptions": [
            {
                "type": "retry",
                "description": "Retry with default configuration",
                "action": "retry_with_defaults",
            }
        ],
    }


@pytest.mark.unit
def test_to_error_response_with_context():
    """Should prefix the message with the context."""
    error = AnalysisError(ErrorCode.AST_PARSING_FAILED)

    response = error.to_error_response("Parsing src/index.ts")

    assert response["error"]["message"] == (
        "Parsing src/index.ts: Abstract syntax tree parsing failed"
    )


# ============================================================================
# Tests for helper functions
# ============================================================================


@pytest.mark.unit
def test_from_unknown_error_returns_infrastructure_errors_unchanged():
    """Should not wrap structured errors."""
    error = ValidationError(ErrorCode.VALIDATION_FAILED)

    assert from_unknown_error(error) is error


@pytest.mark.unit
def test_from_unknown_error_wraps_exceptions():
    """Should keep the message of ordinary exceptions."""
    error = from_unknown_error(KeyError("missing"), ErrorCategory.GENERATION)

    assert isinstance(error, GenerationError)
    assert error.code == ErrorCode.UNKNOWN_ERROR
    assert error.message == "'missing'"
    assert error.recoverable is False
    assert error.suggestions == ["Check the error details and try again"]


@pytest.mark.unit
def test_from_unknown_error_empty_exception_message():
    """Should use the exception type name when the message is empty."""
    error = from_unknown_error(RuntimeError())

    assert isinstance(error, AnalysisError)
    assert error.message == "RuntimeError"


@pytest.mark.unit
def test_from_unknown_error_non_exception():
    """Should describe non-exception values as unknown errors."""
    error = from_unknown_error("weird")

    assert error.message == "An unknown error occurred"
    assert error.suggestions == ["Check the system logs for more details"]


@pytest.mark.unit
def test_from_unknown_error_custom_code():
    """Should use the given default code."""
    error = from_unknown_error(
        ValueError("bad"), default_code=ErrorCode.CODEBASE_PARSING_FAILED
    )

    assert error.code == ErrorCode.CODEBASE_PARSING_FAILED


@pytest.mark.unit
def test_handle_error():
    """Should format any error as a response."""
    response = handle_error(ValueError("bad input"), "Indexing")

    assert response["error"]["message"] == "Indexing: bad input"
    assert response["error"]["code"] == "UNKNOWN_ERROR"
    assert response["error"]["recoverable"] is False
    assert response["fallbackOptions"] == []


@pytest.mark.unit
def test_is_recoverable():
    """Should only report structured recoverable errors as recoverable."""
    assert is_recoverable(ValidationError(ErrorCode.VALIDATION_FAILED))
    assert not is_recoverable(AnalysisError(ErrorCode.AST_PARSING_FAILED))
    assert not is_recoverable(ValueError("x"))


@pytest.mark.unit
def test_get_suggestions():
    """Should return the error's suggestions or a generic one."""
    error = ValidationError(ErrorCode.VALIDATION_FAILED, suggestions=["A", "B"])

    assert get_suggestions(error) == ["A", "B"]
    assert get_suggestions(ValueError("x")) == ["Check the error details and try again"]


@pytest.mark.unit
def test_get_fallback_options():
    """Should return the error's options or retry and support."""
    error = GenerationError(
        ErrorCode.TEMPLATE_RENDERING_FAILED,
        fallback_options=[FALLBACK_OPTIONS["use_basic_template"]],
    )

    assert get_fallback_options(error) == [FALLBACK_OPTIONS["use_basic_template"]]
    assert get_fallback_options(ValueError("x")) == [
        FALLBACK_OPTIONS["retry_with_defaults"],
        FALLBACK_OPTIONS["contact_support"],
    ]


@pytest.mark.unit
def test_log_error_infrastructure_error(caplog):
    """Should log structured errors with their category and code."""
    caplog.set_level(logging.ERROR, logger="autoinfra")

    log_error(ValidationError(ErrorCode.INVALID_CONFIGURATION))

    assert "[VALIDATION] INVALID_CONFIGURATION: Invalid configuration detected" in (
        caplog.text
    )


@pytest.mark.unit
def test_log_error_other_values(caplog):
    """Should log other exceptions and values with their own prefixes."""
    caplog.set_level(logging.ERROR, logger="autoinfra")

    log_error(ValueError("bad"))
    log_error(42)

    assert "Unexpected error: bad" in caplog.text
    assert "Unknown error: 42" in caplog.text


@pytest.mark.unit
@pytest.mark.mock
def test_log_error_uses_given_logger(mocker):
    """Should write to the given logger."""
    logger = mocker.Mock()

    log_error(ValueError("bad"), logger)

    logger.error.assert_called_once()


# ============================================================================
# Tests for file I/O exceptions
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "error_cls,default_message",
    [
        (FileIOError, "An error occurred during file I/O operation"),
        (InvalidFilePathError, "Invalid file path provided"),
        (FileReadError, "Failed to read file"),
        (FileWriteError, "Failed to write to file"),
    ],
)
def test_file_io_error_default_messages(error_cls, default_message):
    """Should use the class default message."""
    error = error_cls()

    assert isinstance(error, FileIOError)
    assert error.message == default_message
    assert error.file_path is None
    assert error.original_exception is None


@pytest.mark.unit
def test_file_io_error_attributes():
    """Should keep the path and the original exception."""
    cause = PermissionError("denied")

    error = FileWriteError("Cannot write", file_path="/tmp/x", original_exception=cause)

    assert str(error) == "Cannot write"
    assert error.file_path == "/tmp/x"
    assert error.original_exception is cause
