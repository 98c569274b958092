"""
Tests for the prompts module.

Tests cover:
- select_project_type: selection and cancellation
- prompt_settings: defaults from saved settings, answer normalization, empty
  answers, cancellation
"""

import pytest
import typer

from models import ProjectType, ScoringStrategy
from ui.prompts import prompt_settings, select_project_type


@pytest.fixture
def mock_prompt(mocker):
    mocker.patch("ui.prompts.pr")
    return mocker.patch("ui.prompts.inquirer.prompt")


# ============================================================================
# Tests for select_project_type
# ============================================================================


@pytest.mark.unit
@pytest.mark.mock
def test_select_project_type(mock_prompt):
    """Should return the selected project type."""
    mock_prompt.return_value = {"project_type": "cli-tool"}

    assert select_project_type() == ProjectType.CLI_TOOL

    questions = mock_prompt.call_args.args[0]
    assert questions[0].name == "project_type"


@pytest.mark.unit
@pytest.mark.mock
def test_select_project_type_cancelled(mock_prompt):
    """Should exit when the prompt is cancelled."""
    mock_prompt.return_value = None

    with pytest.raises(typer.Exit):
        select_project_type()


# ============================================================================
# Tests for prompt_settings
# ============================================================================


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_defaults_from_current(mock_prompt):
    """Should prepopulate the questions with the saved values."""
    mock_prompt.return_value = {
        "project_type": ProjectType.LIBRARY,
        "primary_language": "python",
        "framework": "",
        "scoring_strategy": ScoringStrategy.DETAILED,
    }
    current = {"project_type": "library", "primary_language": "python"}

    prompt_settings(current)

    defaults = {q.name: q.default for q in mock_prompt.call_args.args[0]}
    assert defaults == {
        "project_type": "library",
        "primary_language": "python",
        "framework": "",
        "scoring_strategy": ScoringStrategy.FAST,
    }


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_normalizes_answers(mock_prompt):
    """Should store plain strings and clean up text answers."""
    mock_prompt.return_value = {
        "project_type": ProjectType.API_SERVICE,
        "primary_language": "  Python ",
        "framework": " django ",
        "scoring_strategy": ScoringStrategy.DETAILED,
    }

    settings = prompt_settings({"max_files": 500})

    assert settings == {
        "max_files": 500,
        "project_type": "api-service",
        "primary_language": "python",
        "framework": "django",
        "scoring_strategy": "detailed",
    }


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_empty_language_keeps_previous(mock_prompt):
    """Should keep the saved language when the answer is empty."""
    mock_prompt.return_value = {
        "project_type": ProjectType.WEB_APP,
        "primary_language": "",
        "framework": "",
        "scoring_strategy": ScoringStrategy.FAST,
    }

    settings = prompt_settings({"primary_language": "go"})

    assert settings["primary_language"] == "go"


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_empty_framework_clears_previous(mock_prompt):
    """Should drop the saved framework when the answer is empty."""
    mock_prompt.return_value = {
        "project_type": ProjectType.WEB_APP,
        "primary_language": "typescript",
        "framework": "  ",
        "scoring_strategy": ScoringStrategy.FAST,
    }

    settings = prompt_settings({"framework": "next"})

    assert settings["framework"] == ""


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_does_not_mutate_current(mock_prompt):
    """Should return a new dict."""
    mock_prompt.return_value = {
        "project_type": ProjectType.LIBRARY,
        "primary_language": "rust",
        "framework": "",
        "scoring_strategy": ScoringStrategy.FAST,
    }
    current = {"project_type": "web-app"}

    prompt_settings(current)

    assert current == {"project_type": "web-app"}


@pytest.mark.unit
@pytest.mark.mock
def test_prompt_settings_cancelled(mock_prompt):
    """Should exit with an error code when the prompt is cancelled."""
    mock_prompt.return_value = {}

    with pytest.raises(typer.Exit) as exc_info:
        prompt_settings({})

    assert exc_info.value.exit_code == 1
