"""Tests for debates module exceptions."""

import pytest

from shared.exceptions import InvalidTransitionError, NotFoundError
from modules.debates.exceptions import (
    ArgumentNotFoundError,
    DebateAlreadyFinishedError,
    DebateNotActiveError,
    DebateNotFoundError,
    DebateNotPausedError,
)


class TestDebateNotFoundError:
    def test_debate_not_found_error(self):
        """Should create not found error with debate ID."""
        error = DebateNotFoundError("debate-123")
        assert "Debate not found" in str(error)
        assert "debate-123" in str(error)
        assert error.code == "DEBATE_NOT_FOUND"
        assert error.details["debate_id"] == "debate-123"
        assert isinstance(error, NotFoundError)


class TestArgumentNotFoundError:
    def test_argument_not_found_error(self):
        error = ArgumentNotFoundError("arg-1", "debate-123")
        assert error.code == "ARGUMENT_NOT_FOUND"
        assert error.details == {"argument_id": "arg-1", "debate_id": "debate-123"}


@pytest.mark.parametrize(
    "error_class,code,message",
    [
        (DebateNotActiveError, "DEBATE_NOT_ACTIVE", "Can only pause active debates"),
        (DebateNotPausedError, "DEBATE_NOT_PAUSED", "Can only resume paused debates"),
        (DebateAlreadyFinishedError, "DEBATE_ALREADY_FINISHED", "Debate already finished"),
    ],
)
def test_transition_errors(error_class, code, message):
    error = error_class("debate-123", "completed")

    assert isinstance(error, InvalidTransitionError)
    assert error.code == code
    assert message in error.message
    assert error.to_dict()["details"] == {"debate_id": "debate-123", "status": "completed"}
