"""Tests for the Splice exception hierarchy."""

from splice.kernel.exceptions import (
    InvalidCallbackException,
    InvalidCallerException,
    InvalidPhaseException,
    SpliceException,
    TargetException,
    TargetNotCallableException,
    UnknownTargetException,
)


class TestSpliceException:
    def test_basic_creation(self):
        exc = SpliceException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = SpliceException("missing", code="TARGET_NOT_FOUND", context={"name": "save"})
        assert exc.code == "TARGET_NOT_FOUND"
        assert exc.context["name"] == "save"

    def test_context_defaults_to_empty_dict(self):
        exc = SpliceException("test")
        exc.context["key"] = "value"
        assert SpliceException("test2").context == {}


class TestExceptionHierarchy:
    def test_target_errors(self):
        assert issubclass(TargetException, SpliceException)
        assert issubclass(UnknownTargetException, TargetException)
        assert issubclass(TargetNotCallableException, TargetException)

    def test_request_errors(self):
        for exc_type in (InvalidPhaseException, InvalidCallerException, InvalidCallbackException):
            assert issubclass(exc_type, SpliceException)
            assert not issubclass(exc_type, TargetException)
