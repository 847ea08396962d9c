from __future__ import annotations

import copy
import pickle

import pytest

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import (
    CATEGORY_STATUS,
    ClassifiedError,
    ErrorCategory,
    category_of,
    classify,
    code_of,
    is_authentication_error,
    is_authorization_error,
    is_category,
    is_conflict_error,
    is_connection_error,
    is_database_error,
    is_file_error,
    is_internal_error,
    is_method_not_allowed_error,
    is_not_found_error,
    is_rate_limit_error,
    is_validation_error,
    new_authentication_error,
    new_authorization_error,
    new_conflict_error,
    new_connection_error,
    new_database_error,
    new_file_error,
    new_internal_error,
    new_method_not_allowed_error,
    new_not_found_error,
    new_rate_limit_error,
    new_validation_error,
    status_of,
    wrap_connection_error,
    wrap_database_error,
    wrap_format_error,
    wrap_internal_error,
)

CONSTRUCTORS = [
    (new_validation_error, ErrorCategory.VALIDATION, 400, is_validation_error),
    (new_database_error, ErrorCategory.DATABASE, 500, is_database_error),
    (new_connection_error, ErrorCategory.CONNECTION, 503, is_connection_error),
    (new_not_found_error, ErrorCategory.NOT_FOUND, 404, is_not_found_error),
    (new_authentication_error, ErrorCategory.AUTHENTICATION, 401, is_authentication_error),
    (new_authorization_error, ErrorCategory.AUTHORIZATION, 403, is_authorization_error),
    (new_conflict_error, ErrorCategory.CONFLICT, 409, is_conflict_error),
    (new_internal_error, ErrorCategory.INTERNAL, 500, is_internal_error),
    (new_rate_limit_error, ErrorCategory.RATE_LIMIT, 429, is_rate_limit_error),
    (
        new_method_not_allowed_error,
        ErrorCategory.METHOD_NOT_ALLOWED,
        405,
        is_method_not_allowed_error,
    ),
    (new_file_error, ErrorCategory.FILE, 400, is_file_error),
]


@pytest.mark.parametrize(("constructor", "category", "expected_status", "_"), CONSTRUCTORS)
def test_constructor_fixes_category_and_status(constructor, category, expected_status, _) -> None:
    err = constructor("SOME_CODE", "something")

    assert err.category is category
    assert err.http_status == expected_status
    assert status_of(err) == expected_status
    assert err.code == "SOME_CODE"
    assert err.detail is None
    assert err.cause is None


def test_every_category_has_a_status() -> None:
    assert set(CATEGORY_STATUS) == set(ErrorCategory)


@pytest.mark.parametrize(("constructor", "category", "_", "predicate"), CONSTRUCTORS)
def test_named_predicates_match_only_their_category(constructor, category, _, predicate) -> None:
    err = constructor("CODE", "message")

    assert predicate(err) is True
    assert is_category(err, category) is True
    for other_constructor, other_category, _status, other_predicate in CONSTRUCTORS:
        if other_category is not category:
            assert other_predicate(err) is False
            assert is_category(err, other_category) is False


def test_predicates_reject_plain_exceptions_and_none() -> None:
    for _constructor, category, _status, predicate in CONSTRUCTORS:
        assert predicate(None) is False
        assert predicate(ValueError("boom")) is False
        assert is_category(RuntimeError("boom"), category) is False


def test_empty_code_is_accepted() -> None:
    err = new_conflict_error("", "")

    assert err.code == ""
    assert err.message == ""


def test_not_found_composes_message_from_resource() -> None:
    err = new_not_found_error(ErrorCode.USER_NOT_FOUND, "User")

    assert err.message == "User not found"
    assert err.code == "USER_NOT_FOUND"


def test_method_not_allowed_names_expected_method() -> None:
    err = new_method_not_allowed_error("METHOD_NOT_ALLOWED", "POST")

    assert err.message == "Method not allowed; expected: POST"
    assert err.http_status == 405


def test_category_and_code_are_read_only() -> None:
    err = new_validation_error("CODE", "message")

    with pytest.raises(AttributeError):
        err.category = ErrorCategory.INTERNAL  # type: ignore[misc]
    with pytest.raises(AttributeError):
        err.code = "OTHER"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        err.http_status = 200  # type: ignore[misc]


def test_with_detail_returns_new_error_and_keeps_original() -> None:
    original = new_validation_error("CODE", "message")

    detailed = original.with_detail("first")
    replaced = detailed.with_detail("second")

    assert original.detail is None
    assert detailed.detail == "first"
    assert replaced.detail == "second"
    assert replaced is not detailed
    assert replaced.category is original.category
    assert replaced.code == original.code


def test_with_cause_derives_detail_from_cause_message() -> None:
    cause = ConnectionError("connection reset by peer")

    err = new_database_error("DB_QUERY", "Query failed").with_cause(cause)

    assert err.cause is cause
    assert err.detail == "connection reset by peer"
    assert err.__cause__ is cause


def test_explicit_detail_wins_regardless_of_order() -> None:
    cause = ValueError("raw driver text")
    base = new_database_error("DB_QUERY", "Query failed")

    detail_first = base.with_detail("explicit").with_cause(cause)
    cause_first = base.with_cause(cause).with_detail("explicit")

    assert detail_first.detail == "explicit"
    assert cause_first.detail == "explicit"
    assert detail_first.cause is cause
    assert cause_first.cause is cause


def test_second_cause_keeps_first_derived_detail() -> None:
    first = ValueError("first failure")
    second = ValueError("second failure")

    err = new_internal_error("X", "y").with_cause(first).with_cause(second)

    assert err.detail == "first failure"
    assert err.cause is second


def test_with_cause_none_leaves_detail_unset() -> None:
    err = new_internal_error("X", "y").with_cause(None)

    assert err.detail is None
    assert err.cause is None


def test_empty_explicit_detail_is_not_overwritten_by_cause() -> None:
    err = new_internal_error("X", "y").with_detail("").with_cause(ValueError("hidden"))

    assert err.detail == ""


def test_str_includes_detail_when_present() -> None:
    err = new_validation_error("CPF_VAZIO", "CPF required")

    assert str(err) == "[VALIDATION_ERROR] CPF_VAZIO: CPF required"
    assert str(err.with_detail("field cpf")) == (
        "[VALIDATION_ERROR] CPF_VAZIO: CPF required - field cpf"
    )


def test_classified_error_can_be_raised_and_caught() -> None:
    with pytest.raises(ClassifiedError) as exc_info:
        raise new_conflict_error("EMAIL_EXISTS", "Email in use")

    assert is_conflict_error(exc_info.value)


@pytest.mark.parametrize(
    "wrapper, category, message",
    [
        (wrap_database_error, ErrorCategory.DATABASE, "Database operation failed"),
        (wrap_connection_error, ErrorCategory.CONNECTION, "Connection failure"),
        (wrap_internal_error, ErrorCategory.INTERNAL, "Internal server error"),
        (wrap_format_error, ErrorCategory.VALIDATION, "Invalid data format"),
    ],
)
def test_wrappers_pass_none_through_and_wrap_errors(wrapper, category, message) -> None:
    assert wrapper("CODE", None) is None

    cause = OSError("disk on fire")
    err = wrapper("CODE", cause)

    assert err is not None
    assert err.category is category
    assert err.message == message
    assert err.cause is cause
    assert err.detail == "disk on fire"
    assert err.code == "CODE"


def test_classify_is_identity_for_classified_errors() -> None:
    err = new_not_found_error("USER_NOT_FOUND", "User")

    assert classify(err) is err


def test_classify_none_returns_none() -> None:
    assert classify(None) is None


def test_classify_wraps_unknown_errors_as_internal() -> None:
    cause = KeyError("missing")

    err = classify(cause)

    assert err is not None
    assert err.category is ErrorCategory.INTERNAL
    assert err.code == ErrorCode.UNKNOWN_ERROR
    assert err.http_status == 500
    assert err.cause is cause
    assert err.detail == str(cause)


@pytest.mark.parametrize(
    "raw",
    [
        RuntimeError("boom"),
        new_rate_limit_error("RATE_LIMIT", "slow down"),
        new_file_error("FILE_TOO_LARGE", "too big").with_detail("12MB"),
    ],
)
def test_classify_is_idempotent(raw: BaseException) -> None:
    once = classify(raw)

    assert classify(once) is once


@pytest.mark.parametrize(("constructor", "category", "_s", "_p"), CONSTRUCTORS)
def test_is_category_agrees_with_classify_for_classified_errors(
    constructor, category, _s, _p
) -> None:
    err = constructor("CODE", "message")
    classified = classify(err)

    assert classified is not None
    for candidate in ErrorCategory:
        assert is_category(err, candidate) == (classified.category is candidate)


def test_status_of_falls_back_to_500() -> None:
    assert status_of(ValueError("boom")) == 500
    assert status_of(None) == 500


def test_category_and_code_lookups() -> None:
    err = new_authorization_error("NO_PERMISSION", "Forbidden")

    assert category_of(err) == "AUTHORIZATION_ERROR"
    assert code_of(err) == "NO_PERMISSION"
    assert category_of(RuntimeError()) == "UNKNOWN_ERROR"
    assert code_of(RuntimeError()) == "UNKNOWN_CODE"


def _pickle_round_trip(err: ClassifiedError) -> ClassifiedError:
    return pickle.loads(pickle.dumps(err))


@pytest.mark.parametrize("duplicate", [copy.copy, copy.deepcopy, _pickle_round_trip])
def test_errors_survive_copy_and_pickle(duplicate) -> None:
    original = new_database_error("DB_QUERY", "Query failed").with_cause(ValueError("bad row"))

    clone = duplicate(original)

    assert isinstance(clone, ClassifiedError)
    assert clone is not original
    assert clone.category is ErrorCategory.DATABASE
    assert clone.code == "DB_QUERY"
    assert clone.message == "Query failed"
    assert clone.detail == "bad row"
    assert isinstance(clone.cause, ValueError)
    assert str(clone) == str(original)
