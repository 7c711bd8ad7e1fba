"""Error hierarchy — codes, statuses, envelopes, and retryability."""

from uuid import uuid4

import pytest

from waitlist.core.errors import (
    AlreadyMemberError, ConsistencyError, ErrorCategory, ForbiddenError,
    NotMemberError, QueueNotFoundError, StorageUnavailableError,
    UnauthorizedError, WaitlistError,
)


@pytest.mark.parametrize("error, code, status", [
    (QueueNotFoundError(uuid4()), "QUEUE_NOT_FOUND", 404),
    (NotMemberError(uuid4(), uuid4()), "NOT_MEMBER", 404),
    (AlreadyMemberError(uuid4(), uuid4()), "ALREADY_MEMBER", 409),
    (ForbiddenError("delete the queue", uuid4(), uuid4()), "FORBIDDEN", 403),
    (UnauthorizedError(), "UNAUTHORIZED", 401),
    (StorageUnavailableError("down", "commit"), "STORAGE_UNAVAILABLE", 503),
    (ConsistencyError("dup"), "CONSISTENCY_CONFLICT", 409),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, WaitlistError)
    assert error.code == code
    assert error.http_status == status


def test_only_storage_errors_are_retryable():
    assert StorageUnavailableError("down", "commit").retryable
    assert not AlreadyMemberError(uuid4(), uuid4()).retryable
    assert not QueueNotFoundError(uuid4()).retryable


def test_storage_error_carries_retry_hint():
    error = StorageUnavailableError("down", "commit", retry_after_ms=250)
    assert error.context.retry_after_ms == 250
    assert error.category is ErrorCategory.DATABASE


def test_response_envelope_shape():
    queue_id, user_id = uuid4(), uuid4()
    body = AlreadyMemberError(queue_id, user_id).to_response()

    error = body["error"]
    assert error["code"] == "ALREADY_MEMBER"
    assert error["category"] == "conflict"
    assert error["severity"] == "warning"
    assert error["context"]["queue_id"] == str(queue_id)
    assert error["context"]["user_id"] == str(user_id)
    assert "timestamp" in error
