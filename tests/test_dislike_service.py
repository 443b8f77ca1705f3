from __future__ import annotations

import threading

import pytest

from dislike_service.core.errors import Conflict, InternalError
from dislike_service.services import DislikeService


def test_get_defaults_to_not_disliked(dislike_service: DislikeService) -> None:
    status = dislike_service.get("42", "alice")

    assert status.disliked is False
    assert status.count == 0
    assert dislike_service.record("42", "alice") is None


def test_set_marks_disliked_and_increments_count(dislike_service: DislikeService) -> None:
    dislike_service.set("42", "bob", resource_owner="alice")
    before = dislike_service.get("42", "alice").count

    dislike_service.set("42", "alice", resource_owner="alice")

    status = dislike_service.get("42", "alice")
    assert status.disliked is True
    assert status.count == before + 1


def test_set_twice_conflicts_and_keeps_state(dislike_service: DislikeService) -> None:
    dislike_service.set("42", "alice", resource_owner="alice")

    with pytest.raises(Conflict):
        dislike_service.set("42", "alice", resource_owner="alice")

    status = dislike_service.get("42", "alice")
    assert status.disliked is True
    assert status.count == 1


def test_unset_without_row_conflicts(dislike_service: DislikeService) -> None:
    with pytest.raises(Conflict):
        dislike_service.unset("42", "alice")

    assert dislike_service.record("42", "alice") is None


def test_unset_twice_conflicts_and_keeps_state(dislike_service: DislikeService) -> None:
    dislike_service.set("42", "alice", resource_owner="alice")
    dislike_service.unset("42", "alice")

    with pytest.raises(Conflict):
        dislike_service.unset("42", "alice")

    assert dislike_service.get("42", "alice").disliked is False


def test_set_unset_round_trip_restores_count(dislike_service: DislikeService) -> None:
    dislike_service.set("42", "bob", resource_owner="alice")
    before = dislike_service.get("42", "alice").count

    dislike_service.set("42", "alice", resource_owner="alice")
    dislike_service.unset("42", "alice")

    assert dislike_service.get("42", "alice").count == before


def test_row_is_flipped_not_deleted(dislike_service: DislikeService) -> None:
    dislike_service.set("42", "alice", resource_owner="alice")
    dislike_service.unset("42", "alice")

    record = dislike_service.record("42", "alice")
    assert record is not None
    assert record.state is False

    dislike_service.set("42", "alice", resource_owner="someone-else")
    record = dislike_service.record("42", "alice")
    assert record.state is True
    assert record.resource_owner == "someone-else"


def test_aggregate_and_total(dislike_service: DislikeService) -> None:
    dislike_service.set("1", "alice", resource_owner="x")
    dislike_service.set("1", "bob", resource_owner="x")
    dislike_service.set("2", "alice", resource_owner="y")
    dislike_service.unset("1", "bob")

    assert dislike_service.aggregate("1") == 1
    assert dislike_service.aggregate("2") == 1
    assert dislike_service.aggregate("3") == 0
    assert dislike_service.total() == 2


def test_concurrent_sets_only_one_succeeds(database) -> None:
    service = DislikeService(database)
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            service.set("99", "alice", resource_owner="alice")
        except Conflict:
            result = "conflict"
        else:
            result = "ok"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == 7
    assert service.get("99", "alice").count == 1


def test_storage_failure_surfaces_as_internal_error(database, dislike_service) -> None:
    with database.connection() as conn:
        conn.execute("DROP TABLE item_dislike")

    with pytest.raises(InternalError):
        dislike_service.set("42", "alice", resource_owner="alice")
    with pytest.raises(InternalError):
        dislike_service.get("42", "alice")
