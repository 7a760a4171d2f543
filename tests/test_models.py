import pytest

from bountyboard.models import Role, Task, TaskStatus, User


@pytest.mark.parametrize("status", ["OPEN", "CLAIMED", "COMPLETED"])
def test_status_values_round_trip_through_task(status):
    task = Task.from_dict({"status": status})
    assert task.status == TaskStatus(status)
    assert task.to_dict()["status"] == status


def test_role_values_in_user_dict():
    assert User(address="addr", role=Role.ADMIN).to_dict()["role"] == "ADMIN"
    assert User(address="addr", role=Role.USER).to_dict()["role"] == "USER"


def test_to_dict_omits_empty_claimer_and_proof():
    task = Task(id="task-1", title="Write docs", bounty="1000", status=TaskStatus.OPEN)
    data = task.to_dict()
    assert "claimer" not in data
    assert "proof" not in data
    assert data["status"] == "OPEN"
    assert data["id"] == "task-1"
    assert data["description"] == ""


def test_to_dict_includes_claimer_and_proof_when_set():
    task = Task(id="task-2", title="t", bounty="5", status="CLAIMED", claimer="abc", proof="done")
    data = task.to_dict()
    assert data["claimer"] == "abc"
    assert data["proof"] == "done"


def test_status_enum_is_stored_as_plain_string():
    task = Task(status=TaskStatus.COMPLETED)
    assert type(task.status) is str
    assert task.status == TaskStatus.COMPLETED


def test_round_trip():
    task = Task(
        id="task-3",
        title="Fix bug",
        description="Crash on start",
        creator="creator-addr",
        bounty="42",
        status="CLAIMED",
        claimer="claimer-addr",
        proof="patch",
    )
    assert Task.from_dict(task.to_dict()) == task


def test_from_dict_ignores_unknown_and_defaults_missing():
    task = Task.from_dict({"title": "Only title", "extra": 7})
    assert task == Task(title="Only title")


def test_from_dict_null_becomes_empty():
    task = Task.from_dict({"title": None, "bounty": "10"})
    assert task.title == ""
    assert task.bounty == "10"


def test_from_dict_rejects_non_string_field():
    with pytest.raises(ValueError):
        Task.from_dict({"bounty": 1000})


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        Task.from_dict(["title"])


def test_user_to_dict():
    assert User(address="addr", role=Role.ADMIN).to_dict() == {"address": "addr", "role": "ADMIN"}
    assert User(address="other").to_dict()["role"] == "USER"