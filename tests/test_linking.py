import uuid
from datetime import date
from decimal import Decimal

import pytest

from pta_dashboard.core import config
from pta_dashboard.core.exceptions import LinkConflictError, NotFoundError
from pta_dashboard.services.parent_service import ParentService
from pta_dashboard.services.payment_service import PaymentService
from pta_dashboard.services.student_service import StudentService


async def _assert_partition(db_session, parent_ids):
    """Every student is either available or linked to exactly one parent."""
    students = StudentService(db_session)
    parents = ParentService(db_session)
    everyone = {s.id for s in await students.get_all()}
    available = {s.id for s in await students.get_available_students()}

    linked = set()
    for parent_id in parent_ids:
        ids = {s.id for s in await parents.get_linked_students(parent_id)}
        assert not ids & linked
        linked |= ids

    assert not available & linked
    assert available | linked == everyone


async def test_link_moves_student_out_of_available_pool(db_session, jane_family):
    jane, alice, bob, carlo = jane_family
    service = StudentService(db_session)

    student = await service.link_to_parent(carlo.id, jane.id)

    assert student.parent_id == jane.id
    linked = await ParentService(db_session).get_linked_students(jane.id)
    assert {s.name for s in linked} == {"Alice Doe", "Bob Doe", "Carlo Reyes"}
    assert await service.get_available_students() == []
    await _assert_partition(db_session, [jane.id])


async def test_linking_to_same_parent_is_a_no_op(db_session, jane_family):
    jane, alice, _, _ = jane_family

    student = await StudentService(db_session).link_to_parent(alice.id, jane.id)

    assert student.parent_id == jane.id


async def test_relinking_to_other_parent_conflicts_by_default(db_session, jane_family, make_parent):
    jane, alice, _, _ = jane_family
    mark = await make_parent(name="Mark Cruz", email="mark.cruz@example.com")

    with pytest.raises(LinkConflictError) as exc_info:
        await StudentService(db_session).link_to_parent(alice.id, mark.id)

    assert exc_info.value.status_code == 409
    student = await StudentService(db_session).get_or_404(alice.id)
    assert student.parent_id == jane.id


async def test_relinking_with_replace_moves_the_link(db_session, jane_family, make_parent):
    jane, alice, _, _ = jane_family
    mark = await make_parent(name="Mark Cruz", email="mark.cruz@example.com")

    student = await StudentService(db_session).link_to_parent(alice.id, mark.id, replace=True)

    assert student.parent_id == mark.id
    jane_students = await ParentService(db_session).get_linked_students(jane.id)
    assert [s.name for s in jane_students] == ["Bob Doe"]
    await _assert_partition(db_session, [jane.id, mark.id])


async def test_replace_policy_from_settings(db_session, jane_family, make_parent, monkeypatch):
    _, alice, _, _ = jane_family
    mark = await make_parent(name="Mark Cruz", email="mark.cruz@example.com")
    monkeypatch.setattr(config.settings, "link_policy", "replace")

    student = await StudentService(db_session).link_to_parent(alice.id, mark.id)

    assert student.parent_id == mark.id


async def test_link_unknown_parent_or_student(db_session, jane_family):
    jane, alice, _, _ = jane_family
    service = StudentService(db_session)

    with pytest.raises(NotFoundError):
        await service.link_to_parent(alice.id, uuid.uuid4())
    with pytest.raises(NotFoundError):
        await service.link_to_parent(uuid.uuid4(), jane.id)


async def test_unlink_returns_student_to_pool_once(db_session, jane_family):
    jane, alice, _, carlo = jane_family
    service = StudentService(db_session)

    await service.unlink_from_parent(alice.id)
    again = await service.unlink_from_parent(alice.id)

    assert again.parent_id is None
    available = [s.id for s in await service.get_available_students()]
    assert available.count(alice.id) == 1
    assert set(available) == {alice.id, carlo.id}
    await _assert_partition(db_session, [jane.id])


async def test_unlink_keeps_payment_status(db_session, jane_family):
    jane, alice, _, _ = jane_family
    await PaymentService(db_session).record_payment(jane.id, Decimal("500"), "cash", date(2024, 1, 10))

    student = await StudentService(db_session).unlink_from_parent(alice.id, parent_id=jane.id)

    assert student.parent_id is None
    assert student.payment_status is True
    assert student.payment_date == date(2024, 1, 10)


async def test_unlink_from_wrong_parent_is_not_found(db_session, jane_family, make_parent):
    _, alice, _, _ = jane_family
    mark = await make_parent(name="Mark Cruz", email="mark.cruz@example.com")

    with pytest.raises(NotFoundError):
        await StudentService(db_session).unlink_from_parent(alice.id, parent_id=mark.id)


async def test_student_create_with_unknown_parent_writes_nothing(db_session, make_student):
    with pytest.raises(NotFoundError):
        await make_student(parent_id=uuid.uuid4())
    assert await StudentService(db_session).get_total_count() == 0


async def test_link_and_unlink_endpoints(client):
    parent = (await client.post("/api/v1/parents/", json={
        "name": "Jane Doe",
        "contact_number": "09171234567",
        "email": "jane.doe@example.com",
    })).json()
    other = (await client.post("/api/v1/parents/", json={
        "name": "Mark Cruz",
        "contact_number": "09170000000",
        "email": "mark.cruz@example.com",
    })).json()
    student = (await client.post("/api/v1/students/", json={
        "name": "Alice Doe",
        "class_name": "Grade 5 - Rizal",
        "grade_level": "5",
        "date_of_birth": "2014-03-02",
        "contact_number": "09171234567",
        "address": "12 Mabini St",
        "enrollment_date": "2023-06-05",
    })).json()

    available = (await client.get("/api/v1/students/available")).json()
    assert [s["id"] for s in available] == [student["id"]]

    response = await client.post(f"/api/v1/parents/{parent['id']}/students/{student['id']}")
    assert response.status_code == 200
    assert response.json()["parent_id"] == parent["id"]

    detail = (await client.get(f"/api/v1/parents/{parent['id']}")).json()
    assert [s["name"] for s in detail["students"]] == ["Alice Doe"]
    assert (await client.get("/api/v1/students/available")).json() == []

    conflict = await client.post(f"/api/v1/parents/{other['id']}/students/{student['id']}")
    assert conflict.status_code == 409

    moved = await client.post(
        f"/api/v1/parents/{other['id']}/students/{student['id']}", params={"replace": "true"}
    )
    assert moved.status_code == 200
    assert moved.json()["parent_id"] == other["id"]

    unlinked = await client.delete(f"/api/v1/parents/{other['id']}/students/{student['id']}")
    assert unlinked.status_code == 200
    assert unlinked.json()["parent_id"] is None
    assert len((await client.get(f"/api/v1/parents/{other['id']}/students")).json()) == 0


async def test_unlink_through_parent_is_idempotent(db_session, jane_family):
    jane, alice, _, _ = jane_family
    service = StudentService(db_session)

    await service.unlink_from_parent(alice.id, parent_id=jane.id)
    again = await service.unlink_from_parent(alice.id, parent_id=jane.id)

    assert again.parent_id is None


async def test_repeated_unlink_endpoint_succeeds(client, jane_family):
    jane, alice, _, _ = jane_family

    first = await client.delete(f"/api/v1/parents/{jane.id}/students/{alice.id}")
    second = await client.delete(f"/api/v1/parents/{jane.id}/students/{alice.id}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["parent_id"] is None
