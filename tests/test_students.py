import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from pta_dashboard.core.exceptions import ValidationError
from pta_dashboard.services.payment_service import PaymentService
from pta_dashboard.services.student_service import StudentService
from pta_dashboard.utils.csv_export import STUDENT_EXPORT_HEADERS
from tests.conftest import as_json, student_payload


@pytest.fixture
async def paid_family(db_session, jane_family):
    jane = jane_family[0]
    await PaymentService(db_session).record_payment(jane.id, Decimal("500"), "cash", date(2024, 1, 10))
    return jane_family


async def test_search_is_case_insensitive_substring(db_session, jane_family):
    service = StudentService(db_session)

    by_name = await service.filter_students(query="ALICE")
    by_class = await service.filter_students(query="bonifacio")
    by_parent = await service.filter_students(query="jane")

    assert [s.name for s in by_name] == ["Alice Doe"]
    assert {s.name for s in by_class} == {"Bob Doe", "Carlo Reyes"}
    assert {s.name for s in by_parent} == {"Alice Doe", "Bob Doe"}


async def test_empty_query_returns_whole_tab(db_session, jane_family, make_student):
    await make_student(name="Dina Lopez", status="transferred")
    service = StudentService(db_session)

    assert len(await service.filter_students(query="")) == 4
    assert len(await service.filter_students(query="   ", status="active")) == 3
    assert [s.name for s in await service.filter_students(status="transferred")] == ["Dina Lopez"]


async def test_payment_filter(db_session, paid_family):
    service = StudentService(db_session)

    paid = await service.filter_students(payment="paid")
    unpaid = await service.filter_students(payment="unpaid")

    assert {s.name for s in paid} == {"Alice Doe", "Bob Doe"}
    assert [s.name for s in unpaid] == ["Carlo Reyes"]


async def test_unknown_filters_are_rejected(db_session):
    service = StudentService(db_session)
    with pytest.raises(ValidationError):
        await service.filter_students(status="graduated")
    with pytest.raises(ValidationError):
        await service.list_students(sort_by="shoe_size")


async def test_sort_and_paginate(db_session, jane_family):
    service = StudentService(db_session)

    page = await service.list_students(sort_by="name", descending=True, page=1, size=2)

    assert [s.name for s in page["items"]] == ["Carlo Reyes", "Bob Doe"]
    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert page["has_next"] is True
    assert page["has_previous"] is False

    by_parent = await service.list_students(sort_by="parent_name")
    assert by_parent["items"][-1].name == "Carlo Reyes"


async def test_export_csv(db_session, paid_family):
    content = await StudentService(db_session).export_csv()

    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == STUDENT_EXPORT_HEADERS
    by_name = {row[0]: row for row in rows[1:]}
    assert by_name["Alice Doe"] == ["Alice Doe", "Grade 5 - Rizal", "Jane Doe", "Paid", "2024-01-10"]
    assert by_name["Carlo Reyes"] == ["Carlo Reyes", "Grade 3 - Bonifacio", "N/A", "Unpaid", "N/A"]


async def test_export_endpoint_quotes_commas(client):
    payload = as_json(student_payload(name="Santos, Ana", class_name="Grade 4 - Luna"))
    assert (await client.post("/api/v1/students/", json=payload)).status_code == 201

    response = await client.get("/api/v1/students/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "student_payment_status.csv" in response.headers["content-disposition"]
    assert '"Santos, Ana"' in response.text


async def test_list_endpoint_includes_parent_name(client, jane_family):
    response = await client.get("/api/v1/students/", params={"q": "doe", "sort_by": "name"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert [(s["name"], s["parent_name"]) for s in body["items"]] == [
        ("Alice Doe", "Jane Doe"),
        ("Bob Doe", "Jane Doe"),
    ]


async def test_student_detail_and_update(client, jane_family):
    alice = jane_family[1]

    detail = await client.get(f"/api/v1/students/{alice.id}")
    assert detail.status_code == 200
    assert detail.json()["parent"]["name"] == "Jane Doe"
    assert detail.json()["teacher"] is None

    updated = await client.put(f"/api/v1/students/{alice.id}", json={"class_name": "Grade 6 - Mabini"})
    assert updated.status_code == 200
    assert updated.json()["class_name"] == "Grade 6 - Mabini"
    assert updated.json()["parent_id"] == str(alice.parent_id)


async def test_student_create_requires_fields(client):
    response = await client.post("/api/v1/students/", json={"name": "Nameless"})
    assert response.status_code == 422


async def test_new_students_start_unpaid(client):
    payload = as_json(student_payload())
    payload["payment_status"] = True

    response = await client.post("/api/v1/students/", json=payload)

    assert response.status_code == 201
    assert response.json()["payment_status"] is False


async def test_delete_student(client, jane_family):
    carlo = jane_family[3]

    response = await client.delete(f"/api/v1/students/{carlo.id}")
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/students/{carlo.id}")).status_code == 404


async def test_update_endpoint_rejects_null_required_fields(client, jane_family):
    alice = jane_family[1]

    for field in ("name", "class_name", "enrollment_date", "status"):
        response = await client.put(f"/api/v1/students/{alice.id}", json={field: None})
        assert response.status_code == 422

    cleared = await client.put(f"/api/v1/students/{alice.id}", json={"notes": None, "parent_id": None})
    assert cleared.status_code == 200
    assert cleared.json()["parent_id"] is None


async def test_grade_level_sorts_numerically(db_session, make_student):
    for grade in ("10", "9", "2"):
        await make_student(name=f"Student {grade}", grade_level=grade)

    page = await StudentService(db_session).list_students(sort_by="grade_level")

    assert [s.grade_level for s in page["items"]] == ["2", "9", "10"]
