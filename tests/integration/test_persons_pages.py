import io
import re
import uuid
from datetime import date

import pytest
from openpyxl import load_workbook

from contact_manager.db.schemas import CountryAddRequest, PersonAddRequest
from contact_manager.services import CountriesService, PersonsService


@pytest.fixture
def canada_id(db_session):
    return CountriesService(db_session).add_country(CountryAddRequest(country_name="Canada")).country_id


@pytest.fixture
def people(db_session, canada_id):
    service = PersonsService(db_session)
    return [
        service.add_person(PersonAddRequest(person_name=name, email=email, country_id=canada_id,
                                            date_of_birth=date(1990, 5, 17)))
        for name, email in (("Rita Moose", "rita@example.com"), ("Mark Ben", "mark@example.com"),
                            ("John Doe", "john@example.com"))
    ]


def _form(**overrides):
    data = {
        "person_name": "Ann Lee",
        "email": "ann@example.com",
        "date_of_birth": "1991-07-04",
        "gender": "Female",
        "country_id": "",
        "address": "5 Oak Avenue",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize("path", ["/", "/persons/index"])
def test_index_renders_table_and_headers(client, people, path):
    r = client.get(path)

    assert r.status_code == 200
    assert 'class="persons"' in r.text
    assert r.headers["X-Custom-Key"] == "Custom-Value"
    assert r.headers["X-Global-Header"] == "Global-Value"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", r.headers["Last-Modified"])
    assert "17 May 1990" in r.text


def test_index_sorts_by_name_by_default(client, people):
    text = client.get("/persons/index").text
    positions = [text.index(name) for name in ("John Doe", "Mark Ben", "Rita Moose")]
    assert positions == sorted(positions)


def test_index_search_and_descending_sort(client, people):
    r = client.get("/persons/index", params={
        "search_by": "email", "search_string": "R", "sort_by": "person_name", "sort_order": "DESC",
    })

    assert r.status_code == 200
    assert "John Doe" not in r.text
    assert r.text.index("Rita Moose") < r.text.index("Mark Ben")


def test_create_form_lists_countries(client, canada_id):
    r = client.get("/persons/create")

    assert r.status_code == 200
    assert r.headers["X-Create-Key"] == "Create-Value"
    assert str(canada_id) in r.text
    assert "Canada" in r.text


def test_create_person_redirects_to_index(client, db_session):
    r = client.post("/persons/create", data=_form(), follow_redirects=False)

    assert r.status_code == 303
    assert r.headers["location"] == "/persons/index"
    persons = PersonsService(db_session).get_all_persons()
    assert [p.person_name for p in persons] == ["Ann Lee"]
    assert persons[0].gender == "Female"


def test_create_person_with_errors_rerenders_form(client, db_session, canada_id):
    r = client.post("/persons/create", data=_form(person_name="", email="nope"), follow_redirects=False)

    assert r.status_code == 400
    assert "Person Name can" in r.text
    assert "Email should be valid." in r.text
    assert "Canada" in r.text
    assert PersonsService(db_session).get_all_persons() == []


def test_edit_form_prefills_person(client, people):
    r = client.get(f"/persons/edit/{people[0].person_id}")

    assert r.status_code == 200
    assert 'value="Rita Moose"' in r.text
    assert 'value="1990-05-17"' in r.text


def test_edit_unknown_person_redirects(client):
    r = client.get(f"/persons/edit/{uuid.uuid4()}", follow_redirects=False)
    assert r.status_code == 303


@pytest.mark.parametrize("cookie", [None, "WRONG"])
def test_edit_submit_requires_auth_cookie(client, people, cookie):
    if cookie is not None:
        client.cookies.set("Auth-key", cookie)

    r = client.post(f"/persons/edit/{people[0].person_id}", data=_form(), follow_redirects=False)

    assert r.status_code == 401
    assert r.headers["X-Global-Header"] == "Global-Value"


def test_edit_submit_with_cookie_updates_person(client, db_session, people):
    client.cookies.set("Auth-key", "A100")
    person_id = people[0].person_id

    r = client.post(f"/persons/edit/{person_id}", data=_form(person_name="Rita Updated"), follow_redirects=False)

    assert r.status_code == 303
    db_session.expire_all()
    assert PersonsService(db_session).get_person_by_person_id(person_id).person_name == "Rita Updated"


def test_edit_submit_with_errors_rerenders_form(client, people):
    client.cookies.set("Auth-key", "A100")

    r = client.post(f"/persons/edit/{people[0].person_id}", data=_form(email=""), follow_redirects=False)

    assert r.status_code == 400
    assert "Email can" in r.text


def test_delete_confirm_then_delete(client, db_session, people):
    person_id = people[1].person_id

    confirm = client.get(f"/persons/delete/{person_id}")
    assert confirm.status_code == 200
    assert "Mark Ben" in confirm.text

    r = client.post(f"/persons/delete/{person_id}", follow_redirects=False)
    assert r.status_code == 303
    assert PersonsService(db_session).get_person_by_person_id(person_id) is None


def test_delete_unknown_person_redirects(client):
    r = client.get(f"/persons/delete/{uuid.uuid4()}", follow_redirects=False)
    assert r.status_code == 303


def test_csv_download(client, people):
    r = client.get("/persons/PersonsCSV", params={"sort_by": "person_name"})

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/octet-stream"
    assert 'filename="persons.csv"' in r.headers["content-disposition"]
    lines = r.content.decode("utf-8").splitlines()
    assert lines[0] == "PersonName,Email,DateOfBirth,Age,Gender,Country,Address,ReceiveNewsLetters"
    assert lines[1].startswith("John Doe,john@example.com,17-May-1990,")
    assert len(lines) == 4


def test_excel_download_honours_filter(client, people):
    r = client.get("/persons/PersonsExcel", params={"search_by": "person_name", "search_string": "mark"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    sheet = load_workbook(io.BytesIO(r.content))["PersonsSheet"]
    assert [row[0].value for row in sheet.iter_rows(min_row=2)] == ["Mark Ben"]
    assert sheet["F2"].value == "Canada"


def test_pdf_download_lists_sorted_persons(client, people):
    r = client.get("/persons/PersonsPDF", params={"sort_by": "person_name", "sort_order": "DESC"})

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert 'filename="persons.pdf"' in r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")
    positions = [r.content.index(f"({name}) Tj".encode()) for name in ("Rita Moose", "Mark Ben", "John Doe")]
    assert positions == sorted(positions)


def test_pdf_download_honours_filter(client, people):
    r = client.get("/persons/PersonsPDF", params={"search_by": "person_name", "search_string": "mark"})

    assert r.status_code == 200
    assert b"(Mark Ben) Tj" in r.content
    assert b"(Rita Moose) Tj" not in r.content


@pytest.mark.parametrize("path", ["/persons/index", "/persons/PersonsCSV", "/persons/PersonsExcel", "/persons/PersonsPDF"])
def test_lowercase_sort_order_is_accepted(client, people, path):
    r = client.get(path, params={"sort_by": "person_name", "sort_order": "desc"})
    assert r.status_code == 200


def test_lowercase_sort_order_sorts_descending(client, people):
    text = client.get("/persons/index", params={"sort_by": "person_name", "sort_order": "desc"}).text
    positions = [text.index(name) for name in ("Rita Moose", "Mark Ben", "John Doe")]
    assert positions == sorted(positions)

    lines = client.get("/persons/PersonsCSV", params={"sort_by": "person_name", "sort_order": "desc"}).text.splitlines()
    assert [line.split(",")[0] for line in lines[1:]] == ["Rita Moose", "Mark Ben", "John Doe"]
