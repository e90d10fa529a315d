import io
import uuid

from openpyxl import Workbook

from contact_manager.api.deps import get_persons_service
from contact_manager.api.main import app


def _create_country(client, name):
    r = client.post("/api/countries", json={"country_name": name})
    assert r.status_code == 201, r.text
    return r.json()["country_id"]


def _create_person(client, name, **fields):
    payload = {"person_name": name, "email": f"{name.split()[0].lower()}@example.com"}
    payload.update(fields)
    r = client.post("/api/persons", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "contact-manager"}
    assert r.headers["X-Global-Header"] == "Global-Value"


def test_countries_api(client):
    usa_id = _create_country(client, "USA")
    _create_country(client, "Canada")

    duplicate = client.post("/api/countries", json={"country_name": "usa"})
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "Country with the same name already exists."
    assert client.post("/api/countries", json={"country_name": "Åland"}).status_code == 201
    assert client.post("/api/countries", json={"country_name": "ÅLAND"}).status_code == 409

    blank = client.post("/api/countries", json={"country_name": " "})
    assert blank.status_code == 422
    assert blank.json()["detail"] == ["Country Name can't be blank."]

    listed = client.get("/api/countries").json()
    assert [c["country_name"] for c in listed] == ["USA", "Canada", "Åland"]

    assert client.get(f"/api/countries/{usa_id}").json()["country_name"] == "USA"
    assert client.get(f"/api/countries/{uuid.uuid4()}").status_code == 404


def test_countries_upload_api(client):
    workbook = Workbook()
    workbook.active.title = "Countries"
    workbook.active.append(["CountryName"])
    workbook.active.append(["Kenya"])
    buffer = io.BytesIO()
    workbook.save(buffer)

    r = client.post("/api/countries/upload", files={"excel_file": ("c.xlsx", buffer.getvalue())})
    assert r.status_code == 200
    assert r.json() == {"uploaded": 1}

    bad = client.post("/api/countries/upload", files={"excel_file": ("c.xlsx", b"garbage")})
    assert bad.status_code == 400


def test_persons_crud_api(client):
    country_id = _create_country(client, "Japan")
    created = _create_person(client, "Kenji Sato", country_id=country_id, gender="Male", date_of_birth="1985-02-14")

    assert created["country_name"] == "Japan"
    assert created["tin"] == "ABC12345"
    assert created["age"] > 30

    person_id = created["person_id"]
    fetched = client.get(f"/api/persons/{person_id}")
    assert fetched.status_code == 200
    assert fetched.json()["person_name"] == "Kenji Sato"

    updated = client.put(f"/api/persons/{person_id}", json={"person_name": "Kenji S.", "email": "kenji@example.com"})
    assert updated.status_code == 200
    assert updated.json()["person_name"] == "Kenji S."
    assert updated.json()["country_id"] is None

    assert client.delete(f"/api/persons/{person_id}").status_code == 204
    assert client.delete(f"/api/persons/{person_id}").status_code == 404
    assert client.get(f"/api/persons/{person_id}").status_code == 404


def test_persons_api_validation_and_missing(client):
    invalid = client.post("/api/persons", json={"person_name": "", "email": "bad"})
    assert invalid.status_code == 422
    assert invalid.json()["detail"] == ["Person Name can't be blank.", "Email should be valid."]

    missing = client.put(f"/api/persons/{uuid.uuid4()}", json={"person_name": "X", "email": "x@example.com"})
    assert missing.status_code == 404


def test_persons_list_api_filters_and_sorts(client):
    for name in ("Rita Moose", "Mark Ben", "John Doe"):
        _create_person(client, name)

    r = client.get("/api/persons", params={"sort_by": "person_name", "sort_order": "DESC"})
    assert [p["person_name"] for p in r.json()] == ["Rita Moose", "Mark Ben", "John Doe"]

    r = client.get("/api/persons", params={"search_by": "person_name", "search_string": "o"})
    assert [p["person_name"] for p in r.json()] == ["Rita Moose", "John Doe"]


def test_unexpected_errors_return_generic_500(client):
    class BrokenService:
        def get_filtered_persons(self, *args):
            raise RuntimeError("database is on fire")

    app.dependency_overrides[get_persons_service] = lambda: BrokenService()
    try:
        r = client.get("/api/persons")
    finally:
        app.dependency_overrides.pop(get_persons_service, None)

    assert r.status_code == 500
    assert r.text == "An unexpected error occurred."
    assert r.headers["X-Global-Header"] == "Global-Value"
