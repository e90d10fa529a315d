"""
Persons endpoints.

HTML screens for listing, creating, editing and deleting persons, the CSV,
Excel and PDF downloads, and the JSON API under ``/api/persons``.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response, StreamingResponse

from contact_manager.api.deps import get_countries_service, get_persons_service, require_auth_cookie
from contact_manager.api.forms import PersonForm, person_form, person_form_from_response
from contact_manager.api.templating import templates
from contact_manager.db import schemas
from contact_manager.exceptions import ValidationError
from contact_manager.services import CountriesService, PersonsService
from contact_manager.services.export_service import CSV_MEDIA_TYPE, EXCEL_MEDIA_TYPE, PDF_MEDIA_TYPE
from contact_manager.services.person_query import FILTER_FIELD_LABELS, PersonSortField, parse_sort_order

logger = logging.getLogger(__name__)

router = APIRouter(tags=["persons"])
api_router = APIRouter(prefix="/api/persons", tags=["persons-api"])

INDEX_URL = "/persons/index"
LIST_HEADERS = {"X-Custom-Key": "Custom-Value"}
CREATE_HEADERS = {"X-Create-Key": "Create-Value"}
DEFAULT_SORT_BY = PersonSortField.PERSON_NAME.value
DEFAULT_SORT_ORDER = schemas.SortOrderOptions.ASC.value


def _with_headers(response: Response, headers: dict) -> Response:
    for key, value in headers.items():
        response.headers[key] = value
    return response


def _redirect_to_index() -> RedirectResponse:
    return RedirectResponse(url=INDEX_URL, status_code=status.HTTP_303_SEE_OTHER)


def _query_persons(
    persons_service: PersonsService,
    search_by: Optional[str],
    search_string: Optional[str],
    sort_by: Optional[str],
    sort_order: schemas.SortOrderOptions | str,
) -> List[schemas.PersonResponse]:
    persons = persons_service.get_filtered_persons(search_by, search_string)
    return persons_service.get_sorted_persons(persons, sort_by, sort_order)


def _render_form(
    request: Request,
    template: str,
    countries_service: CountriesService,
    form: PersonForm,
    errors: Optional[List[str]] = None,
    person_id: Optional[uuid.UUID] = None,
    status_code: int = status.HTTP_200_OK,
):
    return templates.TemplateResponse(
        request,
        template,
        {
            "form": form,
            "errors": errors or [],
            "person_id": person_id,
            "countries": countries_service.get_all_countries(),
            "genders": list(schemas.GenderOptions),
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
@router.get(INDEX_URL, response_class=HTMLResponse)
def persons_index(
    request: Request,
    search_by: Optional[str] = None,
    search_string: Optional[str] = None,
    sort_by: str = DEFAULT_SORT_BY,
    sort_order: str = DEFAULT_SORT_ORDER,
    persons_service: PersonsService = Depends(get_persons_service),
):
    order = parse_sort_order(sort_order)
    logger.info("persons_index: search_by=%s sort_by=%s sort_order=%s", search_by, sort_by, order.value)
    persons = _query_persons(persons_service, search_by, search_string, sort_by, order)
    response = templates.TemplateResponse(
        request,
        "persons/index.html",
        {
            "persons": persons,
            "search_fields": {field.value: label for field, label in FILTER_FIELD_LABELS.items()},
            "search_by": search_by,
            "search_string": search_string,
            "sort_by": sort_by,
            "sort_order": order.value,
        },
    )
    _with_headers(response, LIST_HEADERS)
    response.headers["Last-Modified"] = datetime.now().strftime("%Y-%m-%d %H:%M")
    return response


@router.get("/persons/create", response_class=HTMLResponse)
def persons_create_form(
    request: Request,
    countries_service: CountriesService = Depends(get_countries_service),
):
    response = _render_form(request, "persons/create.html", countries_service, PersonForm())
    return _with_headers(response, CREATE_HEADERS)


@router.post("/persons/create", response_class=HTMLResponse)
def persons_create_submit(
    request: Request,
    form: PersonForm = Depends(person_form),
    persons_service: PersonsService = Depends(get_persons_service),
    countries_service: CountriesService = Depends(get_countries_service),
):
    try:
        persons_service.add_person(form.to_add_request())
    except ValidationError as e:
        logger.info("person_create_rejected: errors=%d", len(e.errors))
        return _render_form(
            request, "persons/create.html", countries_service, form,
            errors=e.errors, status_code=status.HTTP_400_BAD_REQUEST,
        )
    return _redirect_to_index()


@router.get("/persons/edit/{person_id}", response_class=HTMLResponse)
def persons_edit_form(
    person_id: uuid.UUID,
    request: Request,
    persons_service: PersonsService = Depends(get_persons_service),
    countries_service: CountriesService = Depends(get_countries_service),
):
    person = persons_service.get_person_by_person_id(person_id)
    if person is None:
        return _redirect_to_index()
    return _render_form(
        request, "persons/edit.html", countries_service,
        person_form_from_response(person), person_id=person_id,
    )


@router.post(
    "/persons/edit/{person_id}",
    response_class=HTMLResponse,
    dependencies=[Depends(require_auth_cookie)],
)
def persons_edit_submit(
    person_id: uuid.UUID,
    request: Request,
    form: PersonForm = Depends(person_form),
    persons_service: PersonsService = Depends(get_persons_service),
    countries_service: CountriesService = Depends(get_countries_service),
):
    if persons_service.get_person_by_person_id(person_id) is None:
        return _redirect_to_index()
    try:
        persons_service.update_person(form.to_update_request(person_id))
    except ValidationError as e:
        logger.info("person_edit_rejected: id=%s errors=%d", person_id, len(e.errors))
        return _render_form(
            request, "persons/edit.html", countries_service, form,
            errors=e.errors, person_id=person_id, status_code=status.HTTP_400_BAD_REQUEST,
        )
    return _redirect_to_index()


@router.get("/persons/delete/{person_id}", response_class=HTMLResponse)
def persons_delete_confirm(
    person_id: uuid.UUID,
    request: Request,
    persons_service: PersonsService = Depends(get_persons_service),
):
    person = persons_service.get_person_by_person_id(person_id)
    if person is None:
        return _redirect_to_index()
    return templates.TemplateResponse(request, "persons/delete.html", {"person": person})


@router.post("/persons/delete/{person_id}", response_class=HTMLResponse)
def persons_delete_submit(
    person_id: uuid.UUID,
    persons_service: PersonsService = Depends(get_persons_service),
):
    persons_service.delete_person(person_id)
    return _redirect_to_index()


@router.get("/persons/PersonsCSV")
def persons_csv(
    search_by: Optional[str] = None,
    search_string: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str = DEFAULT_SORT_ORDER,
    persons_service: PersonsService = Depends(get_persons_service),
):
    persons = _query_persons(persons_service, search_by, search_string, sort_by, sort_order)
    return StreamingResponse(
        persons_service.get_persons_csv(persons),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="persons.csv"'},
    )


@router.get("/persons/PersonsExcel")
def persons_excel(
    search_by: Optional[str] = None,
    search_string: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str = DEFAULT_SORT_ORDER,
    persons_service: PersonsService = Depends(get_persons_service),
):
    persons = _query_persons(persons_service, search_by, search_string, sort_by, sort_order)
    return StreamingResponse(
        persons_service.get_persons_excel(persons),
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="persons.xlsx"'},
    )


@router.get("/persons/PersonsPDF")
def persons_pdf(
    search_by: Optional[str] = None,
    search_string: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str = DEFAULT_SORT_ORDER,
    persons_service: PersonsService = Depends(get_persons_service),
):
    persons = _query_persons(persons_service, search_by, search_string, sort_by, sort_order)
    return StreamingResponse(
        persons_service.get_persons_pdf(persons),
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="persons.pdf"'},
    )


# JSON API

@api_router.get("", response_model=List[schemas.PersonResponse])
def list_persons_endpoint(
    search_by: Optional[str] = None,
    search_string: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str = DEFAULT_SORT_ORDER,
    persons_service: PersonsService = Depends(get_persons_service),
):
    return _query_persons(persons_service, search_by, search_string, sort_by, sort_order)


@api_router.get("/{person_id}", response_model=schemas.PersonResponse)
def get_person_endpoint(
    person_id: uuid.UUID,
    persons_service: PersonsService = Depends(get_persons_service),
):
    person = persons_service.get_person_by_person_id(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@api_router.post("", response_model=schemas.PersonResponse, status_code=status.HTTP_201_CREATED)
def create_person_endpoint(
    person: schemas.PersonAddRequest,
    persons_service: PersonsService = Depends(get_persons_service),
):
    return persons_service.add_person(person)


@api_router.put("/{person_id}", response_model=schemas.PersonResponse)
def update_person_endpoint(
    person_id: uuid.UUID,
    person: schemas.PersonAddRequest,
    persons_service: PersonsService = Depends(get_persons_service),
):
    request = schemas.PersonUpdateRequest(person_id=person_id, **person.model_dump())
    return persons_service.update_person(request)


@api_router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person_endpoint(
    person_id: uuid.UUID,
    persons_service: PersonsService = Depends(get_persons_service),
):
    if not persons_service.delete_person(person_id):
        raise HTTPException(status_code=404, detail="Person not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
