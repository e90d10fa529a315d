"""
Countries endpoints: the Excel upload screen and the JSON catalog API.
"""
import logging
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse

from contact_manager.api.deps import get_countries_service
from contact_manager.api.templating import templates
from contact_manager.db import schemas
from contact_manager.exceptions import FormatError
from contact_manager.services import CountriesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/countries", tags=["countries"])
api_router = APIRouter(prefix="/api/countries", tags=["countries-api"])

XLSX_EXTENSION = ".xlsx"
MISSING_FILE_MESSAGE = "Please select a valid Excel(.xlsx) file."
WRONG_EXTENSION_MESSAGE = "Only Excel(.xlsx) files are allowed."


def _upload_page(request: Request, *, message: Optional[str] = None, error: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "countries/upload.html",
        {"message": message, "error": error},
        status_code=status_code,
    )


def _read_upload(excel_file: Optional[UploadFile]) -> bytes:
    """Return the uploaded workbook bytes or raise FormatError with the page message."""
    if excel_file is None or not excel_file.filename:
        raise FormatError(MISSING_FILE_MESSAGE)
    if not excel_file.filename.lower().endswith(XLSX_EXTENSION):
        raise FormatError(WRONG_EXTENSION_MESSAGE)
    data = excel_file.file.read()
    if not data:
        raise FormatError(MISSING_FILE_MESSAGE)
    return data


@router.get("/UploadFromExcel", response_class=HTMLResponse)
def upload_from_excel_form(request: Request):
    return _upload_page(request)


@router.post("/UploadFromExcel", response_class=HTMLResponse)
def upload_from_excel_submit(
    request: Request,
    excel_file: Optional[UploadFile] = File(default=None),
    countries_service: CountriesService = Depends(get_countries_service),
):
    try:
        inserted = countries_service.upload_countries_from_excel_file(_read_upload(excel_file))
    except FormatError as e:
        logger.info("countries_upload_rejected: filename=%s reason=%s", getattr(excel_file, "filename", None), e)
        return _upload_page(request, error=str(e), status_code=status.HTTP_400_BAD_REQUEST)
    return _upload_page(request, message=f"{inserted} countries uploaded.")


# JSON API

@api_router.get("", response_model=List[schemas.CountryResponse])
def list_countries_endpoint(countries_service: CountriesService = Depends(get_countries_service)):
    return countries_service.get_all_countries()


@api_router.post("", response_model=schemas.CountryResponse, status_code=status.HTTP_201_CREATED)
def create_country_endpoint(
    country: schemas.CountryAddRequest,
    countries_service: CountriesService = Depends(get_countries_service),
):
    return countries_service.add_country(country)


@api_router.post("/upload")
def upload_countries_endpoint(
    excel_file: Optional[UploadFile] = File(default=None),
    countries_service: CountriesService = Depends(get_countries_service),
):
    inserted = countries_service.upload_countries_from_excel_file(_read_upload(excel_file))
    return {"uploaded": inserted}


@api_router.get("/{country_id}", response_model=schemas.CountryResponse)
def get_country_endpoint(
    country_id: uuid.UUID,
    countries_service: CountriesService = Depends(get_countries_service),
):
    country = countries_service.get_country_by_country_id(country_id)
    if country is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return country
