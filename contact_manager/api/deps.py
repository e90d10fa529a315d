"""
API dependency helpers.

Provides request-scoped services bound to a database session and the
cookie-based authorization check used on edit submissions.
"""
import logging
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from contact_manager.db.database import get_db
from contact_manager.services import CountriesService, PersonsService
from contact_manager.utils.settings import get_settings

logger = logging.getLogger(__name__)


def get_countries_service(db: Session = Depends(get_db)) -> CountriesService:
    return CountriesService(db)


def get_persons_service(db: Session = Depends(get_db)) -> PersonsService:
    return PersonsService(db)


# Contract:
# Returns None when the auth cookie carries the configured token.
# Raises 401 when the cookie is missing or holds another value.

def require_auth_cookie(request: Request) -> None:
    settings = get_settings()
    token = request.cookies.get(settings.auth_cookie_name)
    if token is None or token != settings.auth_cookie_value:
        logger.warning("auth_cookie_rejected: path=%s present=%s", request.url.path, token is not None)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
