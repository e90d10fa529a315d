import uuid
from pydantic import BaseModel, ConfigDict


class CountryAddRequest(BaseModel):
    country_name: str | None = None


class CountryResponse(BaseModel):
    country_id: uuid.UUID
    country_name: str | None = None
    model_config = ConfigDict(from_attributes=True)
