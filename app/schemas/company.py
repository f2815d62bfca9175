"""
Pydantic schemas for company endpoints.

Field names are camelCase on the wire (numEmployees, logoUrl).
"""

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional

from app.schemas.job import CompanyJobResponse

_http_url = TypeAdapter(HttpUrl)


def _check_url(v: str) -> str:
    """Validate as an HTTP(S) URL but keep the string exactly as sent"""
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    return v


LogoUrl = Annotated[str, AfterValidator(_check_url)]


class CamelModel(BaseModel):
    """Base schema exposing snake_case attributes under camelCase names"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1, max_length=100)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[LogoUrl] = None


class CompanyUpdateRequest(CamelModel):
    """
    Schema for a partial company update.

    handle cannot be changed. Fields left out are not touched.
    """
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[LogoUrl] = None

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """name and description are NOT NULL columns"""
        if v is None:
            raise ValueError("may not be null")
        return v


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it has posted"""
    jobs: List[CompanyJobResponse]


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
