from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal


class JobBase(BaseModel):
    """Job schemas use camelCase names on the wire (companyHandle)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobCreateRequest(JobBase):
    """Schema for creating a new job"""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(JobBase):
    """
    Schema for a partial job update.

    companyHandle is accepted for compatibility but never applied.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: Optional[str] = None

    @field_validator("title")
    @classmethod
    def reject_null_title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v


class CompanyJobResponse(JobBase):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class JobResponse(CompanyJobResponse):
    """Schema for job response"""
    company_handle: str


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class DeletedResponse(BaseModel):
    """Schema for delete responses"""
    deleted: str
