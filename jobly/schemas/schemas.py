"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names are snake_case in Python and camelCase on the wire.
"""

from decimal import Decimal
from typing import Annotated, List, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: Optional[str]) -> Optional[str]:
    """Validate as an http(s) URL but keep the caller's exact string."""
    if value is not None:
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid http(s) URL")
    return value


LogoUrl = Annotated[Optional[str], AfterValidator(_check_url)]

# integer columns are 32-bit
INT_MAX = 2_147_483_647


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InputModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# ============================================================
# AUTH SCHEMAS
# ============================================================

class TokenRequest(InputModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=20)

class RegisterRequest(InputModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

class TokenResponse(CamelModel):
    token: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyNew(InputModel):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    logo_url: LogoUrl = None

class CompanyUpdate(InputModel):
    name: str = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    logo_url: LogoUrl = None

class CompanySearch(InputModel):
    min_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    max_employees: Optional[int] = Field(None, ge=0, le=INT_MAX)
    name_like: Optional[str] = Field(None, min_length=1)

class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None

class CompanyOut(CamelModel):
    company: CompanyResponse

class CompanyListOut(CamelModel):
    companies: List[CompanyResponse]


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobNew(InputModel):
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)

class JobUpdate(InputModel):
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

class JobSearch(InputModel):
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0, le=INT_MAX)
    has_equity: Optional[bool] = None

class JobResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

class JobOut(CamelModel):
    job: JobResponse

class JobListOut(CamelModel):
    jobs: List[JobResponse]


# ============================================================
# USER SCHEMAS
# ============================================================

class UserNew(InputModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False

class UserUpdate(InputModel):
    password: str = Field(None, min_length=5, max_length=20)
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    email: EmailStr = None

class UserResponse(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool

class UserDetailResponse(UserResponse):
    jobs: List[int] = []

class UserOut(CamelModel):
    user: UserResponse

class UserDetailOut(CamelModel):
    user: UserDetailResponse

class UserListOut(CamelModel):
    users: List[UserResponse]

class UserTokenOut(CamelModel):
    user: UserResponse
    token: str

class AppliedOut(CamelModel):
    applied: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class DeletedOut(CamelModel):
    deleted: Union[int, str]

class HealthResponse(CamelModel):
    status: str
    database: str
