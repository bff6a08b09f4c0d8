import re
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import NonBlankStr

# At least 6 characters with one letter, one digit and one special character
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{6,}$")
PASSWORD_RULE = (
    "Password must be at least 6 characters long, include at least one letter, "
    "one number, and one special character"
)


def check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_RULE)
    return value


class UserCreate(BaseModel):
    name: NonBlankStr
    email: EmailStr
    username: NonBlankStr = Field(..., max_length=50)
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class UserLogin(BaseModel):
    emailOrUsername: NonBlankStr
    password: str = Field(..., min_length=6)


class SignupDetailsUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    email: Optional[EmailStr] = None
    username: Optional[NonBlankStr] = None
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        return check_password(value) if value is not None else value


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
    username: str


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserSummary
