from pydantic import BaseModel, ConfigDict, EmailStr, TypeAdapter, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from typing import Any, ClassVar
from datetime import datetime

_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)


def _required(field: str, v: Any) -> Any:
    # null and blank strings count as missing
    if v is None:
        raise ValueError(f"The {field} field is required.")
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError(f"The {field} field is required.")
    return v


# Fields shared by create/update; anything else in the payload is dropped
class AuthorFields(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    @field_validator("name", "email", "location", mode="before", check_fields=False)
    @classmethod
    def required_and_trimmed(cls, v: Any, info: ValidationInfo) -> Any:
        return _required(info.field_name, v)

    @field_validator("email", check_fields=False)
    @classmethod
    def valid_email(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            _ = _email_adapter.validate_python(v)
        except PydanticValidationError:
            raise ValueError("The email must be a valid email address.") from None
        return v

    @field_validator("location", check_fields=False)
    @classmethod
    def alphabetic_location(cls, v: str | None) -> str | None:
        if v is not None and not v.isalpha():
            raise ValueError("The location may only contain letters.")
        return v


# Author create schema
class AuthorCreate(AuthorFields):
    name: str
    email: str
    github: str | None = None
    twitter: str | None = None
    location: str
    latest_article_published: str | None = None


# Author update schema: every field optional, only supplied ones are applied
class AuthorUpdate(AuthorFields):
    name: str | None = None
    email: str | None = None
    github: str | None = None
    twitter: str | None = None
    location: str | None = None
    latest_article_published: str | None = None


# Author read schema
class AuthorRead(BaseModel):
    id: int
    name: str
    email: str
    github: str | None = None
    twitter: str | None = None
    location: str
    latest_article_published: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)


class DeleteConfirmation(BaseModel):
    message: str = "Deleted Successfully"
