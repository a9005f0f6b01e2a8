"""
Pydantic schemas for request and response validation.
"""

from datetime import date, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _RequiredFieldsModel(BaseModel):
    """
    Request body whose required fields report a per-field message.

    Required fields are declared with a ``None`` default and
    ``validate_default=True`` so a missing key and an empty value fail with
    the same message.
    """

    model_config = ConfigDict(populate_by_name=True)

    required_messages: ClassVar[dict[str, str]] = {}

    @classmethod
    def check_required(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "" or value == []:
            raise ValueError(cls.required_messages[info.field_name])
        return value


# =============================================================================
# Profile
# =============================================================================


class ProfileUpsertRequest(_RequiredFieldsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "status": "Status is required",
        "skills": "Skills is required",
    }

    status: str | None = Field(default=None, validate_default=True)
    skills: str | None = Field(
        default=None,
        validate_default=True,
        description="Comma-separated skills, e.g. 'python, fastapi, sql'",
    )
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status", "skills", mode="before")
    @classmethod
    def require_value(cls, value: Any, info: ValidationInfo) -> Any:
        return cls.check_required(value, info)


class ExperienceCreateRequest(_RequiredFieldsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "title": "Title is required",
        "company": "Company is required",
        "from_date": "From date is required",
    }

    title: str | None = Field(default=None, validate_default=True)
    company: str | None = Field(default=None, validate_default=True)
    from_date: date | None = Field(default=None, alias="from", validate_default=True)
    location: str | None = None
    to: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("title", "company", "from_date", mode="before")
    @classmethod
    def require_value(cls, value: Any, info: ValidationInfo) -> Any:
        return cls.check_required(value, info)


class EducationCreateRequest(_RequiredFieldsModel):
    required_messages: ClassVar[dict[str, str]] = {
        "school": "School is required",
        "degree": "Degree is required",
        "fieldofstudy": "Field of study is required",
        "from_date": "From date is required",
    }

    school: str | None = Field(default=None, validate_default=True)
    degree: str | None = Field(default=None, validate_default=True)
    fieldofstudy: str | None = Field(default=None, validate_default=True)
    from_date: date | None = Field(default=None, alias="from", validate_default=True)
    location: str | None = None
    to: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("school", "degree", "fieldofstudy", "from_date", mode="before")
    @classmethod
    def require_value(cls, value: Any, info: ValidationInfo) -> Any:
        return cls.check_required(value, info)


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


class SocialLinks(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    id: int
    user: UserSummary
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    msg: str
