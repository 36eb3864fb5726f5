from datetime import date
from typing import Annotated, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d{11}$")]
Nic = Annotated[str, StringConstraints(strip_whitespace=True, min_length=13, max_length=13)]
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Gender = Literal["male", "female", "other"]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python, readable from ORM objects."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PersonalDetails(CamelModel):
    first_name: Name
    last_name: Name
    email: EmailStr
    phone: Phone
    nic: Nic
    dob: date
    gender: Gender

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class StatusResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
