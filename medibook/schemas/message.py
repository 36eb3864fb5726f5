from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import EmailStr, StringConstraints

from .common import CamelModel, Name, Phone


class MessageCreate(CamelModel):
    first_name: Name
    last_name: Name
    email: EmailStr
    phone: Phone
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


class MessageResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    message: str
    created_at: Optional[datetime] = None


class MessageListResponse(CamelModel):
    success: bool = True
    messages: List[MessageResponse]
