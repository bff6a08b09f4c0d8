from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, StringConstraints

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class MessageResponse(BaseModel):
    message: str


class ShareTargets(BaseModel):
    """Where to send a shared list or trailer. Every channel is optional."""
    email: Optional[EmailStr] = None
    whatsapp: Optional[str] = None
    sms: Optional[str] = None
    message: Optional[str] = None
