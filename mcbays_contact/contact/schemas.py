"""
Pydantic schemas for contact form submissions and the MailChannels send API.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactSubmission(BaseModel):
    """Fields read from one contact form post. Missing fields are empty text."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""
    email: str = ""
    company: str = ""
    message: str = ""
    website: str = ""  # Honeypot, hidden from humans

    @field_validator("name", "email", "company", "message", "website", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value

    @property
    def has_required_fields(self) -> bool:
        return bool(self.name.strip() and self.email.strip() and self.message.strip())


class RequestMeta(BaseModel):
    """Caller details appended to the relayed email."""

    ip: str = "unknown"
    user_agent: str = "unknown"


class EmailAddress(BaseModel):
    email: str
    name: Optional[str] = None


class Personalization(BaseModel):
    to: List[EmailAddress]


class EmailContent(BaseModel):
    type: str = "text/plain"
    value: str


class MailChannelsMessage(BaseModel):
    """Request body for the MailChannels /tx/v1/send endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    personalizations: List[Personalization]
    from_: EmailAddress = Field(alias="from")
    reply_to: EmailAddress
    subject: str
    content: List[EmailContent]

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class EmailSendResult(BaseModel):
    """Outcome of a single send attempt."""

    success: bool
    status_code: Optional[int] = None
    detail: str = ""
