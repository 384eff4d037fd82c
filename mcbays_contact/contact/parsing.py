"""
Content negotiation and body parsing for contact form posts.

Parsing never raises: every outcome is reported through BodyParseResult so
the handler can map failures to a 400 response.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from mcbays_contact.contact.schemas import ContactSubmission

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
JSON_CONTENT_TYPE = "application/json"


class BodyKind(str, Enum):
    FORM = "form"
    JSON = "json"
    UNSUPPORTED = "unsupported"


def detect_body_kind(content_type: Optional[str]) -> BodyKind:
    """Classify a Content-Type header value. Matching is by substring."""
    ct = (content_type or "").lower()
    if any(form_type in ct for form_type in FORM_CONTENT_TYPES):
        return BodyKind.FORM
    if JSON_CONTENT_TYPE in ct:
        return BodyKind.JSON
    return BodyKind.UNSUPPORTED


@dataclass(frozen=True)
class BodyParseResult:
    submission: Optional[ContactSubmission] = None
    error: Optional[str] = None
    honeypot: bool = False

    @property
    def ok(self) -> bool:
        return self.submission is not None

    @classmethod
    def success(cls, submission: ContactSubmission) -> "BodyParseResult":
        return cls(submission=submission)

    @classmethod
    def failure(cls, error: str) -> "BodyParseResult":
        return cls(error=error)

    @classmethod
    def trapped(cls) -> "BodyParseResult":
        return cls(honeypot=True)


def is_honeypot(fields: dict) -> bool:
    """
    True when the hidden website field carries anything at all. Checked on
    the raw mapping, before field types are validated, with no trimming.
    """
    return bool(fields.get("website"))


async def _read_form_fields(request: Request) -> dict:
    async with request.form() as form:
        # dict() over the multi-dict keeps the last value per key
        return dict(form)


async def _read_json_fields(request: Request) -> dict:
    data = await request.json()
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


async def parse_submission(request: Request, kind: BodyKind) -> BodyParseResult:
    """
    Read the request body as form fields or a JSON object and build a
    ContactSubmission from it.

    Args:
        request: Incoming request
        kind: Result of detect_body_kind for the request's Content-Type

    Returns:
        BodyParseResult carrying the submission, the honeypot flag, or an
        error description
    """
    if kind is BodyKind.UNSUPPORTED:
        return BodyParseResult.failure("unsupported content type")

    try:
        if kind is BodyKind.FORM:
            fields = await _read_form_fields(request)
        else:
            fields = await _read_json_fields(request)
    except (MultiPartException, HTTPException, ValueError) as e:
        logger.warning(f"Could not parse {kind.value} body: {e}")
        return BodyParseResult.failure(str(e))

    if is_honeypot(fields):
        return BodyParseResult.trapped()

    try:
        submission = ContactSubmission.model_validate(fields)
    except ValidationError as e:
        logger.warning(
            f"Submission fields have unexpected types: {e.error_count()} error(s)"
        )
        return BodyParseResult.failure("invalid field values")

    return BodyParseResult.success(submission)
