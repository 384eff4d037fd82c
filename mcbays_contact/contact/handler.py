"""
Contact form request handling.

ContactFormHandler turns one inbound request into exactly one response,
sending at most one email on the way. Branches are evaluated in order:
preflight, method gate, content negotiation, body parsing, honeypot,
required fields, send.
"""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from mcbays_contact.core.config import Settings
from mcbays_contact.contact.parsing import BodyKind, detect_body_kind, parse_submission
from mcbays_contact.contact.schemas import ContactSubmission, RequestMeta
from mcbays_contact.contact.service import MailChannelsService, build_contact_message

logger = logging.getLogger(__name__)

SUBMIT_METHOD = "POST"
PREFLIGHT_METHOD = "OPTIONS"


class ContactFormHandler:
    def __init__(self, settings: Settings, email_service: MailChannelsService):
        self.settings = settings
        self.email_service = email_service

    def cors_headers(self) -> dict:
        return {
            "Access-Control-Allow-Origin": self.settings.cors_allow_origin,
            "Access-Control-Allow-Methods": f"{SUBMIT_METHOD}, {PREFLIGHT_METHOD}",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def json_response(self, content: dict, status_code: int) -> JSONResponse:
        return JSONResponse(content, status_code=status_code, headers=self.cors_headers())

    def method_not_allowed(self) -> PlainTextResponse:
        return PlainTextResponse(
            "Method Not Allowed", status_code=405, headers=self.cors_headers()
        )

    def request_meta(self, request: Request) -> RequestMeta:
        return RequestMeta(
            ip=request.headers.get(self.settings.CLIENT_IP_HEADER) or "unknown",
            user_agent=request.headers.get("user-agent") or "unknown",
        )

    async def handle(self, request: Request) -> Response:
        method = request.method.upper()

        if method == PREFLIGHT_METHOD:
            return Response(status_code=204, headers=self.cors_headers())

        if method != SUBMIT_METHOD:
            return self.method_not_allowed()

        kind = detect_body_kind(request.headers.get("content-type"))
        if kind is BodyKind.UNSUPPORTED:
            logger.warning(
                f"Rejected content type: {request.headers.get('content-type')!r}"
            )
            return self.json_response({"error": "Unsupported Media Type"}, 415)

        parsed = await parse_submission(request, kind)
        if parsed.honeypot:
            logger.info("Honeypot field filled in - dropping submission")
            return self.json_response({"ok": True}, 200)

        if not parsed.ok:
            return self.json_response({"error": "Invalid request body"}, 400)

        submission: ContactSubmission = parsed.submission

        if not submission.has_required_fields:
            return self.json_response({"error": "Missing fields"}, 400)

        if not self.settings.TO_EMAIL:
            logger.error("TO_EMAIL is not configured - cannot relay submission")
            return self.json_response(
                {"error": "Email failed", "detail": "Recipient address is not configured"},
                500,
            )

        message = build_contact_message(
            submission, self.request_meta(request), self.settings
        )
        result = await self.email_service.send_email(message)

        if not result.success:
            return self.json_response(
                {"error": "Email failed", "detail": result.detail}, 500
            )

        logger.info(f"Contact form email relayed for {submission.email}")
        return self.json_response({"ok": True}, 200)
