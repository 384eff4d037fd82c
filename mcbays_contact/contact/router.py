"""
Contact form route.

Common methods are bound to the handler; any other verb is rejected by the
router and answered through contact_method_not_allowed, so every 405 on the
form path carries the same CORS headers.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from mcbays_contact.core.config import Settings, get_settings
from mcbays_contact.contact.handler import ContactFormHandler
from mcbays_contact.contact.service import MailChannelsService

CONTACT_PATH = "/"

router = APIRouter(tags=["contact"])

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_contact_handler(
    settings: Settings = Depends(get_settings),
) -> ContactFormHandler:
    return ContactFormHandler(settings, MailChannelsService(settings))


@router.api_route(CONTACT_PATH, methods=ROUTED_METHODS, include_in_schema=False)
async def contact_form(
    request: Request,
    handler: ContactFormHandler = Depends(get_contact_handler),
):
    """
    Receive a contact form post and relay it by email.

    Accepts form-encoded, multipart or JSON bodies with name, email,
    company, message and the website honeypot.
    """
    return await handler.handle(request)


async def contact_method_not_allowed(request: Request, exc: StarletteHTTPException):
    """
    Exception handler for router-level HTTP errors.

    A 405 on the form path (TRACE, PROPFIND, custom verbs) gets the
    handler's plain-text response with CORS headers; everything else falls
    through to FastAPI's default JSON error.
    """
    if exc.status_code != 405 or request.url.path != CONTACT_PATH:
        return await http_exception_handler(request, exc)

    # Dependencies do not run for exception handlers; honor overrides by hand
    resolve_settings = request.app.dependency_overrides.get(get_settings, get_settings)
    handler = get_contact_handler(resolve_settings())
    return handler.method_not_allowed()
