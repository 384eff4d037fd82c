"""
Email service for relaying contact form submissions via MailChannels.
"""

import logging

import httpx

from mcbays_contact.core.config import Settings
from mcbays_contact.contact.schemas import (
    ContactSubmission,
    EmailAddress,
    EmailContent,
    EmailSendResult,
    MailChannelsMessage,
    Personalization,
    RequestMeta,
)

logger = logging.getLogger(__name__)


def compose_body_text(submission: ContactSubmission, meta: RequestMeta) -> str:
    """Render the plain-text email body read by the site operators."""
    return (
        "New contact form submission\n"
        "\n"
        f"Name:    {submission.name}\n"
        f"Email:   {submission.email}\n"
        f"Company: {submission.company}\n"
        "\n"
        "Message:\n"
        f"{submission.message}\n"
        "\n"
        "Meta:\n"
        f"IP: {meta.ip}\n"
        f"UA: {meta.user_agent}\n"
    )


def build_contact_message(
    submission: ContactSubmission,
    meta: RequestMeta,
    settings: Settings,
) -> MailChannelsMessage:
    """
    Build the MailChannels send request for a submission.

    Replies go straight to the submitter; the sender identity comes from
    settings with the McBays defaults.
    """
    return MailChannelsMessage(
        personalizations=[Personalization(to=[EmailAddress(email=settings.TO_EMAIL)])],
        from_=EmailAddress(email=settings.sender_email, name=settings.sender_name),
        reply_to=EmailAddress(email=submission.email, name=submission.name),
        subject=f"New contact from {submission.name}",
        content=[EmailContent(type="text/plain", value=compose_body_text(submission, meta))],
    )


class MailChannelsService:
    """Service for sending emails via the MailChannels transactional API"""

    def __init__(self, settings: Settings):
        self.api_url = settings.MAILCHANNELS_API_URL
        self.api_key = settings.MAILCHANNELS_API_KEY
        self.timeout = settings.HTTP_REQUEST_TIMEOUT_SECONDS

    async def send_email(self, message: MailChannelsMessage) -> EmailSendResult:
        """
        Send one message. No retries: a failure is reported once.

        Args:
            message: Fully built MailChannels request body

        Returns:
            EmailSendResult: success flag, provider status code and, on
            failure, the provider's response text (or the transport error)
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key

        recipients = ", ".join(
            address.email for p in message.personalizations for address in p.to
        )
        logger.info(f"Sending email - To: {recipients}, Subject: {message.subject}")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=message.to_payload(),
                    headers=headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach MailChannels: {type(e).__name__}: {e}")
            return EmailSendResult(success=False, detail=str(e) or type(e).__name__)

        if not response.is_success:
            logger.error(
                f"MailChannels rejected email - Status: {response.status_code}, "
                f"Body: {response.text}"
            )
            return EmailSendResult(
                success=False,
                status_code=response.status_code,
                detail=response.text,
            )

        logger.info(f"Email accepted by MailChannels - Status: {response.status_code}")
        return EmailSendResult(success=True, status_code=response.status_code)
