"""
Contact form module
"""
from .router import router
from .handler import ContactFormHandler
from .service import MailChannelsService
from .schemas import (
    ContactSubmission,
    MailChannelsMessage,
)
