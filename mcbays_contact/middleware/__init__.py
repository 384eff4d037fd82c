"""Middleware package for the application."""

from mcbays_contact.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
