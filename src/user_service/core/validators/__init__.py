"""Input validators."""

from .email import is_email_valid

__all__ = ["is_email_valid"]
