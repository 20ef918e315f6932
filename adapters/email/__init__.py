"""Outbound email delivery."""

from .transactional import TransactionalEmailClient

__all__ = ["TransactionalEmailClient"]
