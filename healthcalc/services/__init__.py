"""
Application services.

Calculator evaluation and the contact form relay.
"""

from .contact import ContactService, ContactSubmission, EmailSender, OutgoingEmail
from .evaluation import Calculator, CalculatorEvaluator, default_evaluator

__all__ = [
    "Calculator",
    "CalculatorEvaluator",
    "default_evaluator",
    "ContactService",
    "ContactSubmission",
    "EmailSender",
    "OutgoingEmail",
]
