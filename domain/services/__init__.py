"""
Domain services.

Registration, selector capture and the technology-neutral fake engine base.
They depend only on domain models and ports so that concrete mocking
technologies and containers stay in the infrastructure layer.
"""

from .fake_engine import RewritingFakeEngine
from .registrar import Registrar, RegistrationExpression
from .selectors import capture_selector

__all__ = [
    "Registrar",
    "RegistrationExpression",
    "RewritingFakeEngine",
    "capture_selector",
]
