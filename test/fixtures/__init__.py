"""Test fixtures for integration and unit tests."""

from .abstractions import (
    Calculator,
    Car,
    Chicken,
    Egg,
    EnglishGreeter,
    Greeter,
    InMemoryRepository,
    Item,
    Mailer,
    NeedsCount,
    Notifier,
    OrderService,
    PriceCalculator,
    Pricing,
    Repository,
    SealedService,
    Settings,
    Wheel,
)

__all__ = [
    "Calculator",
    "Car",
    "Chicken",
    "Egg",
    "EnglishGreeter",
    "Greeter",
    "InMemoryRepository",
    "Item",
    "Mailer",
    "NeedsCount",
    "Notifier",
    "OrderService",
    "PriceCalculator",
    "Pricing",
    "Repository",
    "SealedService",
    "Settings",
    "Wheel",
]
