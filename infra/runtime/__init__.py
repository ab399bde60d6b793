from .structured_logger import LEVELS, StructuredLogger

__all__ = ["LEVELS", "StructuredLogger"]
