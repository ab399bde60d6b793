from .auto_mocking_container import AutoMockingContainer

__all__ = ["AutoMockingContainer"]
