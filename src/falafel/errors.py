"""Exceptions raised while generating stubs.

Every fatal condition derives from `GenerationError`, so callers can abort a run with a single handler.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all fatal generation errors."""

    pass


class ConfigurationError(GenerationError):
    """Raised when required plugin parameters are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"missing required parameter(s): {', '.join(missing)}")


class ListenerResolutionError(GenerationError):
    """Raised when a service has neither an explicit nor a default listener."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"no listener set for service {service}")


class UnsupportedStreamingError(GenerationError):
    """Raised for client-only streaming methods, which mobile stubs cannot express."""

    def __init__(self, service: str, method: str):
        self.service = service
        self.method = method
        super().__init__(f"unexpected method type: {service}.{method} is client-streaming only")


class SchemaError(GenerationError):
    """Raised when the request references a file that was not provided."""

    pass


class RenderError(GenerationError):
    """Raised when a template fails to render."""

    pass
