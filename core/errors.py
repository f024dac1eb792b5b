"""Custom errors with tracking IDs."""

from prefixed.generator import generate
from utils.timestamp import format_timestamp


class BaseIdError(Exception):
    """Base error with unique ID and timestamp for tracking."""
    
    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = generate("err")
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause
    
    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class ConfigError(BaseIdError):
    """Invalid or incomplete configuration."""
    
    def __init__(self, message, field=None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        super().__init__(message, context=context, **kwargs)


class HealthCheckError(BaseIdError):
    """Health check failures."""
    
    def __init__(self, message, component=None, **kwargs):
        context = kwargs.pop("context", {})
        if component:
            context["component"] = component
        super().__init__(message, context=context, **kwargs)
