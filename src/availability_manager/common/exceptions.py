"""
This file contains custom, application-specific exceptions.
"""

class ServiceNotFoundError(Exception):
    """Raised when a service ID is not found or the service is inactive."""
    pass

class PatternNotFoundError(Exception):
    """Raised when an availability pattern is not found for the given service."""
    pass

class ExceptionNotFoundError(Exception):
    """Raised when a service exception (blackout period) is not found."""
    pass

class SharableLinkNotFoundError(Exception):
    """Raised when a public token does not resolve to an active sharable link."""
    pass
