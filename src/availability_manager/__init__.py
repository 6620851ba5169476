"""
Availability Manager backend.

Service providers describe recurring availability patterns and one-off or
yearly exceptions; the backend expands them into bookable slots and exposes
the available ones through a sharable public link.
"""
__version__ = "0.1.0"
