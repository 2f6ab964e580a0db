"""
Custom exceptions for the border routes library.
"""

from typing import Hashable, Optional


class BorderRoutesException(Exception):
    """Base exception for the application."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ResolutionFailure(BorderRoutesException):
    """Raised when the neighbours of a node cannot be looked up."""
    def __init__(self, node_id: Optional[Hashable], message: str):
        self.node_id = node_id
        super().__init__(message)


class UnknownCountryException(BorderRoutesException):
    """Raised when a country name or code is not in the directory."""
    pass


class CountryServiceUnavailableException(BorderRoutesException):
    """Raised when the countries API is unreachable or returns an error."""
    pass


class InvalidEndpointsException(BorderRoutesException):
    """Raised when start and destination name the same country."""
    pass
