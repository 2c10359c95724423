"""
Custom exception classes for ServerSetup.

This module defines the exception hierarchy used throughout the application
for consistent error handling and reporting.
"""

from typing import Optional


class ServerSetupError(Exception):
    """Base exception class for all ServerSetup errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
    
    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ValidationError(ServerSetupError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(ServerSetupError):
    """Raised when configuration is invalid or missing."""
    pass


class APIError(ServerSetupError):
    """Raised when API calls fail."""
    pass


class ResolutionError(ServerSetupError):
    """Raised when the primary server artifact cannot be resolved."""
    pass


class PluginNotFoundWarning(ServerSetupError):
    """Raised inside plugin resolvers; never fatal to a provisioning run."""
    pass


class DownloadError(ServerSetupError):
    """Raised when file download fails."""
    pass


class LaunchPreconditionError(ServerSetupError):
    """Raised when no server jar matching the requested type and version exists."""
    pass
