"""
Custom exception hierarchy for the Arvier system.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    crop: Optional[str] = None
    date: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ArvierError(Exception):
    """Base exception for all Arvier errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.crop:
            context_str += f" [Crop: {self.context.crop}]"
        if self.context.date:
            context_str += f" [Date: {self.context.date}]"
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Data-related errors
class DataError(ArvierError):
    """Base class for data-related errors"""
    pass


class DataSourceError(DataError):
    """Weather could not be fetched or read"""
    pass


class DataValidationError(DataError):
    """Weather data is malformed or incomplete"""
    pass


# Configuration errors
class ConfigurationError(ArvierError):
    """Configuration file or settings could not be used"""
    pass


class CropConfigurationError(ConfigurationError):
    """Unknown crop or invalid crop parameters"""
    pass


# Builtin and third-party errors mapped onto the hierarchy, first match wins
_ERROR_MAP = (
    (FileNotFoundError, DataSourceError),
    (ConnectionError, DataSourceError),
    (TimeoutError, DataSourceError),
    (ValueError, DataValidationError),
    (KeyError, DataValidationError),
)


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> ArvierError:
    """
    Wrap a generic exception in the Arvier hierarchy.

    Used at the boundaries where pandas, pydantic or file I/O errors
    surface, so that callers only need to catch ArvierError.
    """
    if isinstance(exc, ArvierError):
        return exc

    for exc_type, arvier_exc_type in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return arvier_exc_type(str(exc), context)

    return ArvierError(str(exc), context)
