"""Custom exceptions for lexical2pt."""


class Lexical2ptError(Exception):
    """Base exception for lexical2pt operations."""


class ConversionError(Lexical2ptError):
    """Error while converting a Lexical node to Portable Text."""


class RenderError(Lexical2ptError):
    """Error in the Portable Text renderer setup."""


class ComponentError(RenderError):
    """Invalid HTML component table or override."""
