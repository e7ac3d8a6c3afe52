"""
Exceptions raised by the sliding computations.
"""

# API public
__all__ = ['ConfigurationError']



class ConfigurationError(ValueError):
    """
    Raised when the window, border, convention or thread choices are invalid.
    Always raised before any computation is done, so no partial output is ever returned.
    """
