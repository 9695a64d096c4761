"""
Core utilities: exceptions and the log-then-propagate error boundary.
"""

from imbibe_action.core.errors import log_and_reraise
from imbibe_action.core.exceptions import AssemblyFailure, ImbibeError, ResolutionFailure

__all__ = ["AssemblyFailure", "ImbibeError", "ResolutionFailure", "log_and_reraise"]
