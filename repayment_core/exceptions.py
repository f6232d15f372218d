"""
Error types for the repayment core.
"""

from typing import Any, Optional


class InvalidInput(ValueError):
    """Raised when a calculation receives a value outside its contract"""
    
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
