"""Short code generation utilities."""

import string
import time
from typing import Callable, Optional


class CodeGenerator:
    """Derive candidate short codes from a monotonically increasing source.
    
    Codes are the base-62 rendering of the source value. Two calls that read
    the same value produce the same code, so callers must check candidates
    against the store before committing them.
    """
    
    # Digit value order: 0-9, A-Z, a-z
    BASE62_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase
    
    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """Initialize code generator.
        
        Args:
            clock: Callable returning a non-negative integer that increases
                between calls (defaults to the wall clock in nanoseconds)
        """
        self.clock = clock or time.time_ns
    
    def generate(self) -> str:
        """Generate a candidate short code from the current source value.
        
        Returns:
            Base-62 short code
        """
        return self.encode(self.clock())
    
    @classmethod
    def encode(cls, num: int) -> str:
        """Convert a non-negative integer to a base-62 string.
        
        Zero encodes to the single symbol "0" so that no input yields an
        empty code.
        
        Args:
            num: Integer to convert
            
        Returns:
            Base62 string, most significant symbol first
            
        Raises:
            ValueError: If num is negative
        """
        if num < 0:
            raise ValueError(f"Cannot encode negative value: {num}")
        
        if num == 0:
            return cls.BASE62_CHARS[0]
        
        result = []
        base = len(cls.BASE62_CHARS)
        
        while num > 0:
            num, remainder = divmod(num, base)
            result.append(cls.BASE62_CHARS[remainder])
        
        return ''.join(reversed(result))
    
    @classmethod
    def decode(cls, code: str) -> int:
        """Convert a base-62 string back to an integer.
        
        Args:
            code: Base62 string
            
        Returns:
            Integer value
            
        Raises:
            ValueError: If code is empty or has a symbol outside the alphabet
        """
        if not cls.is_valid_format(code):
            raise ValueError(f"Not a base-62 code: {code!r}")
        
        result = 0
        base = len(cls.BASE62_CHARS)
        
        for char in code:
            result = result * base + cls.BASE62_CHARS.index(char)
        
        return result
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code is a non-empty alphanumeric string."""
        return bool(code) and all(c in CodeGenerator.BASE62_CHARS for c in code)
