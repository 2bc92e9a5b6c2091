"""Short code generation."""

import random
import string
from typing import Awaitable, Callable, Optional

from .common.validators import RESERVED_CODES, SHORT_CODE_PATTERN
from .errors import GenerationExhaustedError


class ShortCodeGenerator:
    """Generate random short codes and allocate unused ones."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Length of generated codes, 6 to 8
        """
        if not 6 <= default_length <= 8:
            raise ValueError("default_length must be between 6 and 8")
        self.default_length = default_length
        self._random = random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Draw a code uniformly from the base62 alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return "".join(self._random.choices(self.BASE62_CHARS, k=length))

    async def generate_unique(
        self,
        is_taken: Callable[[str], Awaitable[bool]],
        max_attempts: int = 5,
    ) -> str:
        """Draw codes until one is neither taken nor reserved.

        No backoff and no widening of the code space between attempts.

        Args:
            is_taken: Async existence check against storage
            max_attempts: Total number of candidates to try

        Returns:
            A code that was free at the time of the check

        Raises:
            GenerationExhaustedError: If every candidate collided
        """
        for _ in range(max_attempts):
            code = self.generate_random()
            if code not in RESERVED_CODES and not await is_taken(code):
                return code

        raise GenerationExhaustedError("Unable to generate unique short code")

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code is 6-8 alphanumeric characters."""
        return isinstance(code, str) and SHORT_CODE_PATTERN.fullmatch(code) is not None
