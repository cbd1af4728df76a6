"""
Slug generation for links created without a custom slug.
Uses Strategy Pattern so the generation algorithm can be swapped.
"""

import secrets
from abc import ABC, abstractmethod
from typing import Callable, Awaitable

from shortlink_app.exceptions import SlugGenerationError

# URL safe and easy to read: no 0/O, 1/l/I look-alikes
READABLE_CHARSET = "abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ123456789"


def generate_random_string(length: int, charset: str = READABLE_CHARSET) -> str:
    """Generate a random string from a cryptographically secure source"""
    return "".join(secrets.choice(charset) for _ in range(length))


class SlugStrategy(ABC):
    """Abstract base class for slug generation strategies"""

    @abstractmethod
    async def generate(self, is_taken: Callable[[str], Awaitable[bool]]) -> str:
        """
        Generate a slug.

        Args:
            is_taken: Coroutine telling whether a candidate slug already exists

        Returns:
            A slug that was free when checked
        """
        pass


class RandomSlugStrategy(SlugStrategy):
    """
    Random generation strategy.
    Generates a random string and checks the store for uniqueness.

    Pros: Simple, unpredictable
    Cons: Collision risk grows with the number of links
    """

    def __init__(self, length: int = 7, max_retries: int = 5):
        self.length = length
        self.max_retries = max_retries

    async def generate(self, is_taken: Callable[[str], Awaitable[bool]]) -> str:
        """Generate random slug with collision checking"""
        for _ in range(self.max_retries):
            slug = generate_random_string(self.length)
            if not await is_taken(slug):
                return slug

        raise SlugGenerationError(
            f"Could not generate unique slug after {self.max_retries} attempts"
        )
