"""
Email Value Object
Immutable, normalized email address
"""
import re
from dataclasses import dataclass

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass(frozen=True)
class Email:
    """Email value object with validation"""

    value: str

    def __post_init__(self):
        """Validate email format"""
        if not self.is_valid(self.value):
            raise ValueError(f"Invalid email format: {self.value}")

    @classmethod
    def parse(cls, raw: str) -> "Email":
        """Build from user input, trimming whitespace and lowercasing"""
        return cls((raw or "").strip().lower())

    @staticmethod
    def is_valid(email: str) -> bool:
        """Validate email using regex"""
        return bool(EMAIL_PATTERN.match(email or ""))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email({self.value})"
