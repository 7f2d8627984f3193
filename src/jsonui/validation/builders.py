"""Shorthand constructors for common checks."""

from .models import ValidationCheck


class Checks:
    """Check builders with default messages."""

    @staticmethod
    def required(message: str = "This field is required") -> ValidationCheck:
        return ValidationCheck(fn="required", message=message)

    @staticmethod
    def email(message: str = "Invalid email address") -> ValidationCheck:
        return ValidationCheck(fn="email", message=message)

    @staticmethod
    def min_length(min: int, message: str | None = None) -> ValidationCheck:
        return ValidationCheck(
            fn="minLength",
            args={"min": min},
            message=message or f"Must be at least {min} characters",
        )

    @staticmethod
    def max_length(max: int, message: str | None = None) -> ValidationCheck:
        return ValidationCheck(
            fn="maxLength",
            args={"max": max},
            message=message or f"Must be at most {max} characters",
        )

    @staticmethod
    def pattern(pattern: str, message: str = "Invalid format") -> ValidationCheck:
        return ValidationCheck(fn="pattern", args={"pattern": pattern}, message=message)

    @staticmethod
    def min(min: float, message: str | None = None) -> ValidationCheck:
        return ValidationCheck(fn="min", args={"min": min}, message=message or f"Must be at least {min}")

    @staticmethod
    def max(max: float, message: str | None = None) -> ValidationCheck:
        return ValidationCheck(fn="max", args={"max": max}, message=message or f"Must be at most {max}")

    @staticmethod
    def numeric(message: str = "Must be a number") -> ValidationCheck:
        return ValidationCheck(fn="numeric", message=message)

    @staticmethod
    def url(message: str = "Invalid URL") -> ValidationCheck:
        return ValidationCheck(fn="url", message=message)

    @staticmethod
    def matches(other_path: str, message: str = "Fields must match") -> ValidationCheck:
        return ValidationCheck(fn="matches", args={"other": {"path": other_path}}, message=message)


check = Checks()
