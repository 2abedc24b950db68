import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .constants import MAX_IDEA_CHARS, MIN_IDEA_CHARS
from .errors import ValidationError


HARMFUL_PATTERNS = (
    re.compile(r"script\s*:", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
)


@dataclass
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    details: List[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        if not self.is_valid:
            raise ValidationError(self.error or "Invalid input.", details=self.details)


def _idea_errors(idea: Any, max_length: int) -> List[str]:
    if idea is None or idea == "":
        return ["Idea is required"]
    if not isinstance(idea, str):
        return ["Idea must be a string"]

    errors: List[str] = []
    trimmed = idea.strip()
    if not trimmed:
        errors.append("Idea cannot be empty")
    elif len(trimmed) < MIN_IDEA_CHARS:
        errors.append(f"Idea must be at least {MIN_IDEA_CHARS} characters long")
    elif len(trimmed) > max_length:
        errors.append(f"Idea must be less than {max_length} characters")

    if any(pattern.search(trimmed) for pattern in HARMFUL_PATTERNS):
        errors.append("Idea contains potentially harmful content")
    return errors


def _context_errors(context: Any) -> List[str]:
    if context is None:
        return []
    if not isinstance(context, dict):
        return ["Pitch data must be an object"]

    errors: List[str] = []
    name = context.get("name")
    elevator = context.get("elevator")
    slides = context.get("slides")
    if name is not None and not isinstance(name, str):
        errors.append("Pitch name must be a string")
    if elevator is not None and not isinstance(elevator, str):
        errors.append("Elevator pitch must be a string")
    if slides is not None and not isinstance(slides, list):
        errors.append("Slides must be an array")
    return errors


def validate_idea_input(
    idea: Any,
    context: Any = None,
    *,
    max_length: int = MAX_IDEA_CHARS,
) -> ValidationResult:
    """Check an idea (and optional pitch context) before any generation.

    Every violation is collected in order; the first one becomes ``error``.
    Pass ``max_length=MAX_QUICK_IDEA_CHARS`` for the quick build prompt.
    """
    details = _idea_errors(idea, max_length) + _context_errors(context)
    return ValidationResult(
        is_valid=not details,
        error=details[0] if details else None,
        details=details,
    )


def sanitize_input(value: Any, max_length: int = MAX_IDEA_CHARS) -> str:
    if not isinstance(value, str):
        return ""
    cleaned = value.strip()
    cleaned = re.sub(r"[<>]", "", cleaned)
    cleaned = re.sub(r"javascript:", "java_script:", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"script", "sc_ript", cleaned, flags=re.IGNORECASE)
    return cleaned[:max_length]
