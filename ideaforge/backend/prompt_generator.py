"""Code-prompt and quick build-prompt generation.

Both flows try the remote service first and fall back to the deterministic
templates on any remote failure, so valid input always yields a result.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from .constants import LOG_PREVIEW_CHARS, MAX_QUICK_IDEA_CHARS, SLIDE_CONTEXT_CHARS
from .errors import GenerationError
from .features import extract_features
from .llm_client import GenerationClient, GenerationOptions
from .models import CodePromptResult
from .prompts import build_prompt, code_prompt
from .response_parser import parse_code_prompt
from .tech_stack import infer_tech_stack
from .templates import default_file_structure, derive_summary, render_quick_template, render_template
from .validators import sanitize_input, validate_idea_input


logger = logging.getLogger("uvicorn.error")

CODE_PROMPT_OPTIONS = GenerationOptions(
    temperature=0.7,
    max_tokens=4000,
    json_mode=False,
    timeout_seconds=90.0,
)
BUILD_PROMPT_OPTIONS = GenerationOptions(
    temperature=0.7,
    max_tokens=1200,
    json_mode=False,
    timeout_seconds=30.0,
)

_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")
_PLACEHOLDER_RE = re.compile(r"\{(idea|context)\}")


def _fill_template(template: str, idea: str, context: str) -> str:
    # Placeholders inside the substituted values are never expanded.
    values = {"idea": idea, "context": context}
    return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)


def _context_string(context: Optional[Dict[str, Any]], key: str) -> str:
    if not isinstance(context, dict):
        return ""
    value = context.get(key)
    return value.strip() if isinstance(value, str) else ""


def slide_text(slide: Any) -> str:
    """Plain text of a slide given as an HTML string or a ``{"content": ...}`` object."""
    if isinstance(slide, dict):
        slide = slide.get("content")
    if not isinstance(slide, str):
        return ""
    return _SPACE_RE.sub(" ", _TAG_RE.sub(" ", slide)).strip()


def build_code_user_prompt(idea: str, context: Optional[Dict[str, Any]] = None) -> str:
    lines: List[str] = []
    name = _context_string(context, "name")
    elevator = _context_string(context, "elevator")
    if name:
        lines.append(f"**Company Name:** {name}")
    if elevator:
        lines.append(f"**Elevator Pitch:** {elevator}")

    slides = context.get("slides") if isinstance(context, dict) else None
    if isinstance(slides, list) and slides:
        slide_lines = []
        for index, slide in enumerate(slides, start=1):
            text = slide_text(slide)
            if text:
                slide_lines.append(f"- Slide {index}: {text[:SLIDE_CONTEXT_CHARS]}...")
        if slide_lines:
            lines.append("**Business Context:**\n" + "\n".join(slide_lines))

    extra = "".join(f"\n\n{line}" for line in lines)
    return _fill_template(code_prompt.USER_PROMPT_TEMPLATE, idea, extra)


def build_quick_user_prompt(idea: str, context: Optional[Dict[str, Any]] = None) -> str:
    extra = ""
    name = _context_string(context, "name")
    elevator = _context_string(context, "elevator")
    if name:
        extra += f"\nCompany: {name}"
    if elevator:
        extra += f"\nPitch: {elevator}"
    return _fill_template(build_prompt.USER_PROMPT_TEMPLATE, idea, extra)


def generate_template_result(idea: str, context: Optional[Dict[str, Any]] = None) -> CodePromptResult:
    tech_stack = infer_tech_stack(idea)
    features = extract_features(idea)
    summary = derive_summary(idea, context)
    return CodePromptResult(
        prompt=render_template(idea, context, tech_stack, features, summary),
        tech_stack=tech_stack,
        file_structure=default_file_structure(),
        summary=summary,
        features=features,
    )


class CodePromptGenerator:
    def __init__(self, client: Optional[GenerationClient]) -> None:
        self._client = client

    def generate_code_prompt(self, idea: Any, context: Any = None) -> CodePromptResult:
        """Only ``ValidationError`` escapes; remote failures use the template."""
        validate_idea_input(idea, context).raise_for_errors()
        idea = idea.strip()
        logger.info(
            "generate_code_prompt version=%s idea=%s",
            code_prompt.CODE_PROMPT_VERSION,
            sanitize_input(idea, LOG_PREVIEW_CHARS),
        )

        if self._client is None:
            logger.info("code_prompt_template reason=unconfigured")
            return generate_template_result(idea, context)

        try:
            raw_output = self._client.generate(
                code_prompt.SYSTEM_PROMPT,
                build_code_user_prompt(idea, context),
                CODE_PROMPT_OPTIONS,
            )
        except GenerationError as exc:
            logger.warning("code_prompt_fallback reason=%s error=%s", type(exc).__name__, exc.message)
            return generate_template_result(idea, context)

        return parse_code_prompt(raw_output, idea, context)


class BuildPromptGenerator:
    def __init__(self, client: Optional[GenerationClient]) -> None:
        self._client = client

    def generate_build_prompt(self, idea: Any, context: Any = None) -> str:
        validate_idea_input(idea, context, max_length=MAX_QUICK_IDEA_CHARS).raise_for_errors()
        idea = idea.strip()
        logger.info(
            "generate_build_prompt version=%s idea=%s",
            build_prompt.BUILD_PROMPT_VERSION,
            sanitize_input(idea, LOG_PREVIEW_CHARS),
        )

        if self._client is None:
            return render_quick_template(idea, context)

        try:
            return self._client.generate(
                build_prompt.SYSTEM_PROMPT,
                build_quick_user_prompt(idea, context),
                BUILD_PROMPT_OPTIONS,
            )
        except GenerationError as exc:
            logger.warning("build_prompt_fallback reason=%s error=%s", type(exc).__name__, exc.message)
            return render_quick_template(idea, context)
