import logging
from typing import Any, Optional

from .constants import LOG_PREVIEW_CHARS
from .errors import ConfigError, StructureError
from .llm_client import GenerationClient, GenerationOptions
from .models import PitchResult
from .prompts.pitch import PITCH_PROMPT_VERSION, SYSTEM_PROMPT, USER_PROMPT_TEMPLATE
from .response_parser import parse_pitch
from .validators import sanitize_input, validate_idea_input


logger = logging.getLogger("uvicorn.error")

PITCH_OPTIONS = GenerationOptions(
    temperature=0.7,
    max_tokens=4000,
    json_mode=True,
    timeout_seconds=60.0,
)


class PitchGenerator:
    """Idea -> {name, elevator, slides}.

    There is no local substitute for AI-authored slides, so every remote or
    structural failure propagates to the caller.
    """

    def __init__(self, client: Optional[GenerationClient]) -> None:
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def generate_pitch(self, idea: Any) -> PitchResult:
        validate_idea_input(idea).raise_for_errors()
        if self._client is None:
            raise ConfigError("Generation service is not configured. Please check server configuration.")

        idea = idea.strip()
        logger.info(
            "generate_pitch version=%s idea=%s",
            PITCH_PROMPT_VERSION,
            sanitize_input(idea, LOG_PREVIEW_CHARS),
        )
        raw_output = self._client.generate(
            SYSTEM_PROMPT,
            USER_PROMPT_TEMPLATE.replace("{idea}", idea),
            PITCH_OPTIONS,
        )
        try:
            pitch = parse_pitch(raw_output)
        except StructureError as exc:
            logger.warning("generate_pitch_invalid_structure error=%s", exc.message)
            raise
        logger.info("generate_pitch_done name=%s slides=%s", pitch.name, len(pitch.slides))
        return pitch
