import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from .constants import MAX_SLIDES, MIN_SLIDES
from .errors import StructureError
from .features import extract_features, extract_features_with_content
from .models import CodePromptResult, PitchResult
from .tech_stack import dedupe, infer_tech_stack
from .templates import default_file_structure, derive_summary


@dataclass(frozen=True)
class ParsedObject:
    fields: Dict[str, Any]


@dataclass(frozen=True)
class RawText:
    text: str


ParseResult = Union[ParsedObject, RawText]


def _candidate_spans(text: str) -> Iterator[str]:
    """Yield every balanced ``{...}`` span, ordered by its opening brace.

    One pass over the text with a stack of open positions. Quotes only open a
    string inside braces, and braces inside strings are ignored.
    """
    spans = []
    open_positions: List[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"' and open_positions:
            in_string = True
        elif char == "{":
            open_positions.append(index)
        elif char == "}" and open_positions:
            spans.append((open_positions.pop(), index))
    for start, end in sorted(spans):
        yield text[start : end + 1]


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (TypeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


def parse_structured(raw_text: Any) -> ParseResult:
    """Total parse of model output: a JSON object if one can be found, else the raw text."""
    if not isinstance(raw_text, str):
        return RawText(text="" if raw_text is None else str(raw_text))

    fields = _loads_object(raw_text.strip())
    if fields is not None:
        return ParsedObject(fields=fields)

    for span in _candidate_spans(raw_text):
        fields = _loads_object(span)
        if fields is not None:
            return ParsedObject(fields=fields)
    return RawText(text=raw_text)


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return dedupe([item.strip() for item in value if _non_empty_string(item)])


def parse_pitch(raw_text: str) -> PitchResult:
    parsed = parse_structured(raw_text)
    if isinstance(parsed, RawText):
        raise StructureError("Failed to parse pitch response. The AI may have returned invalid JSON.")

    payload = parsed.fields
    name = payload.get("name")
    elevator = payload.get("elevator")
    slides = payload.get("slides")
    if not _non_empty_string(name) or not _non_empty_string(elevator):
        raise StructureError("Invalid pitch structure: name and elevator must be non-empty strings.")
    if not isinstance(slides, list) or not slides:
        raise StructureError("Invalid pitch structure: slides must be a non-empty array.")
    if not (MIN_SLIDES <= len(slides) <= MAX_SLIDES):
        raise StructureError(f"Invalid number of slides (should be {MIN_SLIDES}-{MAX_SLIDES}).")
    for index, slide in enumerate(slides):
        if not _non_empty_string(slide):
            raise StructureError(f"Invalid pitch structure: slides[{index}] must be a non-empty string.")

    return PitchResult(name=name.strip(), elevator=elevator.strip(), slides=slides)


def parse_code_prompt(
    raw_text: str,
    idea: str,
    context: Optional[Dict[str, Any]] = None,
) -> CodePromptResult:
    """Structure remote output into a code prompt result. Never raises.

    A JSON object with ``prompt`` and ``techStack`` is used as-is, with missing
    parts filled in locally; anything else becomes the prompt text verbatim.
    """
    parsed = parse_structured(raw_text)
    if isinstance(parsed, ParsedObject):
        payload = parsed.fields
        prompt = payload.get("prompt")
        if _non_empty_string(prompt) and isinstance(payload.get("techStack"), list):
            file_structure = payload.get("fileStructure")
            summary = payload.get("summary")
            return CodePromptResult(
                prompt=prompt,
                tech_stack=_string_list(payload.get("techStack")) or infer_tech_stack(idea, prompt),
                file_structure=file_structure if isinstance(file_structure, dict) and file_structure
                else default_file_structure(),
                summary=summary.strip() if _non_empty_string(summary) else derive_summary(idea, context),
                features=_string_list(payload.get("features")) or extract_features(idea),
            )

    text = raw_text if isinstance(raw_text, str) else ""
    return CodePromptResult(
        prompt=text,
        tech_stack=infer_tech_stack(idea, text),
        file_structure=default_file_structure(),
        summary=derive_summary(idea, context),
        features=extract_features_with_content(idea, text),
    )
