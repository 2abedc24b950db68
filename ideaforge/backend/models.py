from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_z(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class PitchRecord:
    idea: str
    name: str
    elevator: str
    slides: List[str]
    created_at: datetime = field(default_factory=utc_now)
    ip_address: str = "unknown"
    pitch_id: Optional[str] = None


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PitchResult(BaseModel):
    name: str
    elevator: str
    slides: List[str]


class CodePromptResult(CamelModel):
    prompt: str
    tech_stack: List[str] = Field(alias="techStack")
    file_structure: Dict[str, Any] = Field(alias="fileStructure")
    summary: str
    features: List[str]


class GenerateRequest(BaseModel):
    idea: Any = None


class CodePromptRequest(CamelModel):
    idea: Any = None
    pitch_data: Any = Field(default=None, alias="pitchData")


class GenerateResponse(BaseModel):
    success: bool = True
    data: PitchResult


class CodePromptData(CodePromptResult):
    generated_at: str = Field(alias="generatedAt")


class CodePromptResponse(BaseModel):
    success: bool = True
    data: CodePromptData


class BuildPromptData(CamelModel):
    prompt: str
    character_count: int = Field(alias="characterCount")
    generated_at: str = Field(alias="generatedAt")
    optimized_for: str = Field(default="quick development", alias="optimizedFor")


class BuildPromptResponse(BaseModel):
    success: bool = True
    data: BuildPromptData


class PitchSummary(CamelModel):
    id: str
    idea: str
    name: str
    elevator: str
    created_at: str = Field(alias="createdAt")


class PitchDetail(PitchSummary):
    slides: List[str]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class HistoryResponse(BaseModel):
    success: bool = True
    data: List[PitchSummary]
    pagination: Pagination


class PitchDetailResponse(BaseModel):
    success: bool = True
    data: PitchDetail
