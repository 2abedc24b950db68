"""Shared fixtures: fake generation clients and an app client wired to them."""

import json
import os

import pytest

# The web module builds its collaborators at import time from the environment.
os.environ.pop("DATABASE_URL", None)
os.environ.pop("DEEPSEEK_API_KEY", None)

from fastapi.testclient import TestClient

from ideaforge.backend import web
from ideaforge.backend.pitch_generator import PitchGenerator
from ideaforge.backend.prompt_generator import BuildPromptGenerator, CodePromptGenerator
from ideaforge.backend.storage import InMemoryPitchStore


FITNESS_IDEA = "A mobile app that helps people find and book local fitness classes in their neighborhood"


class FakeGenerationClient:
    """Returns a canned completion and records every call."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls = []

    def generate(self, system_prompt, user_prompt, options):
        self.calls.append((system_prompt, user_prompt, options))
        return self.text


class FailingGenerationClient:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = []

    def generate(self, system_prompt, user_prompt, options):
        self.calls.append((system_prompt, user_prompt, options))
        raise self.error


def pitch_payload(slide_count: int = 4) -> str:
    return json.dumps(
        {
            "name": "FitFinder",
            "elevator": "Book any local fitness class in two taps.",
            "slides": [f"<section><h1>Slide {i}</h1></section>" for i in range(1, slide_count + 1)],
        }
    )


@pytest.fixture
def fitness_idea() -> str:
    return FITNESS_IDEA


@pytest.fixture
def pitch_store(monkeypatch):
    store = InMemoryPitchStore()
    monkeypatch.setattr(web, "pitch_store", store)
    return store


@pytest.fixture
def app_client(monkeypatch, pitch_store):
    """Factory: ``app_client(generation_client)`` returns a TestClient using it."""

    def _build(generation_client=None) -> TestClient:
        monkeypatch.setattr(web, "pitch_generator", PitchGenerator(generation_client))
        monkeypatch.setattr(web, "code_prompt_generator", CodePromptGenerator(generation_client))
        monkeypatch.setattr(web, "build_prompt_generator", BuildPromptGenerator(generation_client))
        return TestClient(web.app)

    return _build
