#!/usr/bin/env python3
import argparse
import dataclasses
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ideaforge.backend.errors import GenerationError
from ideaforge.backend.llm_client import build_generation_client, load_llm_settings
from ideaforge.backend.pitch_generator import PitchGenerator

DEFAULT_IDEA = "A mobile app that helps people find and book local fitness classes in their neighborhood"


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Live check of the remote pitch generation path.")
    parser.add_argument("--idea", default=DEFAULT_IDEA, help="Startup idea to pitch.")
    parser.add_argument("--model", default=None, help="Override DEEPSEEK_MODEL for this run.")
    args = parser.parse_args(argv)

    settings = load_llm_settings()
    if not settings.is_configured:
        print("DEEPSEEK_API_KEY is not set; nothing to check.")
        sys.exit(2)
    if args.model:
        settings = dataclasses.replace(settings, model=args.model)

    print(f"Base URL: {settings.base_url}")
    print(f"Model: {settings.model}")
    generator = PitchGenerator(build_generation_client(settings))
    try:
        pitch = generator.generate_pitch(args.idea)
    except GenerationError as exc:
        print(f"Generation failed [{exc.label}]: {exc.message}")
        sys.exit(1)

    print(f"Name: {pitch.name}")
    print(f"Elevator: {pitch.elevator}")
    print(f"Slides: {len(pitch.slides)}")
    print("Remote check passed.")


if __name__ == "__main__":
    main()
