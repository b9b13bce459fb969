"""Shared pytest fixtures for the story translator tests."""

import pytest

from ouat.analysis import analyze_world_state
from ouat.codegen import emit_cpp
from ouat.lang.parser import parse_story


def _wrap(body: str) -> str:
    return f"Once upon a time.\n{body}\nThe story ends.\n"


@pytest.fixture
def wrap():
    """Wrap statements in the mandatory prologue and epilogue."""
    return _wrap


@pytest.fixture
def parse_body():
    """Parse statements wrapped in a story and return the top-level statements."""
    def _parse(body: str):
        return parse_story(_wrap(body)).statements
    return _parse


@pytest.fixture
def emit_body():
    """Translate statements wrapped in a story and return the C++ source."""
    def _emit(body: str) -> str:
        story = parse_story(_wrap(body))
        return emit_cpp(story, analyze_world_state(story))
    return _emit


@pytest.fixture
def story_file(tmp_path):
    """Write a story file into a temporary directory and return its path."""
    def _write(body: str, name: str = "story.ouat"):
        path = tmp_path / name
        path.write_text(_wrap(body), encoding="utf-8")
        return path
    return _write
