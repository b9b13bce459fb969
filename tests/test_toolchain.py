"""Tests for the native toolchain boundary."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from ouat.compiler import translate, write_output
from ouat.config import ToolchainSettings
from ouat.errors import ToolchainError
from ouat.toolchain import Toolchain, binary_path_for

HAS_GXX = shutil.which("g++") is not None


class TestCommand:
    def test_build_command(self):
        toolchain = Toolchain.from_settings(ToolchainSettings(compiler="clang++", standard="c++20"))
        assert toolchain.build_command(Path("a.cpp"), Path("a")) == [
            "clang++", "-std=c++20", "-O0", "a.cpp", "-o", "a",
        ]

    def test_binary_path(self):
        expected = "story.exe" if os.name == "nt" else "story"
        assert binary_path_for(Path("build") / "story.cpp") == Path("build") / expected


class TestFailures:
    def test_missing_compiler(self, tmp_path):
        toolchain = Toolchain(compiler="ouat-no-such-compiler")
        with pytest.raises(ToolchainError) as excinfo:
            toolchain.compile(tmp_path / "story.cpp")
        assert "was not found" in excinfo.value.message

    def test_compiler_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/" + name)
        monkeypatch.setattr(
            subprocess, "run",
            lambda command, **kwargs: subprocess.CompletedProcess(command, 2),
        )
        with pytest.raises(ToolchainError) as excinfo:
            Toolchain().compile(tmp_path / "story.cpp")
        assert excinfo.value.returncode == 2

    def test_binary_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            subprocess, "run",
            lambda command, **kwargs: subprocess.CompletedProcess(command, 3),
        )
        with pytest.raises(ToolchainError) as excinfo:
            Toolchain().run_binary(tmp_path / "story")
        assert excinfo.value.returncode == 3

    def test_binary_cannot_start(self, tmp_path):
        with pytest.raises(ToolchainError):
            Toolchain().run_binary(tmp_path / "does-not-exist")


@pytest.mark.skipif(not HAS_GXX, reason="g++ is not installed")
class TestNativeBuild:
    """Compile and run generated programs with the real compiler."""

    STORY = """\
Once upon a time.
The hero has strength of 10 and a title is brave.
The dragon is asleep.
If the dragon is asleep then
  The hero sneaks past.
Else
  The hero fights.
End.
Define the function greet as
  Tell "Hello, \\"friend\\"".
  Return.
  Tell "never printed".
Endfunction.
Call greet.
For each companion in squad do
  Tell "nobody here".
Endfor.
Random dragon leans towards friendly or hostile.
Choose your path.
The story ends.
"""

    def test_story_runs(self, tmp_path, monkeypatch):
        monkeypatch.setattr(subprocess, "run", _run_with_empty_stdin)
        result = translate(self.STORY, path="story.ouat")
        source = write_output(result, tmp_path / "story.cpp")

        toolchain = Toolchain()
        binary = toolchain.compile(source)
        completed = toolchain.run_binary(binary, capture=True)

        lines = completed.stdout.splitlines()
        assert lines[:3] == [
            "The dragon is asleep",
            "The hero sneaks past",
            'Hello, "friend"',
        ]
        assert lines[3] in ("The dragon was friendly.", "The dragon was hostile.")
        assert lines[4].startswith("your path")
        assert "never printed" not in completed.stdout
        assert "nobody here" not in completed.stdout

    def test_repeated_declarations_compile(self, tmp_path):
        story = (
            "Once upon a time.\n"
            "The hero has strength of 10.\n"
            "The hero has strength of 12.\n"
            "The hero has strength is mighty and level of 1.\n"
            "If hero is brave then\n"
            "  The hero has strength of 20.\n"
            "  The hero has gold of 1.\n"
            "Else\n"
            "  The hero has gold of 2.\n"
            "End.\n"
            "The story ends.\n"
        )
        source = write_output(translate(story, path="story.ouat"), tmp_path / "story.cpp")

        toolchain = Toolchain()
        completed = toolchain.run_binary(toolchain.compile(source), capture=True)
        assert completed.returncode == 0


_real_run = subprocess.run


def _run_with_empty_stdin(command, **kwargs):
    kwargs.setdefault("stdin", subprocess.DEVNULL)
    return _real_run(command, **kwargs)
