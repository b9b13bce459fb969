"""Boundary to the native compiler and the produced binary.

Both steps are synchronous subprocesses run in order; the binary only runs
after a successful build, and a non-zero exit from either step raises
:class:`~ouat.errors.ToolchainError`.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import ToolchainSettings
from .errors import ToolchainError

logger = logging.getLogger(__name__)

OPTIMIZATION_FLAG = "-O0"


def binary_path_for(source: Path) -> Path:
    """``build/story.cpp`` -> ``build/story`` (``story.exe`` on Windows)."""
    suffix = ".exe" if os.name == "nt" else ""
    return source.with_suffix(suffix)


@dataclass
class Toolchain:
    """Native C++ toolchain invoked as ``<compiler> -std=<standard> -O0 src -o bin``."""

    compiler: str = "g++"
    standard: str = "c++17"

    @classmethod
    def from_settings(cls, settings: ToolchainSettings) -> "Toolchain":
        return cls(compiler=settings.compiler, standard=settings.standard)

    def is_available(self) -> bool:
        return shutil.which(self.compiler) is not None

    def build_command(self, source: Path, binary: Path) -> List[str]:
        return [
            self.compiler,
            f"-std={self.standard}",
            OPTIMIZATION_FLAG,
            str(source),
            "-o",
            str(binary),
        ]

    def compile(self, source: Path, binary: Optional[Path] = None) -> Path:
        """Compile ``source`` and return the path of the produced binary."""
        if not self.is_available():
            raise ToolchainError(
                f"C++ compiler '{self.compiler}' was not found on PATH",
                hint="Install g++ or set [toolchain] compiler in ouat.toml",
            )
        binary = binary or binary_path_for(source)
        command = self.build_command(source, binary)
        logger.debug("Running build: %s", " ".join(command))
        result = subprocess.run(command)
        if result.returncode != 0:
            raise ToolchainError(
                f"Compilation failed with exit code {result.returncode}",
                path=str(source),
                returncode=result.returncode,
            )
        return binary

    def run_binary(self, binary: Path, *, capture: bool = False) -> subprocess.CompletedProcess:
        """Run ``binary`` with no arguments; stdout/stderr pass through unless captured."""
        command = [str(binary.resolve())]
        logger.debug("Running binary: %s", command[0])
        try:
            result = subprocess.run(command, capture_output=capture, text=True)
        except OSError as exc:
            raise ToolchainError(f"Could not execute {binary}: {exc}", path=str(binary)) from exc
        if result.returncode != 0:
            raise ToolchainError(
                f"Story binary exited with code {result.returncode}",
                path=str(binary),
                returncode=result.returncode,
            )
        return result


__all__ = ["OPTIMIZATION_FLAG", "Toolchain", "binary_path_for"]
