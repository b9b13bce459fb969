"""
Once Upon a Time (``.ouat``) story translator.

This package turns programs written in a small, sentence-oriented
narrative notation into a self-contained C++ compilation unit that an
external native toolchain can build and run.  A story opens with
``Once upon a time.`` and closes with ``The story ends.``; in between it
narrates events, tracks boolean world state inferred from phrases such as
``The dragon is asleep.``, branches, loops, prompts the reader and lets
fate decide between two states.

The code is organised into several modules:

* ``lang`` – the keyword table, the tokenizer and the recursive descent
  parser that produces the statement tree.
* ``ast`` – immutable dataclasses for the statement tree and a plain text
  outline printer.
* ``analysis`` – the world-state pass that derives ``<subject>_is_<state>``
  flags and their initial values from narrative phrasing.
* ``codegen`` – the C++ emitter that walks the tree and renders the
  compilation unit.
* ``compiler`` and ``toolchain`` – the front-to-back pipeline and the
  boundary to the native compiler and the produced binary.
* ``cli`` – the ``ouat`` command line interface.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
  root = Path(__file__).resolve().parents[1]
  pyproject = root / "pyproject.toml"
  if not pyproject.exists():
    return None
  try:
    text = pyproject.read_text(encoding="utf-8")
  except OSError:  # pragma: no cover - IO errors should not break imports
    return None
  match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
  if match:
    return match.group(1)
  return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("ouat")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
  __version__ = _local_version() or "0.3.0"
else:  # pragma: no cover - version override for in-repo runs
  __version__ = _local_version() or __version__

__all__ = ["__version__"]
