"""Font subsetting through the HarfBuzz ``hb-subset`` command."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from typing import Any

_STDIN = "/dev/stdin"
_STDOUT = "/dev/stdout"


def _cutset_text(cutset: Iterable[str | int]) -> str:
    chars = {chr(c) if isinstance(c, int) else c for c in cutset}
    if not chars:
        raise ValueError("cutset is too small")
    return "".join(sorted(chars))


def _run(font_file: str, text: str, src: bytes | None) -> bytes:
    args = [
        "hb-subset",
        f"--font-file={font_file}",
        "-t",
        text,
        "--retain-gids",
        "-o",
        _STDOUT,
    ]
    result = subprocess.run(args, input=src, capture_output=True, check=True)
    return result.stdout


def hb_subset_path(path: str, cutset: Iterable[str | int]) -> bytes:
    """Return the bytes of the font at ``path`` reduced to the characters in ``cutset``.

    Glyph IDs are retained. Raises ValueError for an empty cutset and
    subprocess.CalledProcessError if ``hb-subset`` fails.
    """
    return _run(str(path), _cutset_text(cutset), None)


def hb_subset(src: bytes, cutset: Iterable[str | int]) -> bytes:
    """Return the font ``src`` reduced to the characters in ``cutset``.

    The font is passed to ``hb-subset`` on standard input; glyph IDs are retained.
    """
    return _run(_STDIN, _cutset_text(cutset), bytes(src))


class HarfBuzzSubsetter:
    """A font subsetter that delegates to ``hb-subset``, preferring a font path over bytes."""

    def __init__(self) -> None:
        self.path = ""
        self.src: bytes | None = None

    def init(self, sfnt: Any, src: bytes | None, path: str) -> None:
        """Record the font's source bytes and path; the parsed font is not used."""
        self.path = path
        self.src = src

    def subset(self, cutset: Iterable[str | int]) -> bytes:
        """Return the subset font for ``cutset``."""
        if self.path:
            return hb_subset_path(self.path, cutset)
        if self.src is not None:
            return hb_subset(self.src, cutset)
        raise ValueError("no font source data provided")