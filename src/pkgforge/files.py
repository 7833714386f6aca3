"""File-writing helpers shared by the generator and the plugins."""

from __future__ import annotations

from pathlib import Path


def gen_file(path: Path, text: str) -> int:
    """
    Write ``text`` to ``path``, creating parent directories.

    The file always ends with a newline.

    Returns
    -------
    int
        Number of characters written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not text.endswith("\n"):
        text += "\n"
    return path.write_text(text, encoding="utf-8")
