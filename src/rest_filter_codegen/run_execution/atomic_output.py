"""Write-then-rename output so a failed run never leaves partial files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_text_atomically(output_path: Path | str, text: str) -> Path:
    """Write ``text`` to a sibling temporary file, then rename it over ``output_path``."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=destination.parent,
        prefix=f".{destination.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        temporary = Path(handle.name)
        try:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        except OSError:
            handle.close()
            temporary.unlink(missing_ok=True)
            raise
    try:
        os.replace(temporary, destination)
    except OSError:
        temporary.unlink(missing_ok=True)
        raise
    return destination.resolve()
