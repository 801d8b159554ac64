"""GitHub Actions step outputs."""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Mapping, Optional


def write_outputs(outputs: Mapping[str, str], output_file: Optional[Path] = None) -> bool:
    """Append ``outputs`` to the ``$GITHUB_OUTPUT`` file.

    Returns False when no output file is configured (for example outside Actions).
    """
    if output_file is None:
        configured = os.environ.get("GITHUB_OUTPUT", "").strip()
        if not configured:
            return False
        output_file = Path(configured)

    with output_file.open("a", encoding="utf-8") as handle:
        for name, value in outputs.items():
            handle.write(format_output(name, value))
    return True


def format_output(name: str, value: str) -> str:
    """Serialise one output using the heredoc form, which is safe for multi-line values."""
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:  # pragma: no cover - uuid collision
        raise ValueError("Output delimiter collides with output content")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


__all__ = ["format_output", "write_outputs"]
