# thinking_tools/reports/artifacts.py
from __future__ import annotations
import time
from pathlib import Path
from typing import Sequence
from jinja2 import Template

from thinking_tools.core.errors import FileWriteError
from thinking_tools.core.types import Artifact, AnalysisPart

PART_TMPL = Template("=== Analysis Part {{ part }} ===\n\n{{ content }}\n\n", keep_trailing_newline=True)


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def ensure_dir(path: str | Path) -> Path:
    p = Path(path).resolve()
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteError(f"Cannot create output directory '{p}': {e}") from e
    return p


def write_artifact(output_dir: str | Path, filename: str, content: str) -> Artifact:
    """Create `filename` under output_dir. Never overwrites an existing file."""
    path = Path(output_dir) / filename
    try:
        with path.open("x", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileWriteError(f"Cannot write artifact '{path}': {e}") from e
    return Artifact(filename=filename, path=str(path))


def render_summary(parts: Sequence[AnalysisPart]) -> str:
    return "\n".join(PART_TMPL.render(part=p.part, content=p.content) for p in parts)
