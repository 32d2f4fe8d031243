# thinking_tools/core/types.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Literal, List, Dict, Any
import time

AnalysisType = Literal["basic", "detailed"]
ChartType = Literal["bar", "line", "scatter", "pie"]

# one parsed CSV row: column name -> raw cell text
Record = Dict[str, str]


@dataclass(frozen=True)
class Artifact:
    filename: str
    path: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class Exchange:
    prompt: str
    response: str
    ts: float = field(default_factory=time.time)


@dataclass
class AnalysisPart:
    part: int
    content: str
    file: Artifact

    def to_dict(self) -> Dict[str, Any]:
        return {"part": self.part, "content": self.content, "file": self.file.to_dict()}


@dataclass
class Dataset:
    """Materialized records plus the header they were read with."""
    columns: List[str]
    records: List[Record]

    @property
    def row_count(self) -> int:
        return len(self.records)
