# thinking_tools/tools/schemas.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from thinking_tools.core.types import AnalysisType, ChartType


class ToolInput(BaseModel):
    # wire names are camelCase (csvPath, outputDir, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    output_dir: Optional[str] = Field(default=None, description="Directory to save output files (optional)")


class GenerateThinkingInput(ToolInput):
    prompt: str = Field(..., description="Prompt for generating thinking process text")


class AnalyzeCSVInput(ToolInput):
    csv_path: str = Field(..., description="Path to the CSV file to analyze")
    analysis_type: AnalysisType = Field(
        default="detailed", description="Type of analysis to perform (basic or detailed)"
    )


class VisualizeDataInput(ToolInput):
    csv_path: str = Field(..., description="Path to the CSV file to visualize")
    visualization_type: ChartType = Field(
        default="bar", description="Type of visualization to generate"
    )
    columns: Optional[List[str]] = Field(
        default=None, description="Columns to visualize (first column for labels, second for values)"
    )
    title: Optional[str] = Field(default=None, description="Chart title (optional)")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[ToolInput]

    def input_schema(self) -> Dict[str, Any]:
        return _clean_schema(self.input_model.model_json_schema(by_alias=True))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


TOOLS: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="generate-thinking",
            description="Generate detailed thinking process text using Gemini's experimental thinking model",
            input_model=GenerateThinkingInput,
        ),
        ToolSpec(
            name="analyze-csv",
            description="Analyze CSV file using Gemini's AI capabilities for EDA and data science insights",
            input_model=AnalyzeCSVInput,
        ),
        ToolSpec(
            name="visualize-data",
            description="Generate visualizations from CSV data using Chart.js",
            input_model=VisualizeDataInput,
        ),
    )
}


def _clean_schema(node: Any) -> Any:
    """Drop pydantic titles and collapse Optional[X] (anyOf X|null) back to X."""
    if isinstance(node, list):
        return [_clean_schema(n) for n in node]
    if not isinstance(node, dict):
        return node
    out: Dict[str, Any] = {}
    for k, v in node.items():
        if k == "title":
            continue
        if k == "properties" and isinstance(v, dict):
            out[k] = {name: _clean_schema(prop) for name, prop in v.items()}
            continue
        out[k] = _clean_schema(v)
    any_of = out.get("anyOf")
    if isinstance(any_of, list):
        non_null = [s for s in any_of if s.get("type") != "null"]
        if len(non_null) == 1 and len(any_of) == 2:
            out.pop("anyOf")
            out.update(non_null[0])
            if out.get("default", ...) is None:
                out.pop("default")
    return out


def list_tools() -> List[Dict[str, Any]]:
    return [spec.to_dict() for spec in TOOLS.values()]
