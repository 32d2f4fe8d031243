# thinking_tools/services/handlers.py
from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List

from thinking_tools.agents.eda_prompts import build_eda_prompts
from thinking_tools.charts.chart_spec import build_chart_spec, resolve_columns, save_chart_spec
from thinking_tools.core.types import AnalysisPart
from thinking_tools.io.csv_reader import load_dataset
from thinking_tools.llm.session import ChatSession, ChatModel
from thinking_tools.reports.artifacts import render_summary, timestamp_ms, write_artifact
from thinking_tools.tools.schemas import AnalyzeCSVInput, GenerateThinkingInput, VisualizeDataInput

logger = logging.getLogger(__name__)


async def generate_thinking(args: GenerateThinkingInput, out_dir: Path, llm: ChatModel) -> Dict[str, Any]:
    session = ChatSession(llm)
    text = await asyncio.to_thread(session.send, args.prompt)
    filename = f"gemini_thinking_{timestamp_ms()}.txt"
    saved = await asyncio.to_thread(write_artifact, out_dir, filename, text)
    logger.info("saved response", extra={"tool": "generate-thinking", "path": saved.path})
    return {"message": text, "savedFile": saved.to_dict()}


async def analyze_csv(args: AnalyzeCSVInput, out_dir: Path, llm: ChatModel) -> Dict[str, Any]:
    logger.info("reading CSV file", extra={"tool": "analyze-csv", "path": args.csv_path})
    dataset = await asyncio.to_thread(load_dataset, args.csv_path)
    prompts = build_eda_prompts(dataset.records, args.analysis_type)

    session = ChatSession(llm)
    ts = timestamp_ms()
    parts: List[AnalysisPart] = []
    for i, prompt in enumerate(prompts, start=1):
        logger.info(
            f"sending analysis prompt {i}/{len(prompts)}",
            extra={"tool": "analyze-csv", "part": i, "parts": len(prompts)},
        )
        text = await asyncio.to_thread(session.send, prompt)
        # 途中で失敗しても書き込み済みの part はそのまま残す
        saved = await asyncio.to_thread(write_artifact, out_dir, f"csv_analysis_{ts}_part{i}.txt", text)
        parts.append(AnalysisPart(part=i, content=text, file=saved))

    summary = await asyncio.to_thread(
        write_artifact, out_dir, f"csv_analysis_{ts}_summary.txt", render_summary(parts)
    )
    return {
        "message": "CSV analysis completed successfully",
        "analysisType": args.analysis_type,
        "responses": [p.to_dict() for p in parts],
        "summary": summary.to_dict(),
    }


async def visualize_data(args: VisualizeDataInput, out_dir: Path) -> Dict[str, Any]:
    logger.info("reading CSV file for visualization", extra={"tool": "visualize-data", "path": args.csv_path})
    dataset = await asyncio.to_thread(load_dataset, args.csv_path)
    columns = resolve_columns(dataset.columns, args.columns)
    spec = build_chart_spec(dataset.records, columns, args.visualization_type, args.title)
    saved = await asyncio.to_thread(save_chart_spec, spec, out_dir)
    return {
        "message": "Visualizations generated successfully",
        "visualizationType": args.visualization_type,
        "files": [{"path": saved.path, "filename": saved.filename}],
    }
