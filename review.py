#!/usr/bin/env python3
"""
Batch code review over a source tree.

Walks a directory, splits each source file into chunks, asks Groq for a
review of every chunk and prints an aggregated report.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv

load_dotenv()

from app.config import settings  # noqa: E402
from core.analyzer import classify  # noqa: E402
from core.prompts import REVIEW_SYSTEM_PROMPT, build_review_prompt  # noqa: E402
from providers.base import ProviderResponseError, ProviderUnavailableError  # noqa: E402
from providers.groq_provider import GroqProvider  # noqa: E402

logger = logging.getLogger("complexity-analyzer.review")

INCLUDE_SUFFIXES = {".js", ".jsx", ".ts", ".tsx", ".py"}
EXCLUDE_DIRS = {"node_modules", ".next", "dist", "build", ".git", "__pycache__", ".venv"}
SEVERITIES = ("low", "medium", "high")

cli = typer.Typer(help="AI code review for a source tree", add_completion=False)


def walk(root: Path) -> list[Path]:
    """Source files under ``root``, skipping build and vendor directories."""
    found: list[Path] = []
    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError:
        return found
    for entry in entries:
        if entry.is_dir():
            if entry.name in EXCLUDE_DIRS:
                continue
            found.extend(walk(Path(entry.path)))
        elif entry.is_file() and Path(entry.name).suffix.lower() in INCLUDE_SUFFIXES:
            found.append(Path(entry.path))
    return found


def chunk_text(text: str, max_chars: int) -> list[str]:
    """Split ``text`` into consecutive pieces of at most ``max_chars``."""
    if len(text) <= max_chars:
        return [text]
    return [text[start:start + max_chars] for start in range(0, len(text), max_chars)]


def normalize_review(data: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Fill in missing or malformed review fields."""
    if data is None:
        return {"issues": [], "summary": "Non-JSON response", "recommended_actions": []}
    return {
        **data,
        "issues": data.get("issues") if isinstance(data.get("issues"), list) else [],
        "summary": data.get("summary") if isinstance(data.get("summary"), str) else "",
        "recommended_actions": (
            data.get("recommended_actions")
            if isinstance(data.get("recommended_actions"), list)
            else []
        ),
    }


def merge_chunks(file_path: str, reviews: list[dict[str, Any]]) -> dict[str, Any]:
    """Combine per-chunk reviews into one file review."""
    recommended = list(dict.fromkeys(a for r in reviews for a in r.get("recommended_actions") or []))
    return {
        "file": file_path,
        "issues": [i for r in reviews for i in r.get("issues") or []],
        "summary": " ".join(r["summary"] for r in reviews if r.get("summary")),
        "recommended_actions": recommended,
    }


def summarize_issues(analyses: list[dict[str, Any]]) -> dict[str, Any]:
    """Count files, issues and issues per severity."""
    agg = {
        "files": len(analyses),
        "totalIssues": 0,
        "severityCount": {sev: 0 for sev in SEVERITIES},
    }
    for analysis in analyses:
        issues = analysis.get("issues") if analysis else None
        if not isinstance(issues, list):
            continue
        agg["totalIssues"] += len(issues)
        for issue in issues:
            sev = str(issue.get("severity") or "medium").lower()
            if sev in agg["severityCount"]:
                agg["severityCount"][sev] += 1
    return agg


async def review_chunk(
    provider: GroqProvider, code: str, file_path: str, chunk_index: int, total_chunks: int
) -> dict[str, Any]:
    prompt = build_review_prompt(code, file_path, chunk_index, total_chunks)
    try:
        data = await provider.complete_json(prompt=prompt, system_prompt=REVIEW_SYSTEM_PROMPT)
    except ProviderResponseError:
        data = None
    return normalize_review(data)


async def review_file(provider: GroqProvider, path: Path, max_chars: int) -> Optional[dict[str, Any]]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    if not content:
        return None

    chunks = chunk_text(content, max_chars)
    reviews = []
    for index, chunk in enumerate(chunks):
        reviews.append(await review_chunk(provider, chunk, str(path), index, len(chunks)))

    review = merge_chunks(str(path), reviews)
    review["complexity"] = classify(content).model_dump(mode="json")
    return review


def print_report(analyses: list[dict[str, Any]]) -> None:
    typer.echo("\n=== Summary ===")
    typer.echo(json.dumps(summarize_issues(analyses), indent=2))

    typer.echo("\n=== Findings ===")
    for analysis in analyses:
        typer.echo(f"\n# {analysis['file']}")
        complexity = analysis.get("complexity")
        if complexity:
            typer.echo(
                f"Heuristic: time {complexity['timeComplexityType']}, "
                f"space {complexity['spaceComplexityType']}, rating {complexity['codeRating']}/5"
            )
        if not analysis["issues"]:
            typer.echo("No issues found")
            continue
        for issue in analysis["issues"]:
            hint = f" (hint: {issue['lineHint']})" if issue.get("lineHint") else ""
            severity = str(issue.get("severity") or "").upper()
            typer.echo(f"- [{severity}] {issue.get('type')}: {issue.get('message')}{hint}")
        if analysis["recommended_actions"]:
            typer.echo("Recommended actions:")
            for action in analysis["recommended_actions"]:
                typer.echo(f"  - {action}")


async def run_review(root: Path, max_chars: int) -> list[dict[str, Any]]:
    files = walk(root)
    if not files:
        typer.echo("No source files found.")
        return []

    analyses = []
    async with GroqProvider() as provider:
        typer.echo(f"AI Code Analysis using model={provider.model}")
        typer.echo(f"Scanning: {root}")
        for path in files:
            typer.echo(f"Analyzing: {path}")
            try:
                review = await review_file(provider, path, max_chars)
            except Exception as exc:
                logger.error("Error analyzing %s: %s", path, exc)
                continue
            if review:
                analyses.append(review)
        usage = provider.usage
        logger.info(
            "Groq usage: %d requests, %d prompt tokens, %d completion tokens",
            usage["requests"],
            usage["prompt_tokens"],
            usage["completion_tokens"],
        )
    return analyses


@cli.command()
def main(
    root: Path = typer.Argument(Path("src"), help="Directory to scan"),
    max_chars: int = typer.Option(
        settings.AI_MAX_CHARS_PER_CHUNK, "--max-chars", help="Characters per chunk"
    ),
):
    """Review every source file under ROOT."""
    if not settings.GROQ_API_KEY:
        typer.echo("Missing GROQ_API_KEY. Create .env with GROQ_API_KEY=...", err=True)
        raise typer.Exit(code=1)

    try:
        analyses = asyncio.run(run_review(root.resolve(), max_chars))
    except ProviderUnavailableError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    if analyses:
        print_report(analyses)


if __name__ == "__main__":
    cli()
