"""Human-readable summaries of detection results."""

from __future__ import annotations

from nimdetect.images.types import ClassificationResult

NO_SOURCE = "none"


def top_source(sources: dict[str, float]) -> tuple[str, float] | None:
    """Entry with the strictly highest confidence; first one wins on ties."""
    best: tuple[str, float] | None = None
    for name, score in sources.items():
        if best is None or score > best[1]:
            best = (name, score)
    return best


def format_percent(value: float) -> str:
    return f"{value * 100:.2f}"


def summarize(result: ClassificationResult) -> str:
    probability = format_percent(result.is_ai_generated)
    best = top_source(result.possible_sources)
    if best is None or best[0] == NO_SOURCE:
        source_text = "No specific AI source identified."
    else:
        name, score = best
        source_text = f"Most likely source: {name} ({format_percent(score)}% confidence)."
    return f"AI Image Analysis: Image is {probability}% likely to be AI-generated. {source_text}"
