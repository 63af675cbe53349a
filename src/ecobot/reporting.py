"""Result presentation helpers separate from the questionnaire itself."""

from __future__ import annotations

import logging
from pathlib import Path

from ecobot.advice import Benchmark, Tip, classify_footprint, personalized_tips
from ecobot.calculator import FootprintBreakdown
from ecobot.models import Answers, RespondentKind
from ecobot.schemas import FootprintReport, TipRecord, TranscriptTurn
from ecobot.sequencer import ChatSession
from ecobot.settings import get_settings
from ecobot.share import build_share_url

LOGGER = logging.getLogger(__name__)

__all__ = ["build_report", "export_report", "format_total", "render_summary"]

_CAPTIONS: dict[RespondentKind, str] = {
    RespondentKind.INDIVIDUAL: "That's your personal annual carbon footprint!",
    RespondentKind.COMPANY: (
        "That's your company's estimated annual carbon footprint!"
    ),
}


def format_total(total_tons: float) -> str:
    """Format a footprint for display, e.g. ``"2.52 tons CO2/year"``."""

    if total_tons < 0:
        raise ValueError("total_tons must be non-negative")
    return f"{total_tons:.2f} tons CO2/year"


def caption_for(kind: RespondentKind) -> str:
    return _CAPTIONS[kind]


def _completed(session: ChatSession) -> tuple[FootprintBreakdown, Answers]:
    breakdown = session.result()
    answers = session.answers
    if answers is None:
        raise RuntimeError("Completed session has no answer record")
    return breakdown, answers


def _render_tip(index: int, tip: Tip) -> list[str]:
    return [
        f"  {index}. {tip.title}",
        f"     {tip.description}",
        f"     -> {tip.impact}",
    ]


def render_summary(session: ChatSession) -> list[str]:
    """Render the result panel of a completed session as text lines.

    Raises:
        RuntimeError: The session has not produced a result yet.
    """

    breakdown, answers = _completed(session)
    benchmark: Benchmark = classify_footprint(breakdown.total, breakdown.kind)
    tips = personalized_tips(answers, session.factors)

    lines = [
        f"[ {format_total(breakdown.total)} ]",
        benchmark.message,
        caption_for(breakdown.kind),
        "",
        "Breakdown:",
    ]
    for name, tons in breakdown.components.items():
        lines.append(f"  {name:<15} {tons:8.3f} t")
    lines.append("")
    lines.append("Your Personalized Action Plan:")
    if tips:
        for index, tip in enumerate(tips, start=1):
            lines.extend(_render_tip(index, tip))
    else:
        lines.append("  Nothing stands out. Keep it up!")
    lines.append("")
    lines.append("Every Action Matters! Small changes lead to big impacts over time.")
    return lines


def build_report(session: ChatSession, *, share_base_url: str | None = None) -> FootprintReport:
    """Assemble the exportable report for a completed session."""

    breakdown, answers = _completed(session)
    benchmark = classify_footprint(breakdown.total, breakdown.kind)
    tips = personalized_tips(answers, session.factors)
    share_url = build_share_url(
        breakdown.total, share_base_url or get_settings().share_base_url
    )

    return FootprintReport(
        kind=breakdown.kind.value,
        answers=answers.to_dict(),
        components=dict(breakdown.components),
        total_tons=breakdown.total,
        global_average_tons=benchmark.global_average,
        band=benchmark.severity,
        band_message=benchmark.message,
        tips=[TipRecord(**tip.to_dict()) for tip in tips],
        share_url=share_url,
        transcript=[
            TranscriptTurn(
                speaker=turn.speaker.value,
                content=turn.content,
                timestamp=turn.timestamp,
            )
            for turn in session.log
        ],
    )


def export_report(report: FootprintReport, path: str | Path) -> Path:
    """Write ``report`` as indented JSON to ``path``."""

    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    LOGGER.info("Footprint report exported", extra={"path": str(target)})
    return target
