from __future__ import annotations

import json
import logging
from typing import Sequence

from groq import Groq

from ..advocates.models import Advocate
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You help people find a health advocate. "
    "Given a person's description of what they need and a list of candidate "
    "advocates, choose the single advocate who best fits and explain the "
    "choice in two or three warm, plain sentences addressed to the person.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"advocate_id": "<id>", "recommendation": "<explanation>"}\n'
    "Use an id from the provided list. If nobody is a reasonable fit, return "
    '{"advocate_id": null, "recommendation": null}.'
)


def _build_user_message(query: str, candidates: Sequence[Advocate]) -> str:
    lines = ["## What the person needs", query.strip()]

    lines.append("\n## Candidate Advocates")
    lines.append("| ID | Name | City | Degree | Specialties | Years |")
    lines.append("|---|---|---|---|---|---|")
    for a in candidates:
        lines.append(
            f"| {a.id} | {a.full_name} | {a.city} | {a.degree} "
            f"| {'; '.join(a.specialties)} | {a.years_of_experience} |"
        )

    return "\n".join(lines)


def match_advocate(
    query: str,
    candidates: Sequence[Advocate],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> tuple[Advocate, str] | None:
    """
    Ask the Groq LLM for the single best advocate.

    Returns ``(advocate, explanation)``, or ``None`` on any failure (timeout,
    bad JSON, API error, unknown id) and when the model finds no fit.
    """
    if not config.enabled or not config.api_key:
        return None

    if not candidates:
        return None

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": _build_user_message(query, candidates)},
            ],
            max_tokens=config.max_tokens,
            temperature=0.2,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = json.loads(content)

        advocate_id = parsed.get("advocate_id")
        explanation = parsed.get("recommendation")
        if advocate_id is None or not explanation:
            return None

        by_id = {a.id: a for a in candidates}
        advocate = by_id.get(str(advocate_id))
        if advocate is None:
            logger.warning("Groq LLM picked unknown advocate id %r", advocate_id)
            return None

        return advocate, str(explanation)

    except Exception:
        logger.warning("Groq LLM call failed, falling back to heuristic matching", exc_info=True)
        return None
