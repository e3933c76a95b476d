"""
Artifact: planner_service/smartstudy/orchestrators/study_guide_orchestrator.py
Purpose: Generates per-day study guides with the LLM and validates model output against the StudyGuide schema.
Author: SmartStudy Team
Created: 2026-10-13
Revised:
- 2026-10-13: Replaced bracket-scanning JSON repair with fence stripping plus strict schema validation. (SmartStudy Team)
Preconditions:
- A configured StudyGuideClient (NVIDIA_API_KEY set) is injected by the caller.
- LangChain/NVIDIA dependencies are installed.
Inputs:
- Acceptable: GuideTarget describing the event and the day distance to it.
- Unacceptable: Unconfigured or closed clients.
Postconditions:
- Returns a schema-valid StudyGuide or raises StudyGuideError.
Returns:
- `StudyGuide` model instances.
Errors/Exceptions:
- StudyGuideError for missing credentials, non-JSON output, schema-invalid JSON, or repeated call failures.
"""

import json
import re
import time

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from ..clients.llm_client import StudyGuideClient
from ..core.logging import get_logger
from ..schemas.shared import StudyGuide
from ..services.plan_synthesizer import GuideTarget

logger = get_logger("smartstudy.guides")

MAX_RETRIES = 2

SYSTEM_PROMPT = """\
You write short daily study guides for high school students.

Write like a friendly teacher talking to one student: conversational, specific, and warm.
Do not sound like an AI assistant. Avoid stock phrases such as "As an AI", "delve",
"In conclusion", or "It is important to note".

Always answer with one valid JSON object and nothing else.\
"""

HUMAN_TEMPLATE = """\
Create the study guide for this student's day.

Event: {title}
Subject: {subject}
Event type: {event_type}
Event date: {event_date}
Timing: {timing}

Make the steps specific to {subject} and to where the student is in their preparation.

Return STRICT JSON ONLY (no markdown fences, no commentary outside the object).
Use DOUBLE QUOTES for all keys and string values. No trailing commas.

Return a JSON object matching this schema:
{{
  "howToComplete": ["3 to 6 concrete steps for today"],
  "guides": ["3 to 5 short study tips"],
  "suggestions": "one encouraging sentence for today",
  "motivation": ["exactly 3 short motivational messages"]
}}\
"""

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```$")


class StudyGuideError(RuntimeError):
    """Raised when a model-generated study guide cannot be produced or trusted."""


def _to_text(x):
    """Normalize LangChain outputs into a plain string."""
    if x is None:
        return ""
    if isinstance(x, str):
        return x
    if isinstance(x, list):
        return "\n".join(_to_text(i) for i in x)
    if isinstance(x, dict) and isinstance(x.get("text"), str):
        return x["text"]
    content = getattr(x, "content", None)
    if content is not None:
        return _to_text(content)
    return str(x)


def _strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    cleaned = _FENCE_OPEN_RE.sub("", cleaned)
    cleaned = _FENCE_CLOSE_RE.sub("", cleaned)
    return cleaned.strip()


def _describe_timing(days_until: int) -> str:
    if days_until > 0:
        unit = "day" if days_until == 1 else "days"
        return f"{days_until} {unit} until the event"
    if days_until == 0:
        return "the event is today"
    unit = "day" if days_until == -1 else "days"
    return f"the event was {-days_until} {unit} ago"


def parse_study_guide(text: str) -> StudyGuide:
    """Parse raw model output into a StudyGuide, raising StudyGuideError on any mismatch."""
    cleaned = _strip_code_fences(text)
    if not cleaned:
        raise StudyGuideError("Empty model output; cannot parse study guide.")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise StudyGuideError(f"Model output is not valid JSON: {e}. Snippet: {cleaned[:200]}") from e

    if not isinstance(data, dict):
        raise StudyGuideError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return StudyGuide.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise StudyGuideError(f"Study guide failed validation on fields: {fields}") from e


def _prompt_variables(target: GuideTarget) -> dict:
    return {
        "title": target.title,
        "subject": target.subject,
        "event_type": target.event_type.value,
        "event_date": target.event_date.isoformat(),
        "timing": _describe_timing(target.days_until),
    }


async def generate_study_guide(client: StudyGuideClient, target: GuideTarget) -> StudyGuide:
    """
    Ask the model for a study guide for one plan day.

    Each attempt's output must parse and validate on its own; up to
    MAX_RETRIES attempts are made before StudyGuideError is raised.
    """
    if not client.configured:
        raise StudyGuideError("NVIDIA_API_KEY is not set")

    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", SYSTEM_PROMPT),
            ("human", HUMAN_TEMPLATE),
        ]
    )
    chain = prompt | client.chat_model()
    variables = _prompt_variables(target)

    last_error = None
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            logger.info("Study guide attempt %d/%d for %r…", attempt, MAX_RETRIES, target.title)
            t0 = time.time()

            res = await chain.ainvoke(variables)

            elapsed_ms = int((time.time() - t0) * 1000)
            logger.info("LLM returned in %dms (attempt %d)", elapsed_ms, attempt)

            text = _to_text(res).strip()
            logger.debug("Model output (first 500 chars): %r", text[:500])

            guide = parse_study_guide(text)
            logger.info("Study guide parse succeeded for %r", target.title)
            return guide

        except Exception as e:
            last_error = e
            logger.warning("Attempt %d failed: %s", attempt, repr(e))

    raise StudyGuideError(f"All {MAX_RETRIES} attempts failed. Last error: {last_error}")
