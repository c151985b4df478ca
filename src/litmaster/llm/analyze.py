"""Single-call literary analysis.

Sends the text with the fixed methodology instruction, parses the structured
reply, and stamps it with id, type, timestamp and the original text.
"""

import time
from typing import Iterable, Optional

from .client import llm_client
from .prompts import build_analysis_prompt, system_instruction
from ..errors import AnalysisFailed
from ..mlops.tracing import tracer
from ..schemas.analysis import AnalysisPayload, AnalysisResult, TextType
from ..config import get_settings

settings = get_settings()


def now_ms() -> int:
    return int(time.time() * 1000)


def new_result_id(timestamp_ms: int, taken_ids: Iterable[str] = ()) -> str:
    """Millisecond id, bumped past any id already in the history."""
    taken = set(taken_ids)
    candidate = timestamp_ms
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def run_analysis(
    text: str,
    text_type: TextType,
    taken_ids: Iterable[str] = (),
    temperature: Optional[float] = None,
) -> AnalysisResult:
    """
    Analyze a literary text in a single LLM call.

    Args:
        text: Raw text, passed through verbatim
        text_type: PROSE / POETRY / NOVEL
        taken_ids: Ids already in the history; the new id avoids them

    Returns:
        AnalysisResult without chat history

    Raises:
        AnalysisFailed: on any endpoint, empty-reply or parse error
    """
    text_type = TextType(text_type)
    prompt = build_analysis_prompt(text, text_type)
    if temperature is None:
        temperature = settings.ANALYSIS_TEMPERATURE

    try:
        with tracer.span("llm.analyze", span_type="LLM", attributes={"text_type": text_type.value}):
            payload = llm_client.run_structured(
                prompt,
                AnalysisPayload,
                system=system_instruction(),
                temperature=temperature,
            )
    except Exception as e:
        raise AnalysisFailed(f"Analysis failed: {e}") from e

    timestamp = now_ms()
    return AnalysisResult(
        **payload.model_dump(),
        id=new_result_id(timestamp, taken_ids),
        text_type=text_type,
        timestamp=timestamp,
        original_text=text,
    )
