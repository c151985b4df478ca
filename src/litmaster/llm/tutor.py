"""Follow-up tutor chat grounded in the analyzed text.

The full transcript is replayed on every turn; there is no truncation or
token budget, so request size grows with the conversation.
"""

from typing import Sequence

from .client import llm_client
from .prompts import EMPTY_REPLY, build_tutor_instruction
from ..errors import TutorChatError
from ..mlops.tracing import tracer
from ..schemas.analysis import ChatMessage


def chat_with_tutor(history: Sequence[ChatMessage], new_message: str, context_text: str) -> str:
    """
    Send one user turn and return the tutor's reply text.

    history holds the turns before new_message, oldest first.
    Raises TutorChatError on any failure.
    """
    turns = [{"role": m.role, "text": m.text} for m in history]
    try:
        with tracer.span("llm.tutor_chat", span_type="LLM", attributes={"turn_count": len(turns)}):
            reply = llm_client.run_chat(build_tutor_instruction(context_text), turns, new_message)
    except Exception as e:
        raise TutorChatError(f"Tutor chat failed: {e}") from e
    return reply or EMPTY_REPLY
