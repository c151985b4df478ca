from typing import List

from ..errors import AnalysisFailed, EmptyTextError, TutorChatError
from ..llm.analyze import now_ms, run_analysis
from ..llm.prompts import ANALYSIS_GREETING, CHAT_FALLBACK_REPLY, WELCOME_BACK_GREETING
from ..llm.tutor import chat_with_tutor
from ..log import get_logger
from ..mlops.tracing import traced_operation
from ..rendering.markdown import clean_text
from ..schemas.analysis import AnalysisResult, ChatMessage, TextType
from ..state import AppState

logger = get_logger("analyzer")


def _next_timestamp(messages: List[ChatMessage]) -> int:
    """Now, but strictly after the last message in the transcript."""
    ts = now_ms()
    if messages and ts <= messages[-1].timestamp:
        ts = messages[-1].timestamp + 1
    return ts


class Analyzer:
    """Caller-side policies around the analysis and tutor calls."""

    def __init__(self, state: AppState):
        self.state = state

    @traced_operation("analyzer.analyze")
    def analyze(self, text: str, text_type: TextType) -> AnalysisResult:
        if not text or not text.strip():
            raise EmptyTextError("Text to analyze is empty")

        text_type = TextType(text_type)
        logger.info(f"Analyzing {text_type.value} text ({len(text)} chars)")
        try:
            result = run_analysis(text, text_type, taken_ids=self.state.taken_ids())
        except AnalysisFailed:
            logger.exception("Analysis failed")
            raise

        greeting = ChatMessage(
            role="model",
            text=ANALYSIS_GREETING.format(label=text_type.label),
            timestamp=now_ms(),
        )
        result = result.model_copy(update={"chat_history": [greeting]})
        self.state.save_result(result)
        logger.info(f"Saved analysis {result.id}: {result.title}")
        return result

    def open_result(self, result_id: str) -> AnalysisResult:
        """Stored result as-is; a transcript-less result gets a transient greeting."""
        result = self.state.get_result(result_id)
        if result.chat_history:
            return result
        greeting = ChatMessage(
            role="model",
            text=WELCOME_BACK_GREETING.format(title=clean_text(result.title)),
            timestamp=now_ms(),
        )
        return result.model_copy(update={"chat_history": [greeting]})

    @traced_operation("analyzer.send_chat")
    def send_chat(self, result_id: str, message: str) -> ChatMessage:
        """
        Append the user turn and the tutor's reply, then persist.
        A failed call still appends one model message (the fallback text).
        """
        if not message or not message.strip():
            raise EmptyTextError("Chat message is empty")

        result = self.open_result(result_id)
        prior = list(result.chat_history or [])
        user_msg = ChatMessage(role="user", text=message, timestamp=_next_timestamp(prior))

        try:
            reply_text = chat_with_tutor(prior, message, result.original_text)
        except TutorChatError:
            logger.exception(f"Tutor chat failed for {result_id}")
            reply_text = CHAT_FALLBACK_REPLY

        transcript = prior + [user_msg]
        reply = ChatMessage(role="model", text=reply_text, timestamp=_next_timestamp(transcript))
        transcript.append(reply)

        self.state.save_result(result.model_copy(update={"chat_history": transcript}))
        return reply
