"""OpenAI client wrapper.

Two call shapes: a single structured generation parsed into a pydantic model
(strict schema enforced by the provider), and a chat turn that replays prior
messages. One attempt per call; errors propagate to the caller.
"""

from typing import Dict, List, Optional, Sequence, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel

from ..config import get_settings
from ..mlops.tracing import tracer

settings = get_settings()

T = TypeVar("T", bound=BaseModel)

# Our transcript says "model"; the Chat Completions API says "assistant".
_ROLE_MAP = {"user": "user", "model": "assistant"}


def to_api_messages(turns: Sequence[Dict[str, str]]) -> List[Dict[str, str]]:
    """Convert {role, text} turns to Chat Completions messages."""
    return [{"role": _ROLE_MAP[t["role"]], "content": t["text"]} for t in turns]


class LLMClient:
    def __init__(self, client: Optional[OpenAI] = None):
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                raise RuntimeError("API Key is missing.")
            self._client = OpenAI(api_key=settings.OPENAI_API_KEY)
        return self._client

    def run_structured(
        self,
        prompt: str,
        schema_model: Type[T],
        system: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> T:
        """
        Single generation with schema_model as a strict response format.
        Raises ValueError when the model refuses or returns nothing parseable.
        """
        model = model or settings.MODEL
        kwargs = {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "response_format": schema_model,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        completion = self.client.beta.chat.completions.parse(**kwargs)
        tracer.trace_llm_call(model=model, prompt=prompt, temperature=temperature)

        message = completion.choices[0].message
        if message.refusal:
            raise ValueError(f"Model refused: {message.refusal}")
        if message.parsed is None:
            raise ValueError("No response from AI")
        return message.parsed

    def run_chat(
        self,
        system: str,
        history: Sequence[Dict[str, str]],
        message: str,
        model: Optional[str] = None,
    ) -> Optional[str]:
        """Replay history in order, then send exactly one new user message."""
        model = model or settings.MODEL
        messages = [{"role": "system", "content": system}]
        messages.extend(to_api_messages(history))
        messages.append({"role": "user", "content": message})

        completion = self.client.chat.completions.create(model=model, messages=messages)
        tracer.trace_llm_call(model=model, prompt=message, turn_count=len(history))
        return completion.choices[0].message.content

llm_client = LLMClient()
