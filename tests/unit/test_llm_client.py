import pytest
from unittest.mock import MagicMock, patch

from litmaster.llm.client import LLMClient, to_api_messages
from litmaster.schemas.analysis import AnalysisPayload


def _parsed_completion(parsed, refusal=None):
    completion = MagicMock()
    completion.choices[0].message.parsed = parsed
    completion.choices[0].message.refusal = refusal
    return completion


def _completion(content):
    completion = MagicMock()
    completion.choices[0].message.content = content
    return completion


@pytest.fixture
def fake_openai():
    return MagicMock()


def test_run_structured_uses_strict_parse(fake_openai, sample_payload):
    """
    WHY: Schema enforcement is delegated to the provider via the SDK's strict structured outputs.
    HOW: Fake `beta.chat.completions.parse` returns the sample payload as `.parsed`.
    EXPECTED: The pydantic model itself is the response format; system + user messages and temperature are sent once.
    """
    fake_openai.beta.chat.completions.parse.return_value = _parsed_completion(sample_payload)
    client = LLMClient(client=fake_openai)

    parsed = client.run_structured("PROMPT", AnalysisPayload, system="SYSTEM", model="m", temperature=0.3)

    assert parsed is sample_payload
    fake_openai.beta.chat.completions.parse.assert_called_once()
    fake_openai.chat.completions.create.assert_not_called()
    kwargs = fake_openai.beta.chat.completions.parse.call_args.kwargs
    assert kwargs["response_format"] is AnalysisPayload
    assert kwargs["model"] == "m"
    assert kwargs["temperature"] == 0.3
    assert kwargs["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "PROMPT"},
    ]


def test_run_structured_omits_temperature_when_unset(fake_openai, sample_payload):
    fake_openai.beta.chat.completions.parse.return_value = _parsed_completion(sample_payload)
    LLMClient(client=fake_openai).run_structured("p", AnalysisPayload, system="s")
    assert "temperature" not in fake_openai.beta.chat.completions.parse.call_args.kwargs


def test_run_structured_no_parsed_reply_raises(fake_openai):
    fake_openai.beta.chat.completions.parse.return_value = _parsed_completion(None)
    client = LLMClient(client=fake_openai)

    with pytest.raises(ValueError, match="No response"):
        client.run_structured("p", AnalysisPayload, system="s")


def test_run_structured_refusal_raises(fake_openai, sample_payload):
    fake_openai.beta.chat.completions.parse.return_value = _parsed_completion(None, refusal="I can't help")
    client = LLMClient(client=fake_openai)

    with pytest.raises(ValueError, match="refused"):
        client.run_structured("p", AnalysisPayload, system="s")
    assert fake_openai.beta.chat.completions.parse.call_count == 1


def test_run_chat_maps_roles_and_appends_message(fake_openai):
    fake_openai.chat.completions.create.return_value = _completion("reply")
    client = LLMClient(client=fake_openai)

    out = client.run_chat("SYS", [{"role": "user", "text": "q1"}, {"role": "model", "text": "a1"}], "q2")

    assert out == "reply"
    messages = fake_openai.chat.completions.create.call_args.kwargs["messages"]
    assert messages == [
        {"role": "system", "content": "SYS"},
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "a1"},
        {"role": "user", "content": "q2"},
    ]


def test_missing_api_key_raises():
    client = LLMClient()
    with patch("litmaster.llm.client.settings") as mock_settings:
        mock_settings.OPENAI_API_KEY = ""
        with pytest.raises(RuntimeError, match="API Key is missing"):
            client.run_chat("s", [], "m")


def test_to_api_messages():
    assert to_api_messages([{"role": "model", "text": "x"}]) == [{"role": "assistant", "content": "x"}]
