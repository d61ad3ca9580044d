"""
Unit tests for structured generation (retry, timeout, output validation).
"""

import asyncio
import json

import pytest
from google.genai import errors as genai_errors

from chatty.core.exceptions import LLMError, LLMValidationError
from chatty.models.flows import GenerateResponseOutput
from chatty.services.llm_utils import CallPolicy, generate_structured, parse_structured_output

SCHEMA = {"type": "OBJECT"}
GOOD = {"response": "Hi there", "suggestions": ["What else?"]}


def _server_error():
    return genai_errors.ServerError(
        503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}}
    )


def _client_error(code=400):
    return genai_errors.ClientError(
        code, {"error": {"code": code, "message": "bad request", "status": "INVALID_ARGUMENT"}}
    )


def test_parse_structured_output_accepts_fenced_json():
    raw = '```json\n{"response": "ok", "suggestions": []}\n```'

    result = parse_structured_output(GenerateResponseOutput, raw)

    assert result.response == "ok"


@pytest.mark.parametrize("raw", ["", "   ", "not json", '{"response": "no suggestions"}'])
def test_parse_structured_output_rejects_malformed(raw):
    with pytest.raises(LLMValidationError):
        parse_structured_output(GenerateResponseOutput, raw)


def test_call_policy_backoff():
    policy = CallPolicy(timeout_seconds=5.0, max_retries=2, backoff_seconds=0.5)

    assert policy.attempts == 3
    assert policy.delay_for(1) == 0.5
    assert policy.delay_for(2) == 1.0


@pytest.mark.asyncio
async def test_generate_structured_success(make_provider, fast_policy):
    provider = make_provider(GOOD)

    result = await generate_structured(
        provider,
        contents=[],
        output_model=GenerateResponseOutput,
        response_schema=SCHEMA,
        system_instruction="Be helpful",
        policy=fast_policy,
    )

    assert result == GenerateResponseOutput(**GOOD)
    provider.generate_content.assert_awaited_once()
    config = provider.generate_content.await_args.kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert provider.generate_content.await_args.kwargs["model"] == "fake-model"


@pytest.mark.asyncio
async def test_generate_structured_retries_server_error(make_provider, fast_policy):
    provider = make_provider(_server_error(), GOOD)

    result = await generate_structured(
        provider, [], GenerateResponseOutput, SCHEMA, policy=fast_policy
    )

    assert result.response == "Hi there"
    assert provider.generate_content.await_count == 2


@pytest.mark.asyncio
async def test_generate_structured_does_not_retry_client_error(make_provider, fast_policy):
    provider = make_provider(_client_error(), GOOD)

    with pytest.raises(LLMError) as exc_info:
        await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=fast_policy)

    assert not isinstance(exc_info.value, LLMValidationError)
    assert provider.generate_content.await_count == 1


@pytest.mark.asyncio
async def test_generate_structured_retries_rate_limit(make_provider, fast_policy):
    provider = make_provider(_client_error(429), GOOD)

    result = await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=fast_policy)

    assert result.response == "Hi there"


@pytest.mark.asyncio
async def test_generate_structured_malformed_output_after_retries(make_provider, fast_policy):
    provider = make_provider("not json", '{"response": 1}')

    with pytest.raises(LLMValidationError) as exc_info:
        await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=fast_policy)

    assert exc_info.value.attempts == 2
    assert provider.generate_content.await_count == 2


@pytest.mark.asyncio
async def test_generate_structured_timeout(make_provider):
    provider = make_provider()

    async def _slow(**kwargs):
        await asyncio.sleep(1)

    provider.generate_content.side_effect = _slow
    policy = CallPolicy(timeout_seconds=0.01, max_retries=0, backoff_seconds=0.0)

    with pytest.raises(LLMError, match="timed out"):
        await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=policy)


@pytest.mark.asyncio
async def test_generate_structured_empty_response(make_provider, no_retry_policy):
    provider = make_provider("")

    with pytest.raises(LLMValidationError):
        await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=no_retry_policy)


def test_parse_structured_output_keeps_code_fences_inside_strings():
    raw = json.dumps({"response": "Use:\n```python\nprint(1)\n```", "suggestions": ["More?"]})

    result = parse_structured_output(GenerateResponseOutput, raw)

    assert result.response == "Use:\n```python\nprint(1)\n```"
    assert result.suggestions == ["More?"]


def test_parse_structured_output_unwraps_fenced_reply_with_code_inside():
    body = json.dumps({"response": "```js\nx()\n```", "suggestions": []})

    result = parse_structured_output(GenerateResponseOutput, f"```json\n{body}\n```")

    assert result.response == "```js\nx()\n```"


@pytest.mark.asyncio
async def test_generate_structured_code_answer_is_not_retried(make_provider, fast_policy):
    reply = {"response": "Try:\n```bash\nls -la\n```", "suggestions": ["What does -a do?"]}
    provider = make_provider(reply)

    result = await generate_structured(provider, [], GenerateResponseOutput, SCHEMA, policy=fast_policy)

    assert result.response == reply["response"]
    provider.generate_content.assert_awaited_once()
