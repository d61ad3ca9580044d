"""
Unit tests for prompt templates and moderation thresholds.
"""

from google.genai.types import HarmBlockThreshold, HarmCategory

from chatty.models.enums import Sentiment
from chatty.models.flows import AnalyzeSentimentInput, FilterContentInput, GenerateResponseInput
from chatty.prompts.filter_content_prompt import build_filter_content_contents
from chatty.prompts.generate_response_prompt import (
    FILE_END_MARKER,
    FILE_START_MARKER,
    build_generate_response_contents,
)
from chatty.prompts.safety import build_safety_settings
from chatty.prompts.sentiment_prompt import SENTIMENT_SCHEMA, build_sentiment_contents


def test_generate_contents_without_file_is_prompt_verbatim():
    contents = build_generate_response_contents(GenerateResponseInput(prompt="Hello"))

    assert len(contents) == 1
    assert contents[0].role == "user"
    assert [part.text for part in contents[0].parts] == ["Hello"]


def test_generate_contents_with_file_uses_file_as_context():
    request = GenerateResponseInput(
        prompt="What is in this file?",
        photo_data_uri="data:text/plain;base64,aGVsbG8gd29ybGQ=",
    )

    parts = build_generate_response_contents(request)[0].parts

    assert len(parts) == 3
    assert "Based on the provided file" in parts[0].text
    assert "What is in this file?" in parts[0].text
    assert parts[0].text.endswith(FILE_START_MARKER)
    assert parts[1].inline_data.data == b"hello world"
    assert parts[1].inline_data.mime_type == "text/plain"
    assert parts[2].text == FILE_END_MARKER


def test_filter_contents_embed_text():
    contents = build_filter_content_contents(FilterContentInput(text="some text"))

    prompt = contents[0].parts[0].text
    assert "some text" in prompt
    assert "is_appropriate" in prompt


def test_sentiment_contents_and_schema():
    contents = build_sentiment_contents(AnalyzeSentimentInput(text="I love it"))

    assert contents[0].parts[0].text == "I love it"
    assert SENTIMENT_SCHEMA["properties"]["sentiment"]["enum"] == [s.value for s in Sentiment]


def test_safety_settings_thresholds():
    settings = {s.category: s.threshold for s in build_safety_settings()}

    assert settings == {
        HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
        HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
    }
