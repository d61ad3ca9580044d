"""
Inappropriate-content filter prompt template.
"""

from google.genai.types import Content, Part

from chatty.models.flows import FilterContentInput

FILTER_CONTENT_SYSTEM_INSTRUCTION = (
    "You are a content filter that determines if the provided text is appropriate "
    "for a public audience."
)

FILTER_CONTENT_PROMPT_TEMPLATE = """Analyze the following text:
{text}

Determine if the text contains any inappropriate content, such as hate speech, sexually explicit material, harassment, or dangerous content.

If the text is appropriate, return is_appropriate as true and filtered_text the same as the input.
If the text is inappropriate, return is_appropriate as false, and filter the text to remove the inappropriate content and return the filtered content in filtered_text.
If the text cannot be filtered, it must be blocked: return is_appropriate as false and filtered_text as an empty string."""

FILTER_CONTENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "is_appropriate": {
            "type": "BOOLEAN",
            "description": "Whether the content is appropriate or not.",
        },
        "filtered_text": {
            "type": "STRING",
            "description": "The filtered text, or the original text if no filtering was needed.",
        },
    },
    "required": ["is_appropriate", "filtered_text"],
}


def build_filter_content_contents(request: FilterContentInput) -> list[Content]:
    """Build the user turn for a filter request."""
    prompt = FILTER_CONTENT_PROMPT_TEMPLATE.format(text=request.text)
    return [Content(role="user", parts=[Part(text=prompt)])]
