"""
Response generation prompt template.

Answers the user's prompt; an attached file, when present, is the primary
source of context. The model also proposes follow-up questions.
"""

from google.genai.types import Content, Part

from chatty.models.flows import GenerateResponseInput
from chatty.utils.data_uri import parse_data_uri

GENERATE_RESPONSE_SYSTEM_INSTRUCTION = (
    "You are a helpful and informative chatbot. Your role is to analyze both text prompts "
    "and any accompanying files (like images, text files, etc.) to provide comprehensive "
    "and accurate answers. If a file is provided, you MUST use it as the primary source of "
    "context for your response to the user's prompt. Answer the prompt in a way that is "
    "helpful, creative, and engaging. After your response, provide a list of 3-4 related "
    "questions the user might want to ask next, most relevant first."
)

FILE_QUESTION_TEMPLATE = "Based on the provided file, please answer the following question: {prompt}"
FILE_START_MARKER = "--- Start of Uploaded File ---"
FILE_END_MARKER = "--- End of Uploaded File ---"

GENERATE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "response": {"type": "STRING", "description": "The AI-generated response."},
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "A list of 3-4 related questions the user might want to ask next.",
        },
    },
    "required": ["response", "suggestions"],
}


def build_generate_response_contents(request: GenerateResponseInput) -> list[Content]:
    """Build the user turn for a generation request."""
    if not request.photo_data_uri:
        return [Content(role="user", parts=[Part(text=request.prompt)])]

    attachment = parse_data_uri(request.photo_data_uri)
    parts = [
        Part(text=f"{FILE_QUESTION_TEMPLATE.format(prompt=request.prompt)}\n\n{FILE_START_MARKER}"),
        Part.from_bytes(data=attachment.data, mime_type=attachment.mime_type),
        Part(text=FILE_END_MARKER),
    ]
    return [Content(role="user", parts=parts)]
