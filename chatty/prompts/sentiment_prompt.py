"""
Sentiment classification prompt template.
"""

from google.genai.types import Content, Part

from chatty.models.enums import Sentiment
from chatty.models.flows import AnalyzeSentimentInput

SENTIMENT_SYSTEM_INSTRUCTION = (
    "You are a sentiment analysis expert. Analyze the sentiment of the text and classify it "
    "as Positive, Negative, or Neutral. Respond with ONLY a JSON object that conforms to the "
    "specified output schema."
)

SENTIMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "sentiment": {
            "type": "STRING",
            "enum": [label.value for label in Sentiment],
            "description": "The detected sentiment of the text.",
        },
    },
    "required": ["sentiment"],
}


def build_sentiment_contents(request: AnalyzeSentimentInput) -> list[Content]:
    """The text is sent verbatim as the user turn."""
    return [Content(role="user", parts=[Part(text=request.text)])]
