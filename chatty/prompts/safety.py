"""
Moderation thresholds passed to the provider with every moderated call.
"""

from google.genai.types import HarmBlockThreshold, HarmCategory, SafetySetting

MODERATION_THRESHOLDS: tuple[tuple[HarmCategory, HarmBlockThreshold], ...] = (
    (HarmCategory.HARM_CATEGORY_HATE_SPEECH, HarmBlockThreshold.BLOCK_ONLY_HIGH),
    (HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT, HarmBlockThreshold.BLOCK_NONE),
    (HarmCategory.HARM_CATEGORY_HARASSMENT, HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE),
    (HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT, HarmBlockThreshold.BLOCK_LOW_AND_ABOVE),
)


def build_safety_settings() -> list[SafetySetting]:
    """Fresh SafetySetting list for one request."""
    return [
        SafetySetting(category=category, threshold=threshold)
        for category, threshold in MODERATION_THRESHOLDS
    ]
