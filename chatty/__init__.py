"""Chatty: Gemini chat with suggestions and sentiment tagging."""
