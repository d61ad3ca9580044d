"""Prompt templates for the model flows."""
