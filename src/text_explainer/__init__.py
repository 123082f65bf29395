"""Explain, translate and summarize selected note text with an LLM."""

__version__ = "0.3.0"
