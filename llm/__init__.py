"""LLM integration module for the support chatbot."""

from llm.factory import get_llm_provider

__all__ = ["get_llm_provider"]
