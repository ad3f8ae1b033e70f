"""Typed models for accessibility trees, agents, chat messages and page operations."""

__all__ = ["a11y", "agent", "llm", "page"]