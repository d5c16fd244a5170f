"""Slide editing agent with approval-gated tools and live step tracing."""

__version__ = "0.1.0"
