"""Bot SDK for OneBot-style QQ endpoints: WebSocket event dispatch, a chained HTTP API builder, and helpers for markdown, keyboards, rate limits and images."""

__version__ = "0.1.0"