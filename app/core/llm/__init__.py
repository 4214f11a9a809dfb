"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging.
- Configurable via environment variables.
- Treated as a pure/stateless function by callers.
"""
