"""Unit tests for individual components in isolation.

Coverage:
    - session/: timeline building, registry, controller, upload and query flows
    - gateway/: configuration validation
    - ui/: Markdown rendering helpers

The backend gateway is replaced with AsyncMock doubles.
"""
