"""Integration tests for components working together over HTTP.

Uses a real BackendGateway against an in-memory FastAPI fake backend reached
through httpx.ASGITransport. No network access required.
"""
