"""Unit tests for GatewayConfig validation."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from docmind.gateway.config import GatewayConfig, get_gateway_config


class TestGatewayConfig:
    """Tests for GatewayConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        config = GatewayConfig(
            base_url="https://rag.example.com",
            timeout=30.0,
            chunk_size=800,
            chunk_overlap=100,
            top_k=8,
        )

        assert config.base_url == "https://rag.example.com"
        assert config.timeout == 30.0
        assert config.chunk_size == 800
        assert config.chunk_overlap == 100
        assert config.top_k == 8

    def test_config_with_default_values(self) -> None:
        """Config uses the stock defaults when the environment is empty."""
        with patch.dict("os.environ", {}, clear=True):
            config = GatewayConfig()

        assert config.base_url == "http://localhost:8000"
        assert config.timeout == 120.0
        assert config.chunk_size == 400
        assert config.chunk_overlap == 50
        assert config.top_k == 5

    def test_base_url_is_normalized(self) -> None:
        config = GatewayConfig(base_url="  http://localhost:8000/  ")

        assert config.base_url == "http://localhost:8000"

    def test_config_fails_with_empty_base_url(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(base_url="   ")

        assert "API_BASE_URL" in str(exc_info.value)

    def test_config_fails_without_scheme(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(base_url="localhost:8000")

        assert "http://" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["chunk_size", "chunk_overlap", "top_k"])
    def test_config_rejects_non_positive_values(self, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(**{field: 0})

        assert field in str(exc_info.value)

    def test_config_rejects_negative_timeout(self) -> None:
        with pytest.raises(ValidationError):
            GatewayConfig(timeout=-1.0)


class TestGetGatewayConfig:
    """Tests for get_gateway_config factory function."""

    def test_reads_environment(self) -> None:
        env = {
            "API_BASE_URL": "http://rag:9000",
            "API_TIMEOUT": "15",
            "CHUNK_SIZE": "256",
            "CHUNK_OVERLAP": "32",
            "TOP_K": "3",
        }
        with patch.dict("os.environ", env, clear=True):
            config = get_gateway_config()

        assert config.base_url == "http://rag:9000"
        assert config.timeout == 15.0
        assert config.chunk_size == 256
        assert config.chunk_overlap == 32
        assert config.top_k == 3

    @pytest.mark.parametrize("raw", ["", "none", "None"])
    def test_timeout_can_be_disabled(self, raw: str) -> None:
        with patch.dict("os.environ", {"API_TIMEOUT": raw}, clear=True):
            config = get_gateway_config()

        assert config.timeout is None
