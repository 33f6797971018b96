"""Tests for common utilities."""

import logging

from shortlink.common.headers import build_base_url, forwarded_origin
from shortlink.common.logging_config import setup_logging
from shortlink.common.url_builder import build_short_url


class TestHeaders:
    """Test header utilities."""
    
    def test_forwarded_origin(self):
        """Test the proxy origin is read case-insensitively."""
        headers = {"X-Forwarded-Proto": "https", "x-forwarded-host": "sho.rt"}
        
        assert forwarded_origin(headers) == "https://sho.rt"
    
    def test_forwarded_origin_first_hop(self):
        """Test only the first hop of a proxy chain is used."""
        headers = {"x-forwarded-proto": "https, http", "x-forwarded-host": "sho.rt, internal"}
        
        assert forwarded_origin(headers) == "https://sho.rt"
    
    def test_forwarded_origin_incomplete(self):
        """Test a host without a scheme is ignored."""
        assert forwarded_origin({"x-forwarded-host": "sho.rt"}) is None
        assert forwarded_origin({}) is None
    
    def test_build_base_url_from_forwarded(self):
        """Test forwarded headers win over the request host."""
        base = build_base_url(
            headers={"x-forwarded-proto": "https", "x-forwarded-host": "sho.rt"},
            fallback_base_url="http://127.0.0.1:8000",
            request_scheme="http",
            request_host="internal:8000",
        )
        
        assert base == "https://sho.rt"
    
    def test_build_base_url_from_request(self):
        """Test request scheme and host are used without a proxy."""
        base = build_base_url(
            headers={},
            fallback_base_url="http://127.0.0.1:8000",
            request_scheme="http",
            request_host="localhost:8000",
        )
        
        assert base == "http://localhost:8000"
    
    def test_build_base_url_fallback(self):
        """Test the configured base URL is the last resort."""
        base = build_base_url(headers={}, fallback_base_url="http://127.0.0.1:8000/")
        
        assert base == "http://127.0.0.1:8000"


class TestURLBuilder:
    """Test short URL building."""
    
    def test_build_short_url(self):
        """Test building a versioned short URL."""
        url = build_short_url("K1", "http://127.0.0.1:8000/", "/api/v1")
        
        assert url == "http://127.0.0.1:8000/api/v1/K1"
    
    def test_build_short_url_no_prefix(self):
        """Test building a short URL without a prefix."""
        assert build_short_url("K1", "https://sho.rt") == "https://sho.rt/K1"


class TestLoggingConfig:
    """Test logging setup."""
    
    def test_setup_logging(self, tmp_path):
        """Test level, handlers and core logger propagation."""
        log_file = tmp_path / "shortlink.log"
        
        logger = setup_logging(level="warning", log_file=str(log_file))
        logging.getLogger("shortlink.service").warning("collision")
        for handler in logger.handlers:
            handler.flush()
        
        assert logger.name == "shortlink"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
        assert "collision" in log_file.read_text()
    
    def test_setup_logging_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        setup_logging()
        logger = setup_logging(json_format=True)
        
        assert len(logger.handlers) == 1
