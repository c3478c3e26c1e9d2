"""Tests for common utilities."""

import json

from iurl.common.logging_config import setup_logging
from iurl.common.validators import is_valid_short_path, is_valid_destination, is_valid_url
from iurl.common.headers import build_base_url, get_bearer_token, get_trusted_identity
from iurl.common.url_builder import build_short_url, short_path_from_request_path


class TestValidators:
    """Test validation utilities."""

    def test_valid_short_paths(self):
        for short_path in ("abc123", "r1", "x", "test-code", "test_code", "with.dot", "ünï"):
            valid, _ = is_valid_short_path(short_path)
            assert valid, short_path

    def test_invalid_short_paths(self):
        valid, error = is_valid_short_path("")
        assert not valid
        assert "non-empty" in error

        valid, _ = is_valid_short_path(None)
        assert not valid

        valid, _ = is_valid_short_path(123)
        assert not valid

        valid, error = is_valid_short_path("a/b")
        assert not valid
        assert "/" in error

        valid, _ = is_valid_short_path("..")
        assert not valid

    def test_destination_presence(self):
        assert is_valid_destination("https://example.com")[0]
        assert is_valid_destination("anything goes")[0]
        assert not is_valid_destination("")[0]
        assert not is_valid_destination(None)[0]

    def test_valid_urls(self):
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, _ = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://example.com/" + "a" * 2100)
        assert not valid
        assert "too long" in error


class TestHeaders:
    """Test header helpers."""

    def test_base_url_from_forwarded_headers(self):
        headers = {"X-Forwarded-Proto": "https", "X-Forwarded-Host": "iurl.me"}

        assert build_base_url(headers, "http://fallback") == "https://iurl.me"

    def test_base_url_from_request(self):
        assert build_base_url({}, "http://fallback", "http", "localhost:9200") == "http://localhost:9200"

    def test_base_url_fallback(self):
        assert build_base_url({}, "http://fallback/") == "http://fallback"

    def test_bearer_token(self):
        assert get_bearer_token({"Authorization": "Bearer abc.def"}) == "abc.def"
        assert get_bearer_token({"authorization": "bearer abc.def"}) == "abc.def"
        assert get_bearer_token({"Authorization": "Basic Zm9vOmJhcg=="}) is None
        assert get_bearer_token({"Authorization": "Bearer "}) is None
        assert get_bearer_token({}) is None

    def test_trusted_identity(self):
        headers = {"X-Authenticated-User": " alice "}

        assert get_trusted_identity(headers, "x-authenticated-user") == "alice"
        assert get_trusted_identity(headers, None) is None
        assert get_trusted_identity({}, "x-authenticated-user") is None


class TestURLBuilder:
    """Test URL building and parsing."""

    def test_build_short_url(self):
        assert build_short_url("abc", "https://iurl.me") == "https://iurl.me/abc"
        assert build_short_url("abc", "https://iurl.me/", "/s/") == "https://iurl.me/s/abc"

    def test_short_path_from_request_path(self):
        assert short_path_from_request_path("/s/my-path") == "my-path"
        assert short_path_from_request_path("my-path") == "my-path"
        assert short_path_from_request_path("/my-path/") == "my-path"
        assert short_path_from_request_path("/s//x//") == "x"

    def test_no_segment(self):
        assert short_path_from_request_path("") is None
        assert short_path_from_request_path("/") is None
        assert short_path_from_request_path("///") is None


class TestLoggingConfig:
    """Test log output formats."""

    def test_json_lines_parse(self, tmp_path):
        log_file = tmp_path / "iurl.log"
        logger = setup_logging(level="DEBUG", log_file=str(log_file), json_format=True)
        child = logger.getChild("registry")

        child.info('Redirect created: "quoted" -> https://example.com/?a=1&b="2"')
        try:
            raise RuntimeError('relation "url_redirects" does not exist')
        except RuntimeError as e:
            child.error(f"Error in resolve for short path 'x': {e!r}", exc_info=True)

        for handler in logger.handlers:
            handler.flush()
        lines = log_file.read_text().splitlines()
        setup_logging(level="DEBUG")

        entries = [json.loads(line) for line in lines]
        assert len(entries) == 2
        assert entries[0]["message"] == 'Redirect created: "quoted" -> https://example.com/?a=1&b="2"'
        assert entries[0]["logger"] == "iurl.registry"
        assert entries[1]["level"] == "ERROR"
        assert "exc_info" not in entries[0]
        assert 'RuntimeError: relation "url_redirects" does not exist' in entries[1]["exc_info"]

    def test_plain_format(self, tmp_path):
        log_file = tmp_path / "iurl.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))

        logger.debug("hidden")
        logger.info("shown")

        for handler in logger.handlers:
            handler.flush()
        lines = log_file.read_text().splitlines()
        setup_logging(level="DEBUG")

        assert len(lines) == 1
        assert "[INFO] iurl - shown" in lines[0]
