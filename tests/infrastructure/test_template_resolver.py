"""Tests for the template resolver adapter."""

import urllib.error
from unittest.mock import MagicMock

import pytest

from cloudformer.domain.ports.template_source_port import (
    TemplateResolutionError,
    TemplateSourcePort,
)
from cloudformer.infrastructure.adapters.template_resolver import TemplateResolver


def _response(body: bytes):
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    return response


class TestTemplateResolver:
    def test_satisfies_port(self):
        assert isinstance(TemplateResolver(), TemplateSourcePort)

    def test_s3_url_passed_through(self):
        urlopen = MagicMock()
        url = "https://s3-eu-west-1.amazonaws.com/bucket/stack.json"

        template = TemplateResolver(urlopen=urlopen).resolve(url)

        assert template.url == url
        assert template.body is None
        urlopen.assert_not_called()

    def test_remote_json_fetched(self):
        urlopen = MagicMock(return_value=_response(b'{"Resources": {}}'))

        template = TemplateResolver(timeout=5, urlopen=urlopen).resolve(
            "https://example.com/templates/stack.json"
        )

        assert template.body == '{"Resources": {}}'
        urlopen.assert_called_once_with("https://example.com/templates/stack.json", timeout=5)

    def test_remote_yaml_fetched(self):
        urlopen = MagicMock(return_value=_response(b"Resources: {}\n"))

        template = TemplateResolver(urlopen=urlopen).resolve(
            "https://example.com/stack.yaml"
        )

        assert template.body == "Resources: {}\n"

    def test_remote_failure(self):
        urlopen = MagicMock(side_effect=urllib.error.URLError("Name or service not known"))

        with pytest.raises(TemplateResolutionError) as exc_info:
            TemplateResolver(urlopen=urlopen).resolve("https://example.com/stack.json")

        assert "URLError" in exc_info.value.reason
        assert exc_info.value.template_ref == "https://example.com/stack.json"

    def test_local_file(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_text('{"Resources": {}}')

        template = TemplateResolver().resolve(str(path))

        assert template.body == '{"Resources": {}}'

    def test_missing_local_file(self, tmp_path):
        with pytest.raises(TemplateResolutionError, match="FileNotFoundError"):
            TemplateResolver().resolve(str(tmp_path / "missing.json"))
