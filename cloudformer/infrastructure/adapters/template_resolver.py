"""
Template Resolver Adapter

Architectural Intent:
- Implements TemplateSourcePort for the three supported template references:
  S3 URLs (passed through untouched), remote template files fetched over HTTP,
  and local file paths
- Uses stdlib urllib for the HTTP layer (no external dependencies)
"""

import logging
import re
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable

from cloudformer.domain.ports.template_source_port import TemplateResolutionError
from cloudformer.domain.value_objects.template import TemplateBody

logger = logging.getLogger(__name__)

_S3_URL_RE = re.compile(r"^https://s3\S*\.amazonaws\.com/(.*)")
_REMOTE_TEMPLATE_RE = re.compile(
    r"^https?://\S+\.(json|ya?ml|template)$", re.IGNORECASE
)


class TemplateResolver:
    def __init__(
        self,
        timeout: float = 30,
        urlopen: Callable = urllib.request.urlopen,
    ) -> None:
        self._timeout = timeout
        self._urlopen = urlopen

    def resolve(self, template_ref: str) -> TemplateBody:
        if _S3_URL_RE.match(template_ref):
            logger.debug("Passing S3 template URL through: %s", template_ref)
            return TemplateBody.from_url(template_ref)
        if _REMOTE_TEMPLATE_RE.match(template_ref):
            return TemplateBody.from_text(self._fetch(template_ref))
        return TemplateBody.from_text(self._read(template_ref))

    def _fetch(self, url: str) -> str:
        logger.info("Fetching template from %s", url)
        try:
            with self._urlopen(url, timeout=self._timeout) as response:
                return response.read().decode("utf-8")
        except (urllib.error.URLError, OSError, UnicodeDecodeError, ValueError) as e:
            raise TemplateResolutionError(url, f"{type(e).__name__}, {e}") from e

    def _read(self, path: str) -> str:
        logger.debug("Reading template from %s", path)
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateResolutionError(path, f"{type(e).__name__}, {e}") from e
