"""Global test configuration.

Keeps boto3 from picking up real credentials or regions from the developer's
environment while tests build clients.
"""

import os
import logging

import pytest


@pytest.fixture(autouse=True)
def _isolated_aws_env(monkeypatch):
    for var in ("AWS_PROFILE", "AWS_DEFAULT_PROFILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_CONFIG_FILE", "/nonexistent/aws/config")
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", "/nonexistent/aws/credentials")


@pytest.fixture(autouse=True)
def _isolated_cloudformer_env(monkeypatch):
    for var in list(os.environ):
        if var.startswith("CLOUDFORMER_"):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_cloudformer_logger():
    yield
    logger = logging.getLogger("cloudformer")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
