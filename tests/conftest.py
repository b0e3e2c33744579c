"""Test fixtures and utilities."""

import pytest

from docraptor_client import DocRaptorClient, config

BASE_URL = "https://docraptor.com"
API_KEY = "test-key-12345"

SAMPLE_HTML = "<html><body><h1>Hello</h1></body></html>"
SAMPLE_PDF = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF"


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts with no cached key and no DocRaptor environment."""
    monkeypatch.delenv(config.API_KEY_ENV, raising=False)
    monkeypatch.delenv(config.BASE_URL_ENV, raising=False)
    config.reset_api_key()
    yield
    config.reset_api_key()


@pytest.fixture
def client():
    return DocRaptorClient(api_key=API_KEY)
