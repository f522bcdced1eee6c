"""Shared pytest fixtures: a throwaway document root and a test client."""
import pytest

from app import create_app
from config import ServerConfig

RESUME_BYTES = b'PK\x03\x04' + b'resume-content ' * 5000


@pytest.fixture
def site(tmp_path):
    (tmp_path / 'index.html').write_text('<h1>Portfolio</h1>')
    (tmp_path / 'style.css').write_text('body { color: black; }')
    (tmp_path / 'resume.docx').write_bytes(RESUME_BYTES)
    (tmp_path / '.env').write_text('GMAIL_APP_PASSWORD=secret')
    return tmp_path


@pytest.fixture
def make_config(site):
    def _make(**overrides):
        return ServerConfig(document_root=site, **overrides)
    return _make


class FakeSender:
    """Records messages instead of talking to an SMTP server."""

    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def __call__(self, msg, config):
        if self.error is not None:
            raise self.error
        self.sent.append(msg)


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def make_client(make_config, sender):
    def _make(send=None, **overrides):
        app = create_app(make_config(**overrides), send_mail=send or sender)
        app.config['TESTING'] = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
