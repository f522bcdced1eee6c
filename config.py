"""Process-wide configuration, read once from the environment at startup.

Environment variables (a `.env` file in the working directory is honoured):
  PORT, HOST                      listening address
  GMAIL_USER, GMAIL_APP_PASSWORD  mail credentials; without both the contact
                                  form runs in demo mode
  MAIL_TO                         owner mailbox (defaults to GMAIL_USER)
  MAIL_HOST, MAIL_PORT            SMTP-over-SSL endpoint
  MAIL_TIMEOUT                    seconds to wait on the SMTP server
  DOCUMENT_ROOT                   directory static files and the resume live in
  ENTRY_DOCUMENT                  HTML file served at /
  RESUME_FILE                     resume file name under DOCUMENT_ROOT
  RESUME_DOWNLOAD_NAME            file name the browser saves the resume as
"""
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv

from errors import ConfigError


@dataclass(frozen=True)
class ServerConfig:
    port: int = 3000
    host: str = '0.0.0.0'
    mail_user: Optional[str] = None
    mail_secret: Optional[str] = None
    mail_to: Optional[str] = None
    mail_host: str = 'smtp.gmail.com'
    mail_port: int = 465
    mail_timeout: float = 30.0
    document_root: Path = Path('.')
    entry_document: str = 'index.html'
    resume_file: str = 'resume.docx'
    resume_download_name: str = 'Resume.docx'

    @property
    def demo_mode(self) -> bool:
        return not (self.mail_user and self.mail_secret)

    @property
    def owner_mailbox(self) -> Optional[str]:
        return self.mail_to or self.mail_user

    @property
    def resume_path(self) -> Path:
        return self.document_root / self.resume_file

    def with_overrides(self, **changes) -> 'ServerConfig':
        return replace(self, **changes)

    def describe(self) -> dict:
        """Printable view of the config with the mail secret masked."""
        return {
            'host': self.host,
            'port': self.port,
            'document_root': str(self.document_root),
            'entry_document': self.entry_document,
            'resume_file': self.resume_file,
            'resume_download_name': self.resume_download_name,
            'mail_user': self.mail_user,
            'mail_secret': '********' if self.mail_secret else None,
            'mail_to': self.owner_mailbox,
            'mail_server': f"{self.mail_host}:{self.mail_port}",
            'mail_timeout': self.mail_timeout,
            'demo_mode': self.demo_mode,
        }


def _number(env, key, default, cast=int):
    raw = env.get(key)
    if raw is None or raw == '':
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}")


def load_config(env=None, dotenv=True) -> ServerConfig:
    """Build the config from `env` (defaults to os.environ)."""
    if env is None:
        if dotenv:
            # real environment variables win over .env entries
            load_dotenv(override=False)
        env = os.environ
    root = env.get('DOCUMENT_ROOT') or os.getcwd()
    return ServerConfig(
        port=_number(env, 'PORT', 3000),
        host=env.get('HOST') or '0.0.0.0',
        mail_user=env.get('GMAIL_USER') or None,
        mail_secret=env.get('GMAIL_APP_PASSWORD') or None,
        mail_to=env.get('MAIL_TO') or None,
        mail_host=env.get('MAIL_HOST') or 'smtp.gmail.com',
        mail_port=_number(env, 'MAIL_PORT', 465),
        mail_timeout=_number(env, 'MAIL_TIMEOUT', 30.0, cast=float),
        document_root=Path(root).resolve(),
        entry_document=env.get('ENTRY_DOCUMENT') or 'index.html',
        resume_file=env.get('RESUME_FILE') or 'resume.docx',
        resume_download_name=env.get('RESUME_DOWNLOAD_NAME') or 'Resume.docx',
    )
