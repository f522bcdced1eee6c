"""Filesystem side of the site: static files, the resume download and the
operator diagnostics.
"""
from datetime import datetime, timezone
from pathlib import Path
import logging
import mimetypes
import os

from flask import Response, send_file, send_from_directory
from werkzeug.exceptions import NotFound

from errors import NotFoundError, StreamError

logger = logging.getLogger(__name__)

DOCX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
mimetypes.add_type(DOCX_MIMETYPE, '.docx')

CHUNK_SIZE = 64 * 1024

SERVICES = ('contact', 'resume_download', 'static_files')


def guess_mimetype(path) -> str:
    return mimetypes.guess_type(str(path))[0] or 'application/octet-stream'


def serve_static(root: Path, filename: str):
    # dotfiles (.env, .git/...) are never served
    if any(part.startswith('.') for part in filename.split('/')):
        raise NotFound()
    return send_from_directory(root, filename)


def locate(path: Path, message='File not found') -> Path:
    if not path.is_file():
        logger.warning("❌ File not found: %s", path)
        raise NotFoundError(message)
    return path


def stream_attachment(path: Path, download_name: str, chunk_size=CHUNK_SIZE) -> Response:
    """Stream `path` by hand as an attachment saved as `download_name`.

    Errors before the response is returned become a StreamError (500). Once
    the body is being sent a read error can only be logged; the client sees
    a truncated file.
    """
    path = locate(path, 'Resume file not found')
    try:
        size = path.stat().st_size
        fh = path.open('rb')
    except OSError as e:
        logger.error("❌ Error opening %s: %s", path, e)
        raise StreamError() from e

    def generate():
        with fh:
            try:
                while True:
                    chunk = fh.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
            except OSError:
                logger.error("❌ Error streaming %s", path, exc_info=True)
                return
        logger.info("✅ Download of %s completed", path.name)

    response = Response(generate(), mimetype=guess_mimetype(path), direct_passthrough=True)
    response.headers['Content-Length'] = str(size)
    response.headers.set('Content-Disposition', 'attachment', filename=download_name)
    response.call_on_close(fh.close)
    return response


def send_attachment(path: Path, download_name: str) -> Response:
    """Same contract as stream_attachment, using Flask's send_file."""
    path = locate(path, 'Resume file not found')
    try:
        return send_file(path, mimetype=guess_mimetype(path),
                         as_attachment=True, download_name=download_name)
    except OSError as e:
        logger.error("❌ Download error for %s: %s", path, e)
        raise StreamError() from e


def checked_files(config):
    return [config.entry_document, config.resume_file, 'profile.jpg', 'app.py', 'pyproject.toml']


def check_files(config):
    """Existence report for the files the site expects under the document root."""
    out = []
    for name in checked_files(config):
        path = config.document_root / name
        out.append({
            'file': name,
            'exists': path.exists(),
            'path': os.path.abspath(path),
        })
    return out


def health_payload():
    return {
        'success': True,
        'message': 'Server is healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'services': {name: 'active' for name in SERVICES},
    }
