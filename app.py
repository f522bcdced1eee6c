"""Flask backend for the portfolio site.

Run:
  pip install -e .
  python app.py

Serves the site's static files from the document root (the working directory
by default), relays the contact form by email and offers the resume for
download. See config.py for the environment variables.
"""
from typing import Optional
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import ServerConfig, load_config
from errors import PortfolioError
import files
import mailer

logger = logging.getLogger(__name__)


def create_app(config: Optional[ServerConfig] = None, send_mail=mailer.send_via_smtp) -> Flask:
    """Build the app around an already-loaded config."""
    if config is None:
        config = load_config()

    app = Flask(__name__, static_folder=None)
    app.config['PORTFOLIO'] = config
    CORS(app)

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return e
        logger.error("Unhandled exception on %s: %s", request.path, e, exc_info=True)
        return jsonify({'success': False, 'message': 'Server error'}), 500

    @app.route('/')
    def index():
        return files.serve_static(config.document_root, config.entry_document)

    @app.route('/api/contact', methods=['POST'])
    def api_contact():
        # JSON or a plain HTML form post
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        result = mailer.submit_contact(data, config, send=send_mail)
        return jsonify(result.to_dict())

    @app.route('/download-resume')
    def download_resume():
        logger.info("📄 Resume download requested: %s", config.resume_path)
        return files.stream_attachment(config.resume_path, config.resume_download_name)

    @app.route('/api/resume')
    def api_resume():
        return files.send_attachment(config.resume_path, config.resume_download_name)

    @app.route('/api/health')
    def api_health():
        return jsonify(files.health_payload())

    @app.route('/api/check-files')
    def api_check_files():
        """Debug helper: which of the expected files exist under the document root."""
        return jsonify({'success': True, 'files': files.check_files(config)})

    @app.route('/<path:filename>')
    def static_file(filename):
        return files.serve_static(config.document_root, filename)

    return app


def log_banner(config: ServerConfig):
    url = f"http://localhost:{config.port}"
    logger.info("=================================")
    logger.info("🚀 Portfolio Server Started")
    logger.info("=================================")
    logger.info("📍 Serving: %s from %s", config.entry_document, config.document_root)
    logger.info("📍 Port: %s", config.port)
    logger.info("🌍 URL: %s", url)
    logger.info("📧 Contact API: POST %s/api/contact%s", url, " (demo mode)" if config.demo_mode else "")
    logger.info("📄 Resume Download: GET %s/download-resume", url)
    logger.info("=================================")
    if config.resume_path.is_file():
        logger.info("✅ Resume file found: %s", config.resume_file)
    else:
        logger.warning("❌ Resume file NOT found: %s", config.resume_file)
        logger.warning("💡 Put the resume in %s or set RESUME_FILE", config.document_root)


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def run(config: Optional[ServerConfig] = None, debug=False):
    config = config or load_config()
    setup_logging()
    log_banner(config)
    create_app(config).run(host=config.host, port=config.port, debug=debug)


if __name__ == '__main__':
    run()
