"""
API gateway: serves the browser page and the skill and avatar blueprints.
This is the entrypoint for local development and deployment.
"""

import logging
import os
from typing import Optional, Dict, Any, Tuple

from flask import Flask, jsonify, Response
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from hissatsu.ai_service.utils import CLIENT_EXTENSION_KEY, create_openai_client
from hissatsu.gateway.config import SKILL_PARSE_MODES, load_config

# Basic console logging during API requests
logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")

MULTIPART_OVERHEAD_BYTES = 64 * 1024

STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "static")


def create_app(config: Optional[Dict[str, Any]] = None, openai_client: Any = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (dict, optional): Overrides applied on top of the environment.
        openai_client (optional): Client to use instead of building one from
            OPENAI_API_KEY. Tests pass a mock here.

    Returns:
        Flask: The configured Flask application.

    Raises:
        RuntimeError: If no client is given and OPENAI_API_KEY is missing,
            or SKILL_PARSE_MODE is unknown.
    """
    settings = load_config()
    settings.update(config or {})

    if settings["SKILL_PARSE_MODE"] not in SKILL_PARSE_MODES:
        raise RuntimeError(
            f"SKILL_PARSE_MODE must be one of {SKILL_PARSE_MODES}, got {settings['SKILL_PARSE_MODE']!r}"
        )

    if openai_client is None:
        openai_client = create_openai_client(settings["OPENAI_API_KEY"])

    app = Flask(__name__, static_folder=STATIC_DIR, static_url_path="/static")
    app.config.update(settings)
    # Per-file cap is checked on the photo itself; the body limit leaves room
    # for the multipart envelope.
    app.config["MAX_UPLOAD_BYTES"] = settings["MAX_UPLOAD_MB"] * 1024 * 1024
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] + MULTIPART_OVERHEAD_BYTES
    app.extensions[CLIENT_EXTENSION_KEY] = openai_client

    # Browser page may be opened from anywhere, including file://
    CORS(app)

    # --- REGISTER BLUEPRINTS ---
    from hissatsu.skill_service.routes import skill_bp
    from hissatsu.avatar_service.routes import avatar_bp

    app.register_blueprint(skill_bp, url_prefix="/api")
    app.register_blueprint(avatar_bp, url_prefix="/api")

    logging.info(f"Blueprints registered (skill mode: {settings['SKILL_PARSE_MODE']}).")

    # --- PAGES ---
    @app.route("/")
    def index() -> Response:
        """
        Serve the single-page browser client.
        """
        return app.send_static_file("index.html")

    @app.route("/health")
    def health() -> Tuple[Response, int]:
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    # --- ERROR HANDLERS ---
    @app.errorhandler(413)
    def too_large(error: HTTPException) -> Tuple[Response, int]:
        logging.warning("Rejected upload over the size limit")
        return jsonify({"error": f"File too large (max {settings['MAX_UPLOAD_MB']}MB)"}), 413

    @app.errorhandler(404)
    def not_found(error: HTTPException) -> Tuple[Response, int]:
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error: HTTPException) -> Tuple[Response, int]:
        return jsonify({"error": "Method not allowed"}), 405

    return app


def main() -> None:
    app = create_app()
    port = app.config["PORT"]
    logging.info(f"Server running at http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
