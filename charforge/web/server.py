"""
Web interface for charforge.

Flask app serving the derivation engine as a JSON API.
- /api/health: liveness check
- /api/editions, /api/rules/..., /api/backgrounds/...: rule data
- /api/derive, /api/spell-slots: derivation
"""

import logging
from typing import Optional

from flask import Flask, jsonify

from charforge import __version__
from charforge.core.config import Config, get_config
from charforge.core.logging_config import setup_logging_from_config
from charforge.core.result import Result, ErrorCode
from charforge.engine.caster_types import CasterTypeClassifier
from charforge.web.blueprints import rules_bp, derive_bp

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None,
               classifier: Optional[CasterTypeClassifier] = None) -> Flask:
    """
    Create the Flask app.

    Args:
        config: Configuration (defaults to the global config)
        classifier: Caster classifier used when a request asks for refinement
                    (defaults to one built from config)

    Returns:
        Flask app
    """
    config = config or get_config()

    app = Flask(__name__)
    app.config['CHARFORGE'] = config
    app.json.sort_keys = False

    # One classifier per app so its TTL cache outlives single requests
    app.caster_classifier = classifier or CasterTypeClassifier.from_config(config)

    app.register_blueprint(rules_bp)
    app.register_blueprint(derive_bp)

    @app.route('/api/health')
    def api_health():
        return jsonify(Result.ok({
            'status': 'ok',
            'version': __version__,
            'default_edition': config.default_edition,
            'rules_api_enabled': app.caster_classifier.enabled,
        }).to_dict())

    @app.errorhandler(404)
    def not_found(e):
        result = Result.fail('Not found', ErrorCode.NOT_FOUND)
        return jsonify(result.to_dict()), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        result = Result.fail('Method not allowed', ErrorCode.INVALID_INPUT)
        return jsonify(result.to_dict()), 405

    @app.errorhandler(500)
    def internal_error(e):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        result = Result.fail('Internal server error', ErrorCode.UNEXPECTED_ERROR)
        return jsonify(result.to_dict()), 500

    logger.info(f"charforge API ready (edition {config.default_edition}, "
                f"rules service {'on' if app.caster_classifier.enabled else 'off'})")
    return app


def run_server(config: Optional[Config] = None, host: Optional[str] = None,
               port: Optional[int] = None, debug: Optional[bool] = None) -> None:
    """Run the development server. Arguments override config values."""
    config = config or get_config()
    setup_logging_from_config(config)

    host = host or config.host
    port = port or config.port
    debug = config.debug if debug is None else debug

    app = create_app(config)

    print(f"\n  charforge API")
    print(f"  Server URL:       http://{host}:{port}/api/health")
    print(f"  Default edition:  {config.default_edition}")
    print(f"  Rules service:    {config.rules_api_url if config.rules_api_enabled else 'disabled'}")
    print(f"\n  Press Ctrl+C to stop\n")

    app.run(host=host, port=port, debug=debug)


def main():
    """Run development server."""
    import argparse

    parser = argparse.ArgumentParser(description='charforge web API')
    parser.add_argument('--host', help='Host to bind to (default: HOST or 0.0.0.0)')
    parser.add_argument('--port', type=int, help='Port to bind to (default: PORT or 5000)')
    parser.add_argument('--debug', action='store_true', default=None, help='Enable debug mode')

    args = parser.parse_args()
    run_server(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
