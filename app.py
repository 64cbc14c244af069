import atexit
import secrets
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from api_utils import ApiError
from config import Config
from routes.budgets import budgets_bp
from routes.categories import categories_bp
from routes.dashboard import dashboard_bp
from routes.transactions import transactions_bp


def create_app(config_class=Config, store=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # the store is opened here and handed to handlers via app.extensions
    if store is None:
        store = config_class.open_store()
    app.extensions['store'] = store
    atexit.register(store.close)

    CORS(app, send_wildcard=True)

    app.register_blueprint(categories_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(dashboard_bp)

    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat()})

    return app


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(e):
        return jsonify({'error': e.message}), e.status_code

    @app.errorhandler(ValidationError)
    def validation_error(e):
        first = e.errors()[0]
        field = ".".join(str(part) for part in first['loc'])
        message = f"{field}: {first['msg']}" if field else first['msg']
        return jsonify({'error': message}), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception("Server error")
        return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=app.config['PORT'])
