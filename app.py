import logging
import os
from logging.config import dictConfig

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.middleware.proxy_fix import ProxyFix

from extensions import limiter
from models import db

# .env 파일에서 환경변수 로드
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(BASE_DIR, '.env'))

from config import config_by_name

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    app = Flask(__name__)
    # 리버스 프록시 뒤에서 클라이언트 IP/스킴을 올바르게 처리
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # 환경 설정 적용 (기본값 production)
    env_name = config_name or os.environ.get('FLASK_ENV', 'production')
    app_config = config_by_name[env_name]()
    app.config.from_object(app_config)

    # 로깅 설정 적용
    log_dir = os.path.join(BASE_DIR, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    dictConfig(app_config.get_logging_config(log_dir))

    # 초기화
    db.init_app(app)
    limiter.init_app(app)

    from services.enquiry_store import EnquiryStore
    app.extensions['enquiry_store'] = EnquiryStore(db.session)

    # Blueprint 중앙 등록
    from routes import register_blueprints
    register_blueprints(app)

    with app.app_context():
        try:
            db.create_all()
            db.session.execute(db.text('SELECT 1'))
            logger.info("Database connected successfully")
        except SQLAlchemyError as e:
            logger.error("Database connection error: %s", e)
        finally:
            db.session.remove()

    _register_handlers(app)
    return app


def _register_handlers(app):
    @app.route('/health')
    def health():
        try:
            db.session.execute(db.text('SELECT 1'))
            return jsonify({"status": "healthy", "database": "connected"}), 200
        except SQLAlchemyError as e:
            logger.error("Health check failed: %s", e)
            return jsonify({"status": "unhealthy", "database": "disconnected"}), 503

    @app.after_request
    def set_security_headers(response):
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith('/api/admin/enquiries/'):
            return jsonify({"error": "Enquiry not found"}), 404
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(429)
    def too_many_requests(e):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def internal_server_error(e):
        logger.exception("500 Internal Server Error: %s", e)
        return jsonify({"error": "Internal server error"}), 500


if __name__ == '__main__':
    use_debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    create_app().run(host='127.0.0.1', port=int(os.environ.get('PORT', 5000)), debug=use_debug)
