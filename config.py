import os

from sqlalchemy.engine import URL

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _database_uri():
    """DATABASE_URL > DB_* 개별 설정(PostgreSQL) > 로컬 SQLite"""
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    if os.environ.get('DB_HOST') and os.environ.get('DB_NAME'):
        query = {}
        if os.environ.get('DB_SSL', '0') == '1':
            # 암호화는 하되 서버 인증서는 검증하지 않음
            query['sslmode'] = 'require'
        return URL.create(
            'postgresql+psycopg2',
            username=os.environ.get('DB_USER'),
            password=os.environ.get('DB_PASS'),
            host=os.environ.get('DB_HOST'),
            port=int(os.environ.get('DB_PORT', 5432)),
            database=os.environ.get('DB_NAME'),
            query=query,
        ).render_as_string(hide_password=False)

    return None


class Config:
    """기본 설정 (모든 환경 공통)"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = _database_uri() or f"sqlite:///{os.path.join(BASE_DIR, 'enquiries.db')}"
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB (JSON 본문 전용)

    # ── 공개 문의 접수 ──
    ENQUIRY_RATE_LIMIT = os.environ.get('ENQUIRY_RATE_LIMIT', '10 per minute')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True

    # ── 신규 문의 알림 (없으면 로그만 출력) ──
    SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.environ.get('SMTP_PORT', 465))
    SMTP_USER = os.environ.get('SMTP_USER')
    SMTP_PASS = os.environ.get('SMTP_PASS')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')

    # 로깅 설정
    @staticmethod
    def get_logging_config(log_dir):
        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
                }
            },
            'handlers': {
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'filename': os.path.join(log_dir, 'enquiry_admin.log'),
                    'maxBytes': 1024 * 1024 * 10, # 10MB
                    'backupCount': 5,
                    'formatter': 'default',
                    'encoding': 'utf-8'
                },
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default'
                }
            },
            'root': {
                'level': 'INFO',
                'handlers': ['file', 'console']
            }
        }


class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True


class TestingConfig(Config):
    """테스트 환경 설정"""
    TESTING = True
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """운영 환경 설정"""
    DEBUG = False

    # 운영 환경 필수값 검증
    def __init__(self):
        if not _database_uri():
            raise RuntimeError("DATABASE_URL or DB_HOST/DB_NAME environment variables are not set")


# 환경 변수에 따라 설정 클래스 선택
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
