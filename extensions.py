"""Flask 확장 인스턴스 (앱 팩토리에서 init_app)"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
