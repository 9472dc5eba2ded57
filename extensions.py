"""
Shared Flask extensions, initialised in create_app()
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager

limiter = Limiter(key_func=get_remote_address, default_limits=["200 per minute"])

login_manager = LoginManager()
