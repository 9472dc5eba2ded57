from .auth import auth_bp
from .hotels import hotels_bp


def register_blueprints(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(hotels_bp)
