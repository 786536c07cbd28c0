from .crags import crags_bp
from .climbs import climbs_bp
from .reports import reports_bp
from .search import search_bp
from .user import user_bp

def register_blueprints(app):
    app.register_blueprint(crags_bp)
    app.register_blueprint(climbs_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(user_bp)
