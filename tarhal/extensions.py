"""
Deferred extension instances.

Created here, bound to the app in create_app() via init_app().
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

db = SQLAlchemy()
migrate = Migrate(render_as_batch=True)  # SQLite needs batch mode for ALTERs
login_manager = LoginManager()
limiter = Limiter(
    key_func=get_remote_address,  # API-wide limit comes from RATELIMIT_DEFAULT
    storage_uri="memory://",
)


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve a bearer token to a User. Imports lazily to avoid circular deps."""
    from tarhal.services.auth_service import user_from_authorization_header

    return user_from_authorization_header(request.headers.get("Authorization"))
