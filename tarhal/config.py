import os

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name, default=""):
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def sqlite_uri(path):
    """Turn a DATABASE_PATH into a SQLAlchemy URI, creating its directory."""
    if path == ":memory:":
        return "sqlite:///:memory:"
    path = os.path.abspath(path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return f"sqlite:///{path}"


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # --- Auth tokens ---
    JWT_SECRET = os.environ.get("JWT_SECRET") or SECRET_KEY
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = int(os.environ.get("JWT_EXPIRES_HOURS", 24))

    # --- Database (single SQLite file) ---
    DATABASE_PATH = os.environ.get(
        "DATABASE_PATH", os.path.join("instance", "tarhal.db")
    )
    MIGRATIONS_DIR = os.environ.get(
        "MIGRATIONS_DIR", os.path.join(_PACKAGE_DIR, "migrations")
    )
    SQLALCHEMY_DATABASE_URI = None  # derived from DATABASE_PATH in create_app()
    AUTO_INIT_DB = True
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- Stripe ---
    STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
    STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET")
    STRIPE_PUBLISHABLE_KEY = os.environ.get("STRIPE_PUBLISHABLE_KEY")
    APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:8080")

    # --- CORS (comma separated; empty reflects any origin) ---
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",")
        if o.strip()
    ]

    # --- Rate limiting ---
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "100 per 15 minutes")
    LOGIN_RATE_LIMIT = os.environ.get("LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_HEADERS_ENABLED = True

    # --- Content review ---
    # Off: approve/reject apply from any status.
    # On: submit only from draft, approve only from pending_review.
    STRICT_REVIEW_TRANSITIONS = _env_flag("STRICT_REVIEW_TRANSITIONS")

    # --- Housekeeping ---
    AUDIT_RETENTION_DAYS = int(os.environ.get("AUDIT_RETENTION_DAYS", 30))
    API_REQUEST_LOGGING = _env_flag("API_REQUEST_LOGGING")
    PING_MESSAGE = os.environ.get("PING_MESSAGE", "pong")

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "STRIPE_SECRET_KEY",
            "STRIPE_WEBHOOK_SECRET",
        ]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True
    SECRET_KEY = Config.SECRET_KEY or "dev-secret-key-change-me"
    JWT_SECRET = Config.JWT_SECRET or SECRET_KEY
    API_REQUEST_LOGGING = True


class TestConfig(Config):
    """Testing: in-memory SQLite, rate limits and auto schema setup off."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    JWT_SECRET = "test-jwt-secret"
    DATABASE_PATH = ":memory:"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    AUTO_INIT_DB = False
    STRIPE_SECRET_KEY = "sk_test_fake"
    STRIPE_WEBHOOK_SECRET = "whsec_test_fake"
    STRIPE_PUBLISHABLE_KEY = "pk_test_fake"
    APP_BASE_URL = "http://localhost:8080"
    RATELIMIT_ENABLED = False  # disable rate limiting in tests
    STRICT_REVIEW_TRANSITIONS = False
    API_REQUEST_LOGGING = False

    @staticmethod
    def validate():
        """Skip validation in test mode; everything is hardcoded."""
        pass


class ProdConfig(Config):
    """Production."""

    DEBUG = False


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
