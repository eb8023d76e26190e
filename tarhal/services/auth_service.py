"""Auth service: back-office accounts and bearer tokens.

Passwords are hashed with werkzeug.security. Tokens are HS256 JWTs
(python-jose) carrying sub (user id), role, email and exp. Tokens are
stateless; logout is a client-side discard.
"""

import logging
from datetime import timedelta

from flask import current_app
from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from tarhal.extensions import db
from tarhal.models.mixins import utcnow
from tarhal.models.user import User

logger = logging.getLogger(__name__)


def create_user(email, password, role="supervisor", full_name=None, country_id=None):
    """Create a back-office user.

    Raises:
        ValueError: If the role is unknown or the email is taken.
    """
    email = (email or "").strip().lower()
    if not email or not password:
        raise ValueError("Email and password are required.")
    if role not in User.ROLES:
        raise ValueError(f"Invalid role '{role}'. Must be one of: {', '.join(User.ROLES)}")
    if User.query.filter_by(email=email).first():
        raise ValueError(f"User {email} already exists.")

    user = User(
        email=email,
        password_hash=generate_password_hash(password),
        full_name=full_name,
        role=role,
        country_id=country_id,
    )
    db.session.add(user)
    db.session.commit()
    return user


def authenticate(email, password):
    """Return the active user for these credentials, or None."""
    email = (email or "").strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None or not user.is_active:
        return None
    if not check_password_hash(user.password_hash, password or ""):
        return None
    user.last_login_at = utcnow()
    db.session.commit()
    return user


def issue_token(user):
    expires = utcnow() + timedelta(hours=current_app.config["JWT_EXPIRES_HOURS"])
    claims = {
        "sub": user.id,
        "role": user.role,
        "email": user.email,
        "exp": expires,
    }
    return jwt.encode(
        claims,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def decode_token(token):
    """Return the token's claims, or None if invalid or expired."""
    try:
        return jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
        )
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None


def bearer_token(header_value):
    if not header_value or not header_value.startswith("Bearer "):
        return None
    return header_value[7:].strip() or None


def user_from_authorization_header(header_value):
    """Resolve an Authorization header to an active User, or None."""
    token = bearer_token(header_value)
    if token is None:
        return None
    claims = decode_token(token)
    if not claims or not claims.get("sub"):
        return None
    user = db.session.get(User, claims["sub"])
    if user is None or not user.is_active:
        return None
    return user
