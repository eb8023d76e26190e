"""User model.

Back-office accounts: admins review and publish content, supervisors
author it. Flask-Login integration via UserMixin; requests authenticate
with a bearer token rather than a session cookie.
"""

from flask_login import UserMixin

from tarhal.extensions import db
from tarhal.models.mixins import generate_id, isoformat, utcnow


class User(UserMixin, db.Model):
    __tablename__ = "users"

    ROLES = ["admin", "supervisor"]

    id = db.Column(
        db.String(64), primary_key=True, default=lambda: generate_id("user")
    )
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255))
    role = db.Column(db.String(20), nullable=False, default="supervisor")
    country_id = db.Column(
        db.String(64), db.ForeignKey("countries.id"), nullable=True
    )  # supervisors may be scoped to one country
    is_active = db.Column(db.Boolean, default=True)
    last_login_at = db.Column(db.DateTime(timezone=True))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    @property
    def is_admin(self):
        return self.role == "admin"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "country_id": self.country_id,
            "last_login_at": isoformat(self.last_login_at),
        }

    def __repr__(self):
        return f"<User {self.email}>"
