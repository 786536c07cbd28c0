from flask import session
from typing import Optional

from klip.extensions import db
from klip.models import User
from klip.helpers.roles import CONTRIBUTOR

# Keys the external auth provider's callback leaves in the Flask session
SESSION_EMAIL_KEY = "user_email"
SESSION_NAME_KEY = "user_name"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def split_name(full_name: Optional[str]) -> tuple[str, str]:
    """"Jean Claude Admin" -> ("Jean", "Claude Admin")."""
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def get_session_email() -> Optional[str]:
    return normalize_email(session.get(SESSION_EMAIL_KEY)) or None


def get_session_name() -> Optional[str]:
    return session.get(SESSION_NAME_KEY) or None


def get_user_by_email(email: str) -> Optional[User]:
    email = normalize_email(email)
    if not email:
        return None
    return User.query.filter_by(email=email).first()


def get_or_create_user(email: str, name: Optional[str] = None) -> User:
    """
    Find the user for this email, creating a CONTRIBUTOR if needed.

    Name parts from the auth provider only overwrite stored ones when
    non-empty, so a provider that drops the name never wipes it.
    """
    email = normalize_email(email)
    if not email:
        raise ValueError("email required")

    firstname, lastname = split_name(name)

    user = User.query.filter_by(email=email).first()
    if user:
        changed = False
        if firstname and user.firstname != firstname:
            user.firstname = firstname
            changed = True
        if lastname and user.lastname != lastname:
            user.lastname = lastname
            changed = True
        if changed:
            db.session.commit()
        return user

    user = User(
        email=email,
        firstname=firstname,
        lastname=lastname,
        role=CONTRIBUTOR,
    )
    db.session.add(user)
    db.session.commit()
    return user
