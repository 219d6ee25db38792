"""Seed the demo account.

Creates or updates demo@example.com / demo123 with a filled-in profile.
Run with ``python -m flatshare.scripts.seed``.
"""

import logging

from sqlmodel import Session

from flatshare.database import engine, init_db
from flatshare.models.user import User
from flatshare.services import user_service
from flatshare.utils.security import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"
DEMO_PROFILE = {
    "name": "Usuario Demo",
    "avatar_url": "https://ui-avatars.com/api/?name=Usuario+Demo&background=6366f1&color=fff&size=128",
    "bio": "Este es un usuario de demostración. Puedes editar este perfil para personalizarlo.",
    "phone": "+34 600 000 000",
}


def seed_demo_user(session: Session) -> User:
    user = user_service.find_by_email(DEMO_EMAIL, session)
    if user:
        logger.info("Updating demo user %s", user.id)
    else:
        user = User(email=DEMO_EMAIL, password_hash="", name=DEMO_PROFILE["name"])
        logger.info("Creating demo user")

    user.password_hash = hash_password(DEMO_PASSWORD)
    for key, value in DEMO_PROFILE.items():
        setattr(user, key, value)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def main() -> None:
    init_db()
    with Session(engine) as session:
        user = seed_demo_user(session)
    logger.info("Demo user ready: %s / %s", user.email, DEMO_PASSWORD)


if __name__ == "__main__":
    main()
