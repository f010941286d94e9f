"""
Firebase Admin SDK access: Auth for storefront logins, Firestore for team members.

The app is initialised lazily so the API starts without Firebase credentials;
only the routes that need Firebase fail when it is missing.
"""
import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials, firestore

import config

logger = logging.getLogger(__name__)

_app = None


class FirebaseNotConfigured(RuntimeError):
    pass


def get_app():
    global _app
    if _app is not None:
        return _app
    if not config.FIREBASE_CREDENTIALS:
        raise FirebaseNotConfigured("FIREBASE_CREDENTIALS is not set")
    cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
    _app = firebase_admin.initialize_app(cred)
    return _app


def get_firestore():
    return firestore.client(app=get_app())


def is_admin_email(email: Optional[str]) -> bool:
    if not email:
        return False
    email = email.strip().lower()
    allowed = {"admin@rodela.com"}
    if config.ADMIN_EMAIL:
        allowed.add(config.ADMIN_EMAIL)
    return email in allowed or email.endswith("@" + config.ADMIN_EMAIL_DOMAIN)


def verify_login(id_token: str) -> Dict[str, Any]:
    """Verify a Firebase ID token issued to the storefront login page."""
    try:
        decoded = firebase_auth.verify_id_token(id_token, app=get_app())
    except (ValueError, firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError) as exc:
        logger.info("Rejected Firebase token: %s", exc)
        raise PermissionError("Invalid Firebase token") from exc

    email = decoded.get("email")
    return {
        "uid": decoded.get("uid") or decoded.get("sub"),
        "email": email,
        "name": decoded.get("name") or (email.split("@")[0] if email else None),
        "phone": decoded.get("phone_number"),
        "is_admin": is_admin_email(email),
    }
