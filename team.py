"""Back-office team members, stored in the Firestore `team_members` collection (document id = email)."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import firebase_app

logger = logging.getLogger(__name__)

COLLECTION = "team_members"


def _members():
    return firebase_app.get_firestore().collection(COLLECTION)


def _to_dict(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


def list_members() -> List[Dict[str, Any]]:
    members = [_to_dict(s) for s in _members().stream()]
    return sorted(members, key=lambda m: str(m.get("added_at") or ""), reverse=True)


def add_member(email: str, name: str, role: str) -> Dict[str, Any]:
    email = email.lower()
    data = {
        "email": email,
        "name": name,
        "role": role,
        "added_at": datetime.now(timezone.utc).isoformat(),
    }
    _members().document(email).set(data)
    logger.info("Added team member %s as %s", email, role)
    return {**data, "id": email}


def update_role(email: str, role: str) -> Optional[Dict[str, Any]]:
    ref = _members().document(email.lower())
    if not ref.get().exists:
        return None
    ref.update({"role": role})
    return _to_dict(ref.get())


def remove_member(email: str) -> bool:
    ref = _members().document(email.lower())
    if not ref.get().exists:
        return False
    ref.delete()
    logger.info("Removed team member %s", email)
    return True
