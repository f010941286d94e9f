"""
Thin service classes: each one turns a resource name into pymongo calls.

Documents are returned as plain dicts with the Mongo `_id` stripped. Products,
orders and categories carry their own public `id`; users are addressed by the
string form of their `_id`.
"""
import random
import re
import time
import unicodedata
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pymongo import ReturnDocument

import database


class UserExistsError(Exception):
    pass


def _require_db():
    db = database.get_db()
    if db is None:
        raise HTTPException(status_code=500, detail="Database not configured")
    return db


def _collection(name: str):
    return _require_db()[name]


def to_dict(doc):
    if not doc:
        return doc
    d = dict(doc)
    d.pop("_id", None)
    return d


def user_to_dict(doc):
    if not doc:
        return doc
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    d.pop("password", None)
    return d


def generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def slugify(value: str) -> str:
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^\w\s-]", "", value).strip().lower()
    return re.sub(r"[-_\s]+", "-", value)


def _object_id(user_id: str) -> ObjectId:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid ID")


class _DocumentService:
    """CRUD over a collection keyed by a public `id` field."""

    collection: str = ""

    @classmethod
    def list(cls, filter_dict: Optional[Dict[str, Any]] = None) -> List[dict]:
        _require_db()
        return [to_dict(d) for d in database.get_documents(cls.collection, filter_dict)]

    @classmethod
    def get(cls, item_id: str) -> Optional[dict]:
        return to_dict(_collection(cls.collection).find_one({"id": item_id}))

    @classmethod
    def create(cls, data: Dict[str, Any]) -> dict:
        _require_db()
        database.create_document(cls.collection, data)
        return cls.get(data["id"])

    @classmethod
    def update(cls, item_id: str, updates: Dict[str, Any]) -> Optional[dict]:
        updates = {k: v for k, v in updates.items() if k not in ("id", "_id")}
        updates["updated_at"] = datetime.utcnow()
        doc = _collection(cls.collection).find_one_and_update(
            {"id": item_id}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )
        return to_dict(doc)

    @classmethod
    def delete(cls, item_id: str) -> Optional[dict]:
        return to_dict(_collection(cls.collection).find_one_and_delete({"id": item_id}))


class ProductService(_DocumentService):
    collection = "product"

    @classmethod
    def create(cls, data: Dict[str, Any]) -> dict:
        data = dict(data)
        if not data.get("id"):
            data["id"] = generate_id("PROD")
        if cls.get(data["id"]):
            raise HTTPException(status_code=409, detail="Product already exists")
        return super().create(data)

    @classmethod
    def get_many(cls, ids: List[str]) -> Dict[str, dict]:
        docs = _collection(cls.collection).find({"id": {"$in": list(ids)}})
        return {d["id"]: to_dict(d) for d in docs}


class OrderService(_DocumentService):
    collection = "order"

    @classmethod
    def create(cls, data: Dict[str, Any]) -> dict:
        data = dict(data)
        if not data.get("id"):
            data["id"] = generate_id("ORD")
        if not data.get("date"):
            data["date"] = datetime.utcnow().isoformat() + "Z"
        if cls.get(data["id"]):
            raise HTTPException(status_code=409, detail="Order already exists")
        return super().create(data)


class CategoryService(_DocumentService):
    collection = "category"

    @classmethod
    def list(cls, filter_dict: Optional[Dict[str, Any]] = None) -> List[dict]:
        return [to_dict(d) for d in _collection(cls.collection).find(filter_dict or {}).sort("name", 1)]

    @classmethod
    def create(cls, data: Dict[str, Any]) -> dict:
        data = dict(data)
        if not data.get("id"):
            data["id"] = slugify(data["name"])
        if cls.get(data["id"]):
            raise HTTPException(status_code=409, detail="Category already exists")
        return super().create(data)


class UserService:
    collection = "user"

    @staticmethod
    def create_user(data: Dict[str, Any]) -> dict:
        users = _collection(UserService.collection)
        if users.find_one({"email": data["email"]}):
            raise UserExistsError("User already exists")
        doc = dict(data)
        doc.setdefault("role", "user")
        user_id = database.create_document(UserService.collection, doc)
        return users.find_one({"_id": ObjectId(user_id)})

    @staticmethod
    def find_by_email(email: str) -> Optional[dict]:
        return _collection(UserService.collection).find_one({"email": email})

    @staticmethod
    def list_users() -> List[dict]:
        cursor = _collection(UserService.collection).find().sort("created_at", -1)
        return [user_to_dict(u) for u in cursor]

    @staticmethod
    def update_role(user_id: str, role: str) -> Optional[dict]:
        return _collection(UserService.collection).find_one_and_update(
            {"_id": _object_id(user_id)},
            {"$set": {"role": role, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    def update_profile(email: str, updates: Dict[str, Any]) -> Optional[dict]:
        updates = {k: v for k, v in updates.items() if k not in ("role", "password", "email", "_id", "id")}
        updates["updated_at"] = datetime.utcnow()
        return _collection(UserService.collection).find_one_and_update(
            {"email": email}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )

    @staticmethod
    def delete_user(user_id: str) -> Optional[dict]:
        return _collection(UserService.collection).find_one_and_delete({"_id": _object_id(user_id)})
