"""
MongoDB access for the storefront.

`db` is None when DATABASE_URL / DATABASE_NAME are not configured; callers
check for that and answer with a 500 instead of crashing at import time.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from pymongo import MongoClient

from config import DATABASE_NAME, DATABASE_URL

logger = logging.getLogger(__name__)

db = None

if DATABASE_URL and DATABASE_NAME:
    client = MongoClient(DATABASE_URL)
    db = client[DATABASE_NAME]
else:
    logger.warning("DATABASE_URL or DATABASE_NAME not set, running without a database")


def get_db():
    return db


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
    """Insert a document, stamping created_at/updated_at. Returns the inserted _id as a string."""
    if db is None:
        raise RuntimeError("Database not configured")

    if isinstance(data, BaseModel):
        doc = data.model_dump()
    else:
        doc = dict(data)
    now = datetime.utcnow()
    doc.setdefault("created_at", now)
    doc["updated_at"] = now
    result = db[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(collection_name: str, filter_dict: Optional[Dict[str, Any]] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    if db is None:
        raise RuntimeError("Database not configured")

    cursor = db[collection_name].find(filter_dict or {}).sort("created_at", -1)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
