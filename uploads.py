import base64
import logging
import os
import re
import time

import requests

import config

logger = logging.getLogger(__name__)


class ImageHostError(Exception):
    pass


def safe_filename(filename: str) -> str:
    name = os.path.basename(filename or "upload")
    return re.sub(r"\s", "-", name)


def save_local(filename: str, content: bytes, upload_dir: str = None) -> str:
    """Write an upload under <upload_dir>/uploads and return its public URL."""
    base = upload_dir or config.UPLOAD_DIR
    target_dir = os.path.join(base, "uploads")
    os.makedirs(target_dir, exist_ok=True)

    stored_name = f"{int(time.time() * 1000)}-{safe_filename(filename)}"
    with open(os.path.join(target_dir, stored_name), "wb") as fh:
        fh.write(content)

    logger.info("Stored upload %s (%d bytes)", stored_name, len(content))
    return f"/uploads/{stored_name}"


def upload_to_imgbb(filename: str, content: bytes) -> str:
    if not config.IMGBB_API_KEY:
        raise ImageHostError("IMGBB_API_KEY is not defined")

    try:
        resp = requests.post(
            config.IMGBB_UPLOAD_URL,
            params={"key": config.IMGBB_API_KEY},
            data={"image": base64.b64encode(content).decode(), "name": safe_filename(filename)},
            timeout=30,
        )
        data = resp.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        raise ImageHostError(f"Image host unreachable: {exc}") from exc

    if not data.get("success"):
        message = (data.get("error") or {}).get("message") or "Failed to upload image"
        raise ImageHostError(message)

    return data["data"]["url"]
