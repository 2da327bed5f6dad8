from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any

import bcrypt

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

ERR_MISSING_FIELDS = "Preencha todos os campos"
ERR_INVALID_EMAIL = "Email inválido"
ERR_SHORT_PASSWORD = f"Senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres"
ERR_DUPLICATE_EMAIL = "Email já cadastrado"
ERR_BAD_CREDENTIALS = "Email ou senha incorretos"

_users: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()
_users_file: Path | None = Path(os.environ["USERS_FILE"]) if os.environ.get("USERS_FILE") else None


class AuthError(ValueError):
    """User-facing registration or login failure."""


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _load() -> None:
    if _users_file is None or not _users_file.is_file():
        return
    try:
        records = json.loads(_users_file.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.error("Could not read users file %s", _users_file, exc_info=True)
        return
    for record in records:
        _users[record["email"]] = record
    logger.info("Loaded %d users from %s", len(_users), _users_file)


def _save() -> None:
    if _users_file is None:
        return
    _users_file.parent.mkdir(parents=True, exist_ok=True)
    _users_file.write_text(json.dumps(list(_users.values()), ensure_ascii=False, indent=2), encoding="utf-8")


def register(email: str, password: str, name: str) -> dict[str, str]:
    """Create a user. Raises ``AuthError`` with a user-facing message."""
    email = (email or "").strip()
    name = (name or "").strip()
    if not email or not password or not name:
        raise AuthError(ERR_MISSING_FIELDS)
    if "@" not in email:
        raise AuthError(ERR_INVALID_EMAIL)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(ERR_SHORT_PASSWORD)

    with _lock:
        if email in _users:
            raise AuthError(ERR_DUPLICATE_EMAIL)
        _users[email] = {"email": email, "name": name, "password_hash": _hash_password(password)}
        _save()

    logger.info("Registered user %s", email)
    return {"email": email, "name": name}


def authenticate(email: str, password: str) -> dict[str, str]:
    """Verify credentials. Returns ``{email, name}``.

    Unknown email and wrong password fail with the same message.
    """
    email = (email or "").strip()
    if not email or not password:
        raise AuthError(ERR_MISSING_FIELDS)

    record = _users.get(email)
    if not record or not _verify_password(password, record["password_hash"]):
        raise AuthError(ERR_BAD_CREDENTIALS)
    return {"email": record["email"], "name": record["name"]}


def clear_users() -> None:
    with _lock:
        _users.clear()


_load()
