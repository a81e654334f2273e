# app/core/security_password.py
"""Senhas dos usuários: argon2 para hashes novos.

Hashes bcrypt antigos (ou argon2 com custo diferente do configurado) ainda
validam e são regravados no próximo login bem-sucedido.
"""
from __future__ import annotations

import logging

from passlib.context import CryptContext

from app.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["argon2", "bcrypt"],
    deprecated=["bcrypt"],
    argon2__time_cost=settings.PASSWORD_HASH_TIME_COST,
    argon2__memory_cost=settings.PASSWORD_HASH_MEMORY_KIB,
    argon2__parallelism=1,
)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def check_user_password(user, plain: str) -> bool:
    """Confere ``plain`` contra ``user.hashed_password``.

    Quando o hash está obsoleto, grava o novo em ``user.hashed_password``;
    o commit fica com o chamador. Hash ilegível conta como senha errada.
    """
    try:
        ok, new_hash = pwd_context.verify_and_update(plain, user.hashed_password)
    except ValueError:
        logger.warning("user %s has an unreadable password hash", user.id)
        return False
    if ok and new_hash:
        user.hashed_password = new_hash
        logger.info("password hash upgraded for user %s", user.id)
    return ok
