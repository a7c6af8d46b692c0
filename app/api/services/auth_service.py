import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from fastapi import HTTPException
from jose import JWTError
from sqlalchemy.orm import Session

from app.api.models.user import User
from app.core.config import settings
from app.core.security import criar_token, decodificar_token, get_password_hash, verify_password
from app.core.utils import slugify, unique_slug
from app.schemas.user import RegisterIn

logger = logging.getLogger("auth")


class AuthService:

    @staticmethod
    def generate_user_slug(db: Session, name: str) -> str:
        def exists(slug: str) -> bool:
            return db.query(User.id).filter(User.slug == slug).first() is not None

        return unique_slug(slugify(name), exists, fallback="medico")

    @staticmethod
    def register(db: Session, data: RegisterIn) -> Tuple[User, str]:
        if not data.name or not data.email or not data.password:
            raise HTTPException(400, "Nome, e-mail e senha são obrigatórios")

        existing = db.query(User).filter(User.email == data.email).first()
        if existing:
            raise HTTPException(409, "Este e-mail já está em uso")

        try:
            password_hash = get_password_hash(data.password)
        except ValueError as e:
            raise HTTPException(400, str(e))

        user = User(
            name=data.name,
            email=data.email,
            password_hash=password_hash,
            specialty=data.specialty or None,
            phone=data.phone or None,
            slug=AuthService.generate_user_slug(db, data.name),
        )

        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info("USER_REGISTERED: user_id=%s slug=%s", user.id, user.slug)
        return user, criar_token(user)

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        user = db.query(User).filter(User.email == email).first()

        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    @staticmethod
    def login(db: Session, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        if not email or not password:
            raise HTTPException(400, "E-mail e senha são obrigatórios")

        user = AuthService.authenticate(db, email, password)
        if not user:
            raise HTTPException(401, "Credenciais inválidas")

        return user, criar_token(user)

    @staticmethod
    def refresh(db: Session, token: Optional[str]) -> dict:
        """
        Renova um token prestes a expirar. Tokens expirados mas com assinatura
        válida também são aceitos.
        """
        if not token:
            raise HTTPException(400, "Token é obrigatório")

        try:
            payload = decodificar_token(token, verify_exp=False)
            user_id = int(payload.get("sub"))
        except (JWTError, TypeError, ValueError):
            raise HTTPException(401, "Token inválido")

        user = db.get(User, user_id)
        if not user:
            raise HTTPException(401, "Usuário não encontrado")

        expires_at = datetime.utcfromtimestamp(payload.get("exp", 0))
        window = timedelta(hours=settings.TOKEN_REFRESH_WINDOW_HOURS)

        if expires_at > datetime.utcnow() + window:
            return {"message": "Token ainda é válido", "token": token, "user": user}

        logger.info("TOKEN_REFRESHED: user_id=%s", user.id)
        return {"message": "Token renovado com sucesso", "token": criar_token(user), "user": user}
