## Logica de segurança (jwt, hashing de senha, etc)
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, Header, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.api.models.user import User

ALGORITHM = settings.JWT_ALGORITHM

# bcrypt: limite de 72 BYTES
BCRYPT_MAX_BYTES = 72

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def criar_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGORITHM)


def decodificar_token(token: str, verify_exp: bool = True) -> dict:
    """Raises JWTError (ExpiredSignatureError included) on any invalid token."""
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[ALGORITHM],
        options={"verify_exp": verify_exp},
    )


def _user_from_payload(db: Session, payload: dict) -> Optional[User]:
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
    return db.get(User, user_id)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Sessão do dashboard web."""
    if not token:
        raise HTTPException(401, "Usuário não autenticado")

    try:
        payload = decodificar_token(token)
    except JWTError:
        raise HTTPException(401, "Usuário não autenticado")

    user = _user_from_payload(db, payload)
    if not user:
        raise HTTPException(401, "Usuário não autenticado")
    return user


def validate_token(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Gate único da API mobile: Bearer JWT + usuário existente."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(401, "Acesso não autorizado")

    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = decodificar_token(token)
    except JWTError:
        raise HTTPException(401, "Token inválido ou expirado")

    user = _user_from_payload(db, payload)
    if not user:
        raise HTTPException(401, "Usuário não encontrado")
    return user


def get_password_hash(password: str) -> str:
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("Senha muito longa (máx. 72 bytes)")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return pwd_context.verify(plain_password, hashed_password)
