"""Rutas de autenticación."""
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.limiter import limiter
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.auth_service import (
    create_token,
    create_user,
    get_current_user,
    get_current_user_optional,
    verify_password,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
@limiter.limit("20 per minute")
def login(request: Request, data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == data.username).first()
    if not user or not verify_password(data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Credenciales incorrectas")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Usuario desactivado")

    user.last_login = datetime.now(UTC)
    db.commit()

    settings = get_settings()
    return {
        "access_token": create_token(user),
        "token_type": "bearer",
        "user": user.to_dict(),
        "session": {"exp_minutes": settings.jwt_expire_minutes, "role": user.role},
    }


@router.post("/register", status_code=201)
@limiter.limit("5 per minute")
def register(
    request: Request,
    data: RegisterRequest,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_current_user_optional),
):
    settings = get_settings()
    if db.query(User).count() > 0 and not settings.allow_public_register:
        if not current_user or current_user.role != "admin":
            raise HTTPException(status_code=403, detail="Registro público deshabilitado")

    if db.query(User).filter(User.username == data.username).first():
        raise HTTPException(status_code=409, detail="El nombre de usuario ya existe")
    if data.email and db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=409, detail="El email ya está registrado")

    user = create_user(
        db,
        username=data.username,
        password=data.password,
        full_name=data.full_name or "Usuario",
        email=data.email,
    )
    return {"access_token": create_token(user), "token_type": "bearer", "user": user.to_dict()}


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return user.to_dict()
