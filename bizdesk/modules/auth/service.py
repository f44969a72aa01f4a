from datetime import datetime, timezone
from uuid import UUID
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from bizdesk.modules.auth.models import User
from bizdesk.modules.auth.schemas import UserCreate, UserUpdate, UserOut, TokenResponse
from bizdesk.modules.auth.utils import hash_password, verify_password, create_access_token
from bizdesk.core.config import settings

logger = logging.getLogger(__name__)

class AuthService:
    """
    Servicio de autenticación y datos de cuenta.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, user_data: UserCreate) -> User:
        """
        Registrar nuevo usuario.
        """
        existing_user = self.db.query(User).filter(User.email == user_data.email).first()
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Este email ya está registrado"
            )

        user = User(
            email=user_data.email,
            password=hash_password(user_data.password),
            full_name=user_data.full_name,
            phone_number=user_data.phone_number,
            business_name=user_data.business_name,
            business_email=user_data.business_email,
            is_active=True
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User registered: {user.id}")
        return user

    def login(self, email: str, password: str) -> TokenResponse:
        """
        Login de usuario. Retorna token de acceso.
        """
        user = self.db.query(User).filter(User.email == email).first()

        if not user or not verify_password(password, user.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Credenciales incorrectas"
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cuenta inactiva"
            )

        user.last_login = datetime.now(timezone.utc)
        self.db.commit()

        access_token = create_access_token(user.id, user.email)

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=UserOut.model_validate(user)
        )

    def update_user_profile(self, user_id: UUID, user_update: UserUpdate) -> User:
        """
        Actualizar datos de la cuenta (nombre, teléfono, datos del negocio).
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Usuario no encontrado"
            )

        for field, value in user_update.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user
