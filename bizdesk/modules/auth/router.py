from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from bizdesk.dependencies.dbDependecies import get_db
from bizdesk.modules.auth.service import AuthService
from bizdesk.modules.auth.dependencies import get_current_user
from bizdesk.modules.auth.models import User
from bizdesk.modules.auth.schemas import UserCreate, UserOut, UserUpdate, TokenResponse

auth_router = APIRouter()

@auth_router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Registrar nuevo usuario.
    """
    auth_service = AuthService(db)
    return auth_service.create_user(user_data)

@auth_router.post("/login", response_model=TokenResponse)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """
    Login de usuario. Retorna token de acceso.
    """
    auth_service = AuthService(db)
    return auth_service.login(form_data.username, form_data.password)

@auth_router.get("/me", response_model=UserOut)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Obtener información del usuario actual.
    """
    return current_user

@auth_router.patch("/me", response_model=UserOut)
async def update_current_user(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Actualizar datos de la cuenta del usuario actual.
    """
    auth_service = AuthService(db)
    return auth_service.update_user_profile(current_user.id, user_update)
