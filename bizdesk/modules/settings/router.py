from fastapi import APIRouter, Path
from typing import List

from bizdesk.dependencies.dbDependecies import db_dependency
from bizdesk.dependencies.userDependencies import auth_context_dependency
from bizdesk.modules.settings.service import SettingService
from bizdesk.modules.settings.schemas import SettingUpsert, SettingOut, SettingValue

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/", response_model=List[SettingOut])
async def get_all(db: db_dependency, auth_context: auth_context_dependency):
    return SettingService(db).get_all(auth_context.user_id)


@router.get("/category/{category}", response_model=List[SettingOut])
async def get_by_category(category: str, db: db_dependency, auth_context: auth_context_dependency):
    return SettingService(db).get_by_category(auth_context.user_id, category)


@router.get("/{key}", response_model=SettingValue)
async def get_setting(
    db: db_dependency,
    auth_context: auth_context_dependency,
    key: str = Path(..., max_length=100)
):
    """Valor de la clave, o null si no existe."""
    return SettingValue(key=key, value=SettingService(db).get(auth_context.user_id, key))


@router.put("/{key}", response_model=SettingOut)
async def update_setting(
    data: SettingUpsert,
    db: db_dependency,
    auth_context: auth_context_dependency,
    key: str = Path(..., max_length=100)
):
    return SettingService(db).update(auth_context.user_id, key, data)
