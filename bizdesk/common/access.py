"""
Ownership checks shared by all services
"""
import secrets
import time
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session


def ensure_owner(record, user_id: UUID, label: str):
    """Lanza 404 si el registro no existe y 403 si pertenece a otro usuario."""
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No se encontró el registro ({label})"
        )
    if record.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"No tienes acceso a este registro ({label})"
        )
    return record


def record_query(db: Session, model, record_id: UUID, for_update: bool = False):
    """
    Consulta de un registro por ID. Con for_update bloquea solo la tabla del
    modelo: Postgres no admite FOR UPDATE sobre el lado nullable de los
    joins que agregan las relaciones lazy="joined".
    """
    query = db.query(model).filter(model.id == record_id)
    if for_update:
        query = query.with_for_update(of=model)
    return query


def get_owned_record(db: Session, model, record_id: UUID, user_id: UUID, label: str, for_update: bool = False):
    """Obtener un registro por ID validando que pertenece al usuario"""
    return ensure_owner(record_query(db, model, record_id, for_update).first(), user_id, label)


def generate_reference(prefix: str) -> str:
    """Referencia legible tipo audit_1718000000000_a1b2c3d4"""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(4)}"
