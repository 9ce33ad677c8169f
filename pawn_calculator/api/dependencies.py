"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pawn_calculator.config import settings
from pawn_calculator.domain.models import WeightTable
from pawn_calculator.domain.weights import default_weight_table
from pawn_calculator.infrastructure.auth.credentials import CredentialVerifier, Pbkdf2CredentialVerifier
from pawn_calculator.infrastructure.database.repositories import WeightConfigRepository
from pawn_calculator.infrastructure.database.session import get_db
from pawn_calculator.infrastructure.observability.metrics import (
    admin_auth_failures_counter,
    weight_fallback_counter,
)

basic_auth = HTTPBasic(realm="pawn-calculator-admin")


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_app_id() -> str:
    """Application id the weight document is stored under"""
    return settings.app_id


def get_weight_table(
    request: Request,
    db: Session = Depends(get_db),
    app_id: str = Depends(get_app_id),
) -> WeightTable:
    """
    Provide a weight table snapshot for this request.

    A store failure must not block quoting: fall back to the default table.
    """
    try:
        table = WeightConfigRepository(db).load_or_create(app_id)
        db.commit()
        return table
    except SQLAlchemyError as e:
        db.rollback()
        weight_fallback_counter.inc()
        logging.error(
            f"Weight store unavailable, using default weights: {e}",
            extra={"request_id": get_request_id(request), "app_id": app_id},
        )
        return default_weight_table()


def get_credential_verifier() -> CredentialVerifier:
    """Provide the admin credential verifier"""
    return Pbkdf2CredentialVerifier(settings.admin_username, settings.admin_password_hash)


def require_admin(
    credentials: HTTPBasicCredentials = Depends(basic_auth),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> str:
    """Gate an endpoint behind admin credentials; returns the admin username"""
    if not verifier.verify(credentials.username, credentials.password):
        admin_auth_failures_counter.inc()
        logging.warning("Admin authentication failed", extra={"username": credentials.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
