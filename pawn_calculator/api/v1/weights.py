"""GET /v1/weights and PUT /v1/admin/weights - rate weight configuration"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pawn_calculator.api.v1.schemas import WeightTableSchema, WeightTableUpdate
from pawn_calculator.api.dependencies import get_app_id, get_request_id, get_weight_table, require_admin
from pawn_calculator.domain.exceptions import WeightTableFormatError
from pawn_calculator.domain.models import WeightTable
from pawn_calculator.infrastructure.database.repositories import WeightConfigRepository
from pawn_calculator.infrastructure.database.session import get_db
from pawn_calculator.infrastructure.observability.metrics import weight_update_counter

router = APIRouter()


@router.get("/weights", response_model=WeightTableSchema)
def get_weights(weights: WeightTable = Depends(get_weight_table)):
    """
    Current weight table snapshot.

    Creates the stored document with default values on first read.
    """
    return WeightTableSchema.from_domain(weights)


@router.put("/admin/weights", response_model=WeightTableSchema)
def update_weights(
    update: WeightTableUpdate,
    request: Request,
    admin: str = Depends(require_admin),
    app_id: str = Depends(get_app_id),
    db: Session = Depends(get_db),
):
    """
    Merge an admin update into the stored weight table.

    Weight maps are merged label by label; omitted fields are unchanged.
    Requires HTTP Basic admin credentials.
    """
    request_id = get_request_id(request)

    try:
        table = WeightConfigRepository(db).save(app_id, update.to_document_update())
        db.commit()
    except WeightTableFormatError as e:
        db.rollback()
        weight_update_counter.labels(outcome="rejected").inc()
        logging.warning(f"Rejected weight update: {e}", extra={"request_id": request_id, "admin": admin})
        raise HTTPException(status_code=422, detail=str(e))
    except SQLAlchemyError as e:
        db.rollback()
        weight_update_counter.labels(outcome="failed").inc()
        logging.error(f"Weight store error: {e}", extra={"request_id": request_id, "admin": admin})
        raise HTTPException(status_code=503, detail="Weight store unavailable")

    weight_update_counter.labels(outcome="saved").inc()
    logging.info("Weights updated", extra={"request_id": request_id, "admin": admin, "app_id": app_id})
    return WeightTableSchema.from_domain(table)
