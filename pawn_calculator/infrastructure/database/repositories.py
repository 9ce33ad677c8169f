"""Data access layer for the weight configuration document"""

import logging
from typing import Any, Dict, Mapping, Optional
from sqlalchemy.orm import Session
from pawn_calculator.infrastructure.database.models import WeightConfig
from pawn_calculator.domain.exceptions import WeightTableFormatError
from pawn_calculator.domain.models import WeightTable
from pawn_calculator.domain.weights import (
    DEFAULT_WEIGHTS_DOCUMENT,
    default_weight_table,
    merge_weight_document,
    weight_table_from_document,
    weight_table_to_document,
)

logger = logging.getLogger(__name__)


class WeightConfigRepository:
    """Repository for rate weight documents"""

    def __init__(self, db: Session):
        self.db = db

    def get_document(self, app_id: str) -> Optional[Dict[str, Any]]:
        """Raw stored document for an app id, or None if there is none"""
        row = self.db.get(WeightConfig, app_id)
        return dict(row.document) if row is not None else None

    def load_or_create(self, app_id: str) -> WeightTable:
        """
        Load the weight table snapshot for an app id.

        A missing document is created with the default weights. A malformed
        document is left as stored and the defaults are returned instead.
        """
        row = self.db.get(WeightConfig, app_id)
        if row is None:
            logger.info("No weights document found, creating one with default values", extra={"app_id": app_id})
            self.db.add(WeightConfig(app_id=app_id, document=dict(DEFAULT_WEIGHTS_DOCUMENT)))
            self.db.flush()
            return default_weight_table()

        try:
            return weight_table_from_document(row.document)
        except WeightTableFormatError as e:
            logger.warning(f"Weights document is malformed, using default weights: {e}", extra={"app_id": app_id})
            return default_weight_table()

    def save(self, app_id: str, update: Mapping[str, Any]) -> WeightTable:
        """
        Merge an update into the stored document and persist it.

        Weight maps are merged label by label. The merged document must still
        parse; otherwise nothing is written.

        Raises:
            WeightTableFormatError: If the merged document is not a valid weight table
        """
        row = self.db.get(WeightConfig, app_id)
        current = row.document if row is not None else DEFAULT_WEIGHTS_DOCUMENT
        merged = merge_weight_document(current, update)
        table = weight_table_from_document(merged)

        # Store the normalised shape so later reads see plain floats
        document = weight_table_to_document(table)
        if row is None:
            self.db.add(WeightConfig(app_id=app_id, document=document))
        else:
            row.document = document
        self.db.flush()
        return table
