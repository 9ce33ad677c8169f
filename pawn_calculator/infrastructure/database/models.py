"""SQLAlchemy ORM models for the weight configuration store"""

from sqlalchemy import Column, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class WeightConfig(Base):
    """Rate weight document, one per application id"""

    __tablename__ = "weight_config"

    app_id = Column(Text, primary_key=True)
    document = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
