from sqlalchemy import Column, DateTime, JSON, String

from trichoscalp.database import Base
from trichoscalp.utils.timezone_utils import utc_now

# Evaluation workflow statuses
STATUS_PENDING = "pendente"
STATUS_ANALYZING = "analisando"
STATUS_COMPLETED = "concluida"


class Evaluation(Base):
    """One clinical visit of a client; holds the stored analysis once produced."""

    __tablename__ = "avaliacoes"
    __table_args__ = {"extend_existing": True}

    id = Column(String, primary_key=True)
    client_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    status = Column(String, default=STATUS_PENDING, nullable=False)
    analysis = Column(JSON(none_as_null=True), nullable=True)  # AnalysisResult as JSON
