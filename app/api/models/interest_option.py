from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint

from app.db.base_class import Base


class InterestOption(Base):
    __tablename__ = "interest_options"
    __table_args__ = (
        UniqueConstraint("user_id", "value", name="uq_interest_options_user_value"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    label = Column(String, nullable=False)
    value = Column(String, nullable=False)
    redirect_url = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
