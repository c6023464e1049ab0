# models/credit_rows.py

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, func

from credit_pricing.db.base import Base


class CreditRow(Base):
    __tablename__ = "credit_rows"

    id = Column(Integer, primary_key=True, index=True)  # insertion order
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)
    credit_score = Column(Float, nullable=True)
    credit_lines = Column(Float, nullable=True)
    masked_phone_number = Column(String, nullable=True)
    extra = Column(JSON, nullable=True)  # unmapped CSV columns
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "creditScore": self.credit_score,
            "creditLines": self.credit_lines,
            "maskedPhoneNumber": self.masked_phone_number,
            "extra": dict(self.extra or {}),
        }
