from typing import Any

from pydantic import BaseModel, Field


class PricingRequest(BaseModel):
    basePrice: float = 100
    pricePerCreditLine: float = 10
    pricePerCreditScorePoint: float = 0.5
    strict: bool | None = None


class UploadResponse(BaseModel):
    storedCount: int
    message: str


class PageResponse(BaseModel):
    data: list[dict[str, Any]] = Field(default_factory=list)
    totalPages: int
    page: int
    limit: int
    total: int
