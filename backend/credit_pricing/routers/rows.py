# routers/rows.py

import logging
import os
import shutil
import tempfile
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from sqlalchemy.orm import Session

from credit_pricing.db.deps import get_db
from credit_pricing.models.schemas import PageResponse, PricingRequest, UploadResponse
from credit_pricing.services.errors import CreditPricingError
from credit_pricing.services.ingestion_service import ingest_file
from credit_pricing.services.pagination_service import get_page
from credit_pricing.services.pricing_service import PricingCoefficients, calculate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rows"])


def _http_error(exc: CreditPricingError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def _spool_upload(file: UploadFile, upload_dir: str) -> Path:
    Path(upload_dir).mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, suffix=".csv", delete=False) as tmp:
        shutil.copyfileobj(file.file, tmp)
    return Path(tmp.name)


def _remove_upload(path: Path) -> None:
    try:
        os.remove(path)
    except OSError:
        logger.warning("Failed to remove upload artifact %s", path, exc_info=True)


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    path = _spool_upload(file, request.app.state.upload_dir)
    try:
        result = ingest_file(db, path)
    except CreditPricingError as exc:
        raise _http_error(exc) from exc
    finally:
        _remove_upload(path)

    logger.info("UPLOAD: file=%s rows=%s", file.filename, result["storedCount"])
    return {
        "storedCount": result["storedCount"],
        "message": "File uploaded successfully!",
    }


@router.get("/data", response_model=PageResponse)
def list_rows(
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
):
    try:
        return get_page(db, page=page, limit=limit)
    except CreditPricingError as exc:
        raise _http_error(exc) from exc


@router.post("/calculate")
def calculate_prices(payload: PricingRequest, db: Session = Depends(get_db)):
    coefficients = PricingCoefficients(
        base_price=payload.basePrice,
        price_per_credit_line=payload.pricePerCreditLine,
        price_per_credit_score_point=payload.pricePerCreditScorePoint,
    )
    try:
        return calculate(db, coefficients, strict=payload.strict)
    except CreditPricingError as exc:
        raise _http_error(exc) from exc
