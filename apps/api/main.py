from __future__ import annotations

from datetime import date
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from mixlog.core.config import settings
from mixlog.core.logging import configure_logging
from mixlog.db.session import session_scope
from mixlog.models.enums import PALETTE, MixType, vocabulary_for
from mixlog.reports.export_csv import csv_filename, mixes_to_csv
from mixlog.reports.summary_xlsx import summary_to_xlsx
from mixlog.schemas.common import ErrorResponse, Ok, ValidationErrorResponse
from mixlog.schemas.mix import MixInput, MixPage, MixRecordOut, SummaryResponse, Vocabulary
from mixlog.services.aggregation import ProductSummary, summarize
from mixlog.services.form_state import DraftResponse, MixDraft, SwitchMixTypeRequest, draft_response, switch_mix_type
from mixlog.services.store import MixStore, RecordNotFound, StoreError
from mixlog.services.validation import ValidationResult, normalize, validate
from apps.api.security import current_owner, require_api_auth

configure_logging(settings.log_level)
log = structlog.get_logger(__name__)

app = FastAPI(title=settings.app_name)
protected = APIRouter(dependencies=[Depends(require_api_auth)])

@app.exception_handler(RecordNotFound)
async def record_not_found(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=ErrorResponse(error=str(exc)).model_dump())

@app.exception_handler(StoreError)
async def store_error(request: Request, exc: StoreError):
    log.warning("store_error_response", path=request.url.path, exc=str(exc))
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=ErrorResponse(error=str(exc)).model_dump())

@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    # malformed payloads use the same shape as rule violations
    result = ValidationResult()
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
        result.add(".".join(loc) or "body", err.get("msg", "Invalid value"))
    log.info("request_validation_failed", path=request.url.path, fields=sorted(result.errors))
    return JSONResponse(status_code=422, content=ValidationErrorResponse(errors=result.errors).model_dump())

def _validation_failed(result: ValidationResult, owner: str) -> JSONResponse:
    log.info("mix_validation_failed", owner=owner, fields=sorted(result.errors))
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(errors=result.errors).model_dump(),
    )

def _load_summary(owner: str, mix_type: MixType | None) -> ProductSummary:
    with session_scope() as session:
        page = MixStore(session, owner).list(page=1, page_size=settings.summary_page_size, mix_type=mix_type)
    return summarize(page.records)

@app.get("/health", response_model=Ok)
def health() -> Ok:
    return Ok(ok=True)

@app.get("/vocab", response_model=Vocabulary)
def vocab() -> Vocabulary:
    return Vocabulary(
        mix_types=[m.value for m in MixType],
        colors=[c.value for c in PALETTE],
        products={m.value: list(vocabulary_for(m)) for m in MixType},
    )

@app.get("/forms/mix/default", response_model=DraftResponse)
def mix_form_default(mix_type: MixType = Query(MixType.Interlock)):
    return draft_response(MixDraft.for_mix_type(mix_type))

@app.post("/forms/mix/switch", response_model=DraftResponse)
def mix_form_switch(req: SwitchMixTypeRequest):
    return draft_response(switch_mix_type(req.draft, req.mix_type))

@protected.get("/mixes", response_model=MixPage)
def list_mixes(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.page_size, ge=1, le=1000),
    mix_type: Optional[MixType] = Query(None),
    owner: str = Depends(current_owner),
):
    with session_scope() as session:
        return MixStore(session, owner).list(page=page, page_size=page_size, mix_type=mix_type)

@protected.post(
    "/mixes",
    response_model=MixRecordOut,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ValidationErrorResponse}},
)
def create_mix(payload: MixInput, owner: str = Depends(current_owner)):
    result = validate(payload)
    if not result.ok:
        return _validation_failed(result, owner)
    with session_scope() as session:
        return MixStore(session, owner).create(normalize(payload))

@protected.get("/mixes.csv")
def export_mixes_csv(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.page_size, ge=1, le=1000),
    mix_type: Optional[MixType] = Query(None),
    owner: str = Depends(current_owner),
):
    with session_scope() as session:
        records = MixStore(session, owner).list(page=page, page_size=page_size, mix_type=mix_type).records
    return Response(
        content=mixes_to_csv(records, tz=settings.tz),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(date.today())}"'},
    )

@protected.get("/mixes/{record_id}", response_model=MixRecordOut)
def get_mix(record_id: str, owner: str = Depends(current_owner)):
    with session_scope() as session:
        return MixStore(session, owner).get(record_id)

@protected.put("/mixes/{record_id}", response_model=MixRecordOut, responses={422: {"model": ValidationErrorResponse}})
def update_mix(record_id: str, payload: MixInput, owner: str = Depends(current_owner)):
    result = validate(payload)
    if not result.ok:
        return _validation_failed(result, owner)
    with session_scope() as session:
        return MixStore(session, owner).update(record_id, normalize(payload))

@protected.delete("/mixes/{record_id}", response_model=Ok)
def delete_mix(record_id: str, owner: str = Depends(current_owner)):
    with session_scope() as session:
        return Ok(ok=MixStore(session, owner).delete(record_id))

@protected.get("/summary", response_model=SummaryResponse)
def summary(mix_type: Optional[MixType] = Query(None), owner: str = Depends(current_owner)):
    s = _load_summary(owner, mix_type)
    return SummaryResponse(
        by_mix_type=s.by_mix_type,
        by_color=s.by_color,
        by_product_type=s.by_product_type,
        mix_type_totals=s.mix_type_totals,
        color_totals=s.color_totals,
        product_totals=s.product_totals,
        grand_total=s.grand_total,
        records_count=s.records_count,
    )

@protected.get("/summary.xlsx")
def summary_xlsx(mix_type: Optional[MixType] = Query(None), owner: str = Depends(current_owner)):
    data = summary_to_xlsx(_load_summary(owner, mix_type))
    filename = f"mix-summary-{date.today().isoformat()}.xlsx"
    return Response(
        content=data,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

app.include_router(protected)
