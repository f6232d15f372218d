"""
Calculator endpoints
"""

from fastapi import APIRouter, HTTPException, Depends

from ..capacity import estimate_capacity, recommend_minimum_tenure
from ..exceptions import InvalidInput
from ..logging_config import get_logger, log_action
from ..policy import SystemSettings
from ..repayment import compute_total_repayment
from ..schedule import generate_schedule, summarize_schedule
from .dependencies import get_default_settings, resolve_settings
from .schemas import QuoteRequest, CapacityRequest, ScheduleRequest, MinimumTenureRequest


router = APIRouter()
logger = get_logger("repayment_core.api")


@router.post("/quote")
async def quote_repayment(
    request: QuoteRequest,
    default_settings: SystemSettings = Depends(get_default_settings)
):
    """Total repayment and interest for a principal and tenure"""
    try:
        settings = resolve_settings(request.settings, default_settings)
        quote = compute_total_repayment(request.principal, request.tenure_months, settings)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    log_action(
        logger, "info", "Repayment quoted",
        action="quote", resource="calculator",
        details={"tenure_months": request.tenure_months, "regime": quote.regime.value}
    )
    
    return quote.to_dict()


@router.post("/capacity")
async def loan_capacity(
    request: CapacityRequest,
    default_settings: SystemSettings = Depends(get_default_settings)
):
    """Maximum principal a borrower can take on for a target tenure"""
    try:
        settings = resolve_settings(request.settings, default_settings)
        capacity = estimate_capacity(
            monthly_salary=request.monthly_salary,
            current_outstanding=request.current_outstanding,
            target_tenure=request.target_tenure,
            settings=settings
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    log_action(
        logger, "info", "Capacity estimated",
        action="capacity", resource="calculator",
        details={"target_tenure": request.target_tenure, "max_principal": capacity.max_principal}
    )
    
    return capacity.to_dict()


@router.post("/schedule")
async def repayment_schedule(
    request: ScheduleRequest,
    default_settings: SystemSettings = Depends(get_default_settings)
):
    """Month-by-month repayment schedule with its summary"""
    try:
        settings = resolve_settings(request.settings, default_settings)
        schedule = generate_schedule(
            principal=request.principal,
            tenure_months=request.tenure_months,
            start_date=request.start_date,
            settings=settings
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    summary = summarize_schedule(schedule)
    
    log_action(
        logger, "info", "Schedule generated",
        action="schedule", resource="calculator",
        details={"tenure_months": request.tenure_months, "start_date": request.start_date.isoformat()}
    )
    
    return {
        "schedule": [step.to_dict() for step in schedule],
        "summary": summary.to_dict()
    }


@router.post("/minimum-tenure")
async def minimum_tenure(
    request: MinimumTenureRequest,
    default_settings: SystemSettings = Depends(get_default_settings)
):
    """Shortest tenure whose installment fits the borrower's salary"""
    try:
        settings = resolve_settings(request.settings, default_settings)
        tenure = recommend_minimum_tenure(
            principal=request.principal,
            monthly_salary=request.monthly_salary,
            settings=settings,
            affordability_ratio=request.affordability_ratio
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return {"minimum_tenure": tenure}
