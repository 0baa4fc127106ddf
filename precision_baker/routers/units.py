"""
Router for measurement conversion.
"""

import logging

from fastapi import APIRouter, HTTPException

from ..schemas import MeasurementConvertRequest, MeasurementConvertResponse
from ..services.unit_conversion import ConversionError, convert_quantity

router = APIRouter()
logger = logging.getLogger("precision_baker.units")


@router.post("/convert-measurement", response_model=MeasurementConvertResponse)
def convert_measurement(req: MeasurementConvertRequest):
    """
    Convert a quantity from one unit to another, optionally for a named
    ingredient (density-aware for volume <-> mass).
    """
    try:
        outcome = convert_quantity(
            req.quantity,
            req.from_unit,
            req.to_unit,
            ingredient=req.ingredient,
        )
    except ConversionError as e:
        logger.info("Rejected conversion %s %s -> %s: %s", req.quantity, req.from_unit, req.to_unit, e)
        raise HTTPException(status_code=400, detail=str(e))

    return MeasurementConvertResponse(
        result=outcome.result,
        success=True,
        converted=float(outcome.converted),
        density=outcome.density,
    )
