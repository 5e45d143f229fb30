"""
Schemas Module
==============

Pydantic models for the station snapshot and the API envelope.
"""

from plantstation.schemas.common import ErrorDetail, ErrorResponse, SuccessResponse
from plantstation.schemas.telemetry import MeasurementData, StationSnapshot, WateringTimeData

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "MeasurementData",
    "StationSnapshot",
    "SuccessResponse",
    "WateringTimeData",
]
