from pydantic import BaseModel, Field
from typing import Literal, Optional

class EnvironmentalImpactOut(BaseModel):
    carbonFootprint: str
    recyclability: str
    biodegradability: str

class AnalysisPayload(BaseModel):
    """Service contract: the ScanResult fields the server owns.
    id / image / timestamp are added client-side."""
    objectName: str = Field(min_length=1)
    classification: Literal["reusable", "recyclable", "non-recyclable"]
    confidence: int = Field(ge=0, le=100)
    materials: list[str]
    environmentalImpact: EnvironmentalImpactOut
    disposalTips: list[str]
    reuseSuggestions: list[str]
    educationalFacts: list[str]

class ErrorPayload(BaseModel):
    error: str
    details: Optional[str] = None

class HealthResponse(BaseModel):
    ok: bool
    vision_adapter: str
    provider_key_set: bool

class StatusResponse(BaseModel):
    requests: int
    last_object: Optional[str] = None
    last_error: Optional[str] = None
    logs: list[str]
