"""
Standardized API response models.
"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    push_connected: Optional[bool] = Field(
        None, description="Whether the push client is initialized"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Check timestamp"
    )
