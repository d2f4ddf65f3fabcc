# This file defines response schemas for the root, health, readiness, and version endpoints.
# It exists to keep operational status contracts explicit for platform consumers.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RootResponse(BaseModel):
    data: str


class HealthResponse(BaseModel):
    request_id: str
    status: str
    environment: str
    service_name: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    request_id: str
    backend_connected: bool
    ready: bool
    backend: str
    timestamp: datetime


class VersionResponse(BaseModel):
    request_id: str
    project: str
    version: str
    timestamp: datetime
