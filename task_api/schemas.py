"""API request/response schemas for the task tracker."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .models.task import TaskStatus


# Task-related schemas
class TaskResponse(BaseModel):
    """Schema for task API responses."""
    id: str = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    status: TaskStatus = Field(..., description="Task status")
    created_at: datetime = Field(..., alias="createdAt", description="Task creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Task last update timestamp")

    class Config:
        """Pydantic configuration."""
        from_attributes = True
        populate_by_name = True


class TaskStatsResponse(BaseModel):
    """Schema for task statistics responses."""
    total: int = Field(..., description="Total number of tasks")
    byStatus: Dict[str, int] = Field(..., description="Task counts keyed by status")


class TaskDeleteResponse(BaseModel):
    """Schema for task deletion responses."""
    message: str = Field(default="Task deleted successfully", description="Confirmation message")
    id: str = Field(..., description="Identifier of the deleted task")


# Error schema
class ErrorResponse(BaseModel):
    """Schema for error responses."""
    error: str = Field(..., description="Short error label")
    message: str = Field(..., description="Human readable error message")
    status: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(..., description="Time the error was produced")
    details: Optional[List[str]] = Field(None, description="Failed validation rules")


# Health check schema
class HealthResponse(BaseModel):
    """Schema for health check responses."""
    status: str = Field(default="healthy", description="Service health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    uptime: float = Field(..., description="Seconds since the application started")
