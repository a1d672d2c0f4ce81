"""Result models for API responses."""

from app.models.results.api import ApiResponse

__all__ = ["ApiResponse"]
