"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from payment_optimizer.config import Settings, settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide engine configuration"""
    return settings
