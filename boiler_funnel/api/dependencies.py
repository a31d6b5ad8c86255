"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import HTTPException, Request
from boiler_funnel.infrastructure.clients.payments import PaymentGatewayClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_payment_client() -> PaymentGatewayClient:
    """Provide payment gateway client instance"""
    return PaymentGatewayClient()


def parse_object_id(raw_id: str, resource: str) -> uuid.UUID:
    """Parse a path/body identifier, rejecting malformed IDs with 400"""
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {resource} ID format")
