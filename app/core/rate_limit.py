"""
Simple in-memory rate limiter for scoring and generation endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict, List
from fastapi import Request, HTTPException, status

from app.core import config

logger = logging.getLogger(__name__)

# {ip: [timestamps]}
rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP in the proxy chain is the client
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def prune_expired(cutoff: float) -> None:
    """Drop clients whose newest request is older than the cutoff."""
    stale = [ip for ip, timestamps in rate_limit_store.items() if not timestamps or timestamps[-1] <= cutoff]
    for ip in stale:
        del rate_limit_store[ip]


def check_rate_limit(
    request: Request,
    max_requests: int = None,
    window_seconds: int = None,
) -> None:
    """
    Check if client has exceeded rate limit.

    Args:
        request: FastAPI request object
        max_requests: Maximum number of requests allowed (defaults to config)
        window_seconds: Time window in seconds (defaults to config)

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    max_requests = max_requests or config.RATE_LIMIT_MAX_REQUESTS
    window_seconds = window_seconds or config.RATE_LIMIT_WINDOW_SECONDS

    ip = get_client_ip(request)
    now = time.time()

    cutoff = now - window_seconds
    prune_expired(cutoff)
    rate_limit_store[ip] = [
        timestamp for timestamp in rate_limit_store[ip]
        if timestamp > cutoff
    ]

    request_count = len(rate_limit_store[ip])

    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for IP: {ip} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    rate_limit_store[ip].append(now)

    logger.debug(f"Rate limit check passed for IP: {ip} ({request_count + 1}/{max_requests})")


def reset_rate_limits() -> None:
    """Clear all tracked requests."""
    rate_limit_store.clear()
