# testimonialhub/utils.py
from datetime import datetime, timezone

from flask import request


def utcnow() -> datetime:
    # naive UTC, matching what the DateTime columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() + "Z" if value else None


def client_ip() -> str:
    # ProxyFix in wsgi.py already resolves the trusted X-Forwarded-For hop
    return request.remote_addr or "unknown"


def client_user_agent(limit: int = 300) -> str:
    return (request.user_agent.string or "unknown")[:limit]
