"""Common utility helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> float:
    return perf_counter() * 1000.0


def elapsed_ms(start_ms: float) -> int:
    return int(perf_counter() * 1000.0 - start_ms)


def clip_text(text: str, max_chars: int = 180) -> str:
    cleaned = " ".join(str(text or "").split())
    if len(cleaned) <= max_chars:
        return cleaned
    return cleaned[:max_chars].rstrip() + "..."


_RISK_ORDER = {"green": 0, "yellow": 1, "red": 2}


def risk_rank(risk: str) -> int:
    return _RISK_ORDER[risk]
