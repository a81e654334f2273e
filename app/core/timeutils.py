# app/core/timeutils.py
"""Normalização de horários para o formato canônico ``HH:MM:SS``.

Tudo aqui é função pura: nada de estado compartilhado entre requisições.
"""
from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo

from app.core.config import settings

TimeLike = Union[str, dt.datetime, dt.time]

CANONICAL = "%H:%M:%S"
_CLOCK_FORMATS = ("%H:%M:%S", "%H:%M")


def _local_zone(tz: Optional[str]) -> ZoneInfo:
    return ZoneInfo(tz or settings.TIMEZONE)


def parse_time(value: TimeLike, tz: Optional[str] = None) -> dt.time:
    """Converte ``value`` em ``datetime.time`` ingênuo, sem microssegundos.

    Aceita ``HH:MM:SS``, ``HH:MM``, timestamps ISO-8601 (com ou sem offset,
    ``Z`` incluso), ``datetime`` e ``time``. Timestamps com fuso são levados
    para ``tz`` (padrão: ``settings.TIMEZONE``) antes de extrair o horário.
    """
    if isinstance(value, dt.datetime):
        moment = value
    elif isinstance(value, dt.time):
        return value.replace(microsecond=0, tzinfo=None)
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("Empty time value")
        for fmt in _CLOCK_FORMATS:
            try:
                return dt.datetime.strptime(raw, fmt).time()
            except ValueError:
                continue
        try:
            moment = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid time value: {value!r}") from None
    else:
        raise ValueError(f"Unsupported time value: {value!r}")

    if moment.tzinfo is not None:
        moment = moment.astimezone(_local_zone(tz))
    return moment.time().replace(microsecond=0)


def normalize_time(value: TimeLike, tz: Optional[str] = None) -> str:
    return parse_time(value, tz).strftime(CANONICAL)


def average_time(values: Iterable[Optional[dt.time]]) -> Optional[str]:
    """Média dos horários em ``HH:MM:SS``; ``None`` se não houver nenhum."""
    seconds = [t.hour * 3600 + t.minute * 60 + t.second for t in values if t is not None]
    if not seconds:
        return None
    mean = round(sum(seconds) / len(seconds))
    return f"{mean // 3600:02d}:{(mean % 3600) // 60:02d}:{mean % 60:02d}"
