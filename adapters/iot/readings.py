"""
IoT sensor document adapter.

Sensor devices write flat documents such as::

    {"heartRate": 82, "spo2": 97, "temperature": 36.7, "timestamp": 1718000000}

This module maps them onto ``VitalsSnapshot`` and back. Field names differ
from the domain model (``spo2`` vs ``oxygen_saturation``) and timestamps
arrive as Unix seconds, numeric strings or datetimes depending on firmware.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog

from vitalcore.config import get_config
from vitalcore.domain.models import VitalsSnapshot
from vitalcore.services.result import Result
from vitalcore.services.scoring import score

logger = structlog.get_logger(__name__)

# sensor document key -> snapshot field
IOT_FIELD_MAP = {
    "heartRate": "heart_rate",
    "spo2": "oxygen_saturation",
    "temperature": "temperature",
    "glucose": "glucose",
    "systolicBP": "systolic_bp",
    "diastolicBP": "diastolic_bp",
}


def _to_float(key: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"{key} must be numeric, got {type(value).__name__}")
    return float(value)


def convert_timestamp(raw: Any, now: datetime | None = None) -> datetime:
    """
    Normalise a sensor timestamp to an aware UTC datetime.

    Integers, floats and numeric strings are Unix seconds. Anything that
    cannot be interpreted falls back to ``now``.
    """
    fallback = now or datetime.now(UTC)

    if isinstance(raw, datetime):
        return raw if raw.tzinfo is not None else raw.replace(tzinfo=UTC)
    if isinstance(raw, bool) or not isinstance(raw, int | float | str):
        logger.warning("iot_timestamp_unknown_format", timestamp_type=type(raw).__name__)
        return fallback

    try:
        seconds = int(raw) if isinstance(raw, str) else raw
        return datetime.fromtimestamp(seconds, UTC)
    except (ValueError, OverflowError, OSError):
        logger.warning("iot_timestamp_unparsed", timestamp=raw)
        return fallback


def parse_iot_reading(
    data: Mapping[str, Any],
    document_id: str,
    *,
    source_tag: str | None = None,
    now: datetime | None = None,
) -> Result[VitalsSnapshot, ValueError]:
    """
    Convert one sensor document into a snapshot.

    Returns:
        Result containing the snapshot, or the ValueError describing the first
        malformed field.
    """
    try:
        metrics = {field: _to_float(key, data.get(key)) for key, field in IOT_FIELD_MAP.items()}
    except ValueError as e:
        logger.warning("iot_reading_rejected", document_id=document_id, error=str(e))
        return Result.err(e)

    snapshot = VitalsSnapshot(
        id=document_id,
        timestamp=convert_timestamp(data.get("timestamp"), now),
        source=source_tag or get_config().iot.source_tag,
        is_synced=True,
        **metrics,
    )
    return Result.ok(snapshot)


def snapshot_from_iot_reading(
    data: Mapping[str, Any], document_id: str, **kwargs: Any
) -> VitalsSnapshot:
    """Like ``parse_iot_reading`` but raises ValueError on malformed documents."""
    return parse_iot_reading(data, document_id, **kwargs).unwrap()


def parse_iot_readings(
    documents: Iterable[tuple[str, Mapping[str, Any]]], **kwargs: Any
) -> list[VitalsSnapshot]:
    """
    Convert a batch of ``(document_id, data)`` pairs, oldest first.

    Malformed documents are skipped; sensors occasionally emit partial junk
    and one bad row should not hide the rest of the history.
    """
    snapshots: list[VitalsSnapshot] = []
    skipped = 0
    for document_id, data in documents:
        result = parse_iot_reading(data, document_id, **kwargs)
        if result.is_ok():
            snapshots.append(result.unwrap())
        else:
            skipped += 1

    snapshots.sort(key=lambda s: s.timestamp)
    logger.info("iot_readings_parsed", parsed=len(snapshots), skipped=skipped)
    return snapshots


def to_document(snapshot: VitalsSnapshot) -> dict[str, Any]:
    """Serialise a snapshot with its derived score for a document store."""
    health_score = score(snapshot)
    return {
        "id": snapshot.id,
        "timestamp": snapshot.timestamp.isoformat(),
        "heartRate": snapshot.heart_rate,
        "oxygenSaturation": snapshot.oxygen_saturation,
        "temperature": snapshot.temperature,
        "systolicBP": snapshot.systolic_bp,
        "diastolicBP": snapshot.diastolic_bp,
        "glucose": snapshot.glucose,
        "source": snapshot.source,
        "isSynced": snapshot.is_synced,
        "healthScore": health_score.value,
        "status": health_score.tier.value,
    }
