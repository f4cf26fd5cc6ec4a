"""
Alert generation from the latest reading and, optionally, the one before it.

Rules fire independently and cumulatively. When a reading with at least one
measurement trips no rule, a single "All Vitals Normal" achievement alert is
produced instead. Callers own ordering (see ``sort_alerts``) and
acknowledgement.
"""

import uuid
from datetime import UTC, datetime

import structlog

from vitalcore.domain.errors import require_snapshot
from vitalcore.domain.models import Alert, AlertKind, AlertSeverity, VitalsSnapshot

logger = structlog.get_logger(__name__)

HIGH_HEART_RATE_BPM = 120
LOW_HEART_RATE_BPM = 50
LOW_OXYGEN_PERCENT = 95
ELEVATED_TEMPERATURE_C = 37.5
HIGH_GLUCOSE_MG_DL = 140
LOW_GLUCOSE_MG_DL = 70
RAPID_HEART_RATE_CHANGE_BPM = 20


def _alert(
    now: datetime,
    kind: AlertKind,
    severity: AlertSeverity,
    title: str,
    message: str,
    action_label: str | None = None,
    **data: float,
) -> Alert:
    return Alert(
        id=str(uuid.uuid4()),
        timestamp=now,
        kind=kind,
        severity=severity,
        title=title,
        message=message,
        action_label=action_label,
        data=data,
    )


def _threshold_alerts(latest: VitalsSnapshot, now: datetime) -> list[Alert]:
    alerts: list[Alert] = []

    heart_rate = latest.heart_rate
    if heart_rate is not None:
        if heart_rate > HIGH_HEART_RATE_BPM:
            alerts.append(
                _alert(
                    now,
                    AlertKind.VITAL_THRESHOLD,
                    AlertSeverity.WARNING,
                    "High Heart Rate",
                    f"Your heart rate is {heart_rate:.0f} bpm, above "
                    f"{HIGH_HEART_RATE_BPM} bpm. Rest and keep monitoring.",
                    "View Details",
                    heart_rate=heart_rate,
                )
            )
        elif heart_rate < LOW_HEART_RATE_BPM:
            alerts.append(
                _alert(
                    now,
                    AlertKind.VITAL_THRESHOLD,
                    AlertSeverity.WARNING,
                    "Low Heart Rate",
                    f"Your heart rate is {heart_rate:.0f} bpm, below "
                    f"{LOW_HEART_RATE_BPM} bpm. Sit down if you feel dizzy.",
                    "View Details",
                    heart_rate=heart_rate,
                )
            )

    spo2 = latest.oxygen_saturation
    if spo2 is not None and spo2 < LOW_OXYGEN_PERCENT:
        alerts.append(
            _alert(
                now,
                AlertKind.VITAL_THRESHOLD,
                AlertSeverity.CRITICAL,
                "Low Oxygen Saturation",
                f"Your oxygen saturation is {spo2:.0f}%, below {LOW_OXYGEN_PERCENT}%. "
                "Contact your healthcare provider.",
                "Call Doctor",
                oxygen_saturation=spo2,
            )
        )

    temperature = latest.temperature
    if temperature is not None and temperature > ELEVATED_TEMPERATURE_C:
        alerts.append(
            _alert(
                now,
                AlertKind.VITAL_THRESHOLD,
                AlertSeverity.WARNING,
                "Elevated Temperature",
                f"Your temperature is {temperature:.1f}°C, above "
                f"{ELEVATED_TEMPERATURE_C}°C. Stay hydrated and recheck soon.",
                "View Details",
                temperature=temperature,
            )
        )

    glucose = latest.glucose
    if glucose is not None:
        if glucose > HIGH_GLUCOSE_MG_DL:
            alerts.append(
                _alert(
                    now,
                    AlertKind.VITAL_THRESHOLD,
                    AlertSeverity.WARNING,
                    "High Glucose",
                    f"Your glucose is {glucose:.0f} mg/dL, above "
                    f"{HIGH_GLUCOSE_MG_DL} mg/dL.",
                    "View Details",
                    glucose=glucose,
                )
            )
        elif glucose < LOW_GLUCOSE_MG_DL:
            alerts.append(
                _alert(
                    now,
                    AlertKind.VITAL_THRESHOLD,
                    AlertSeverity.WARNING,
                    "Low Glucose",
                    f"Your glucose is {glucose:.0f} mg/dL, below "
                    f"{LOW_GLUCOSE_MG_DL} mg/dL. Have a small snack.",
                    "View Details",
                    glucose=glucose,
                )
            )

    return alerts


def _trend_alerts(
    latest: VitalsSnapshot, previous: VitalsSnapshot, now: datetime
) -> list[Alert]:
    # Only heart rate has a trend rule
    if latest.heart_rate is None or previous.heart_rate is None:
        return []

    delta = latest.heart_rate - previous.heart_rate
    if abs(delta) <= RAPID_HEART_RATE_CHANGE_BPM:
        return []

    direction = "increased" if delta > 0 else "decreased"
    return [
        _alert(
            now,
            AlertKind.TREND_CHANGE,
            AlertSeverity.INFO,
            "Rapid Heart Rate Change",
            f"Your heart rate {direction} by {abs(delta):.0f} bpm since the last reading "
            f"({previous.heart_rate:.0f} to {latest.heart_rate:.0f} bpm).",
            heart_rate=latest.heart_rate,
            previous_heart_rate=previous.heart_rate,
        )
    ]


def generate_alerts(
    latest: VitalsSnapshot | None,
    previous: VitalsSnapshot | None = None,
    *,
    now: datetime | None = None,
) -> tuple[Alert, ...]:
    """
    Derive alerts from ``latest``, comparing against ``previous`` when given.

    Raises:
        InvalidInputError: ``latest`` is missing or not a snapshot.
    """
    latest = require_snapshot(latest, "latest")
    if previous is not None:
        previous = require_snapshot(previous, "previous")
    now = now or datetime.now(UTC)

    # Nothing measured means nothing to judge, not "all normal"
    if not latest.has_measurements:
        logger.debug("alerts_skipped_no_measurements", snapshot_id=latest.id)
        return ()

    alerts = _threshold_alerts(latest, now)
    if previous is not None:
        alerts.extend(_trend_alerts(latest, previous, now))

    if not alerts:
        alerts.append(
            _alert(
                now,
                AlertKind.ACHIEVEMENT,
                AlertSeverity.INFO,
                "All Vitals Normal",
                "Your vital signs are all within normal ranges.",
            )
        )

    logger.info(
        "alerts_generated",
        snapshot_id=latest.id,
        count=len(alerts),
        titles=[a.title for a in alerts],
    )
    return tuple(alerts)


def vitals_of_concern(snapshot: VitalsSnapshot) -> tuple[str, ...]:
    """Plain-language list of readings worth raising with a care provider."""
    concerns: list[str] = []
    if snapshot.heart_rate is not None and snapshot.heart_rate > 100:
        concerns.append("elevated heart rate")
    if snapshot.glucose is not None and snapshot.glucose > 140:
        concerns.append("high glucose level")
    if snapshot.oxygen_saturation is not None and snapshot.oxygen_saturation < 95:
        concerns.append("low oxygen saturation")
    return tuple(concerns)


def concern_message(snapshot: VitalsSnapshot) -> str | None:
    concerns = vitals_of_concern(snapshot)
    if not concerns:
        return None
    return f"Detected {', '.join(concerns)}. Consider contacting your healthcare provider."
