
"""
audit.py
Re-checks a recorded game after the fact: every published tag must match the revealed secret and key,
disclosure must follow commit -> contribution -> reveal order, and every fair value must be the modular
combination of both parties' numbers.
Related modules:
- commitment.py: Tag verification.
- protocol.py: combine().
- persistence/serializer.py: Transcripts read back from disk carry hex strings instead of bytes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from . import commitment
from .protocol import combine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditFinding:
    round: str
    problem: str


def _as_bytes(value) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError(f"expected hex string, got {type(value).__name__}")
    return bytes.fromhex(value)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _normalize(event: Any) -> Tuple[str, Dict]:
    # engine event dicts carry 'type'; GameEvent carries event_type/payload
    if isinstance(event, dict):
        return event["type"], {k: v for k, v in event.items() if k != "type"}
    return event.event_type, event.payload


def audit_events(events: Iterable[Any]) -> List[AuditFinding]:
    """
    Audit a game's events (engine dicts or GameEvent objects, in emission order).
    Fields that should be integers but are not are reported as findings.
    Returns:
        list[AuditFinding]: Empty if the transcript is consistent.
    """
    findings: List[AuditFinding] = []
    rounds: Dict[str, Dict[str, Any]] = {}
    for event in events:
        event_type, payload = _normalize(event)
        name = payload.get("round")
        if event_type == "Committed":
            if name in rounds:
                # the first published tag stays binding
                findings.append(AuditFinding(name, "round committed more than once"))
                continue
            if not _is_int(payload["range"]) or payload["range"] < 1:
                findings.append(AuditFinding(name, f"malformed range {payload['range']!r}"))
                continue
            rounds[name] = {"tag": _as_bytes(payload["tag"]), "range": payload["range"], "stage": "committed"}
        elif event_type == "Contributed":
            r = rounds.get(name)
            if r is None or r["stage"] != "committed":
                findings.append(AuditFinding(name, "contribution without a prior commitment"))
                continue
            if not _is_int(payload["contribution"]):
                findings.append(AuditFinding(name, f"malformed contribution {payload['contribution']!r}"))
                continue
            r["contribution"] = payload["contribution"]
            r["stage"] = "contributed"
        elif event_type == "Revealed":
            r = rounds.get(name)
            if r is None:
                findings.append(AuditFinding(name, "revealed without a commitment"))
                continue
            if r["stage"] != "contributed":
                findings.append(AuditFinding(name, "revealed before the contribution was accepted"))
            r["stage"] = "revealed"
            secret = payload["secret_number"]
            if not _is_int(secret):
                findings.append(AuditFinding(name, f"malformed secret number {secret!r}"))
                continue
            r["secret_number"] = secret
            if not 0 <= secret < r["range"]:
                findings.append(AuditFinding(name, f"secret number {secret} outside [0, {r['range']})"))
            if not commitment.verify(secret, _as_bytes(payload["key"]), r["tag"]):
                findings.append(AuditFinding(name, "tag does not match revealed secret number and key"))
        elif event_type == "FairValue":
            r = rounds.get(name)
            if r is None or r["stage"] != "revealed" or "contribution" not in r or "secret_number" not in r:
                findings.append(AuditFinding(name, "fair value reported before reveal"))
                continue
            expected = combine(r["secret_number"], r["contribution"], r["range"])
            if payload["value"] != expected:
                findings.append(AuditFinding(name, f"fair value {payload['value']} != {expected}"))
        elif event_type == "FirstMove":
            r = rounds.get("first_move")
            if r is None or r["stage"] != "revealed" or "contribution" not in r or "secret_number" not in r:
                findings.append(AuditFinding("first_move", "first move decided before reveal"))
                continue
            expected = "human" if r["contribution"] == r["secret_number"] else "house"
            if payload["side"] != expected:
                findings.append(AuditFinding("first_move", f"first move given to {payload['side']}, expected {expected}"))
    for name, r in rounds.items():
        if r["stage"] != "revealed":
            findings.append(AuditFinding(name, "commitment never revealed"))
    for finding in findings:
        logger.warning("audit: %s: %s", finding.round, finding.problem)
    return findings
