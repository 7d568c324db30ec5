"""JSON export of a user's data for backup or migration to another store."""

from __future__ import annotations

import json
from pathlib import Path

from ..logging_config import get_logger
from . import records
from .profile import UserSnapshot

logger = get_logger("services.export_json")


def snapshot_to_document(snapshot: UserSnapshot) -> dict:
    """Return the export document; cards are ordered newest first."""

    cards = sorted(snapshot.cards, key=lambda c: c.date, reverse=True)
    return {
        "user": records.user_to_record(snapshot.user),
        "habits": [records.habit_to_record(h) for h in snapshot.habits],
        "dailyCards": [records.card_to_record(c) for c in cards],
        "thoughts": [records.thought_to_record(t) for t in snapshot.thoughts],
        "quotes": [records.quote_to_record(q) for q in snapshot.quotes],
        "mediaLinks": [records.media_link_to_record(m) for m in snapshot.media_links],
        "messages": [records.message_to_record(m) for m in snapshot.messages],
    }


def export_user_json(snapshot: UserSnapshot, output_path: Path) -> Path:
    """Write the snapshot to ``output_path`` and return the path written."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    document = snapshot_to_document(snapshot)
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(document, fh, indent=2, ensure_ascii=False)
    logger.info(
        "Exported user data",
        extra={"username": snapshot.user.username, "path": str(output_path), "cards": len(document["dailyCards"])},
    )
    return output_path


__all__ = ["export_user_json", "snapshot_to_document"]
