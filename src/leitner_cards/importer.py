"""Import flashcards from JSON, YAML, CSV or tab-separated text files."""
import csv
import json
import logging
from pathlib import Path

from leitner_cards.deck import DuplicateCard, add_card

logger = logging.getLogger(__name__)


def _normalize(entry) -> dict | None:
    if not isinstance(entry, dict):
        return None
    tags = entry.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",") if t.strip()]
    return {
        "front": str(entry.get("front") or "").strip(),
        "back": str(entry.get("back") or "").strip(),
        "hint": str(entry.get("hint") or ""),
        "tags": tuple(tags),
    }


def read_cards(file_path: str) -> list[dict]:
    """Read card entries from a file, picking the parser by extension."""
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        data = json.loads(path.read_text())
        entries = data.get("cards", []) if isinstance(data, dict) else data
    elif suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(path.read_text()) or []
        entries = data.get("cards", []) if isinstance(data, dict) else data
    elif suffix == ".csv":
        with path.open(newline="") as f:
            entries = list(csv.DictReader(f))
    else:
        # front<TAB>back[<TAB>hint], one card per line
        entries = []
        for line in path.read_text().splitlines():
            parts = line.split("\t")
            if len(parts) < 2:
                continue
            entries.append({"front": parts[0], "back": parts[1], "hint": parts[2] if len(parts) > 2 else ""})
    cards = []
    for entry in entries:
        card = _normalize(entry)
        if card is None:
            logger.warning("Skipping entry that is not a card object in %s: %r", file_path, entry)
            continue
        cards.append(card)
    return cards


def import_cards(db_path: str, file_path: str) -> dict:
    """Add every card in a file to the deck, skipping duplicates and blank fronts."""
    added = skipped = 0
    for entry in read_cards(file_path):
        if not entry["front"] or not entry["back"]:
            logger.warning("Skipping card with empty front or back in %s", file_path)
            skipped += 1
            continue
        try:
            add_card(db_path, entry["front"], entry["back"], entry["hint"], entry["tags"])
        except DuplicateCard:
            logger.warning("Skipping duplicate card %r", entry["front"])
            skipped += 1
        else:
            added += 1
    return {"filename": Path(file_path).name, "added": added, "skipped": skipped}
