"""Write the ticker document consumed by the widget."""

import json
import logging
import os
from pathlib import Path

from commodity_ticker.models import DisplayItem, OutputDocument


logger = logging.getLogger(__name__)

# Placeholder values (EUR/t) shown when live data is unavailable
FALLBACK_VALUES: tuple[tuple[str, int], ...] = (
    ("🍫 Kakao", 4200),
    ("🍚 Zucker", 680),
    ("🌾 Weizen", 255),
    ("🌽 Mais", 205),
    ("🍚 Reis", 520),
)


def fallback_document(reason: str = "Fallback") -> OutputDocument:
    """Fixed placeholder document, annotated with ``reason``."""
    items = [
        DisplayItem(text=label, value=value, extra=f"EUR/t • {reason}")
        for label, value in FALLBACK_VALUES
    ]
    items.append(DisplayItem(text=f"Quelle: IMF über FRED ({reason})"))
    return OutputDocument(items=tuple(items))


def render(document: OutputDocument) -> str:
    """Serialize a document: 2-space indent, trailing newline."""
    return json.dumps(document.to_dict(), ensure_ascii=False, indent=2) + "\n"


def export_ticker(document: OutputDocument, output_path: Path | str) -> Path:
    """
    Overwrite ``output_path`` with the serialized document.

    The content goes to a temporary sibling first and is moved into place,
    so readers see either the old or the new file.

    Raises:
        ValueError: If the document has no items
    """
    if not document.items:
        raise ValueError("Refusing to write an empty ticker document")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    tmp_path.write_text(render(document), encoding="utf-8", newline="\n")
    os.replace(tmp_path, output_path)

    logger.info(f"Wrote {output_path} ({len(document.items)} items)")
    return output_path
