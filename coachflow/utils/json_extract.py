from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def extract_json_object(reply: str) -> Optional[Dict[str, Any]]:
    """Decode the object spanning the first ``{`` and the last ``}`` in ``reply``.

    Prose around the JSON is tolerated. Returns ``None`` when nothing decodes
    to a JSON object.
    """
    if not reply:
        return None
    start = reply.find("{")
    end = reply.rfind("}")
    text = reply[start : end + 1] if start != -1 and end > start else reply
    try:
        parsed = json.loads(text)
    except ValueError as exc:
        logger.debug(f"Reply is not valid JSON: {exc}")
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed
