"""Reduced session summary handed to the Oracle."""
from __future__ import annotations

import json
from typing import Any

from caravan.inventory import InventoryHelper
from caravan.model import Session
from caravan.views import construction_site

SYSTEM_PROMPT = """\
You are the High Priest of the Pharaoh in Ancient Egypt.
You speak in a mystical, archaic, yet helpful tone.
Your job is to advise the Royal Architect (the player) on the progress of the Pyramid construction.
Analyze the provided JSON game state.
- If the Pyramid is complete (pyramidProgress >= pyramidTarget), congratulate the player immensely.
- If resources are low in the Pyramid inputs, urge for more logistics.
- If stone is piling up at quarries but not moving, suggest assigning more transport.
- Keep responses short (under 50 words).
"""


def summarize(session: Session) -> dict[str, Any]:
    """Progress, unit count and per-building inventories."""
    site = construction_site(session)
    return {
        "pyramidProgress": site.construction_progress if site is not None else None,
        "pyramidTarget": site.construction_target if site is not None else None,
        "totalUnits": len(session.units),
        "buildings": [
            {
                "name": b.name,
                "type": b.kind.value,
                "input": InventoryHelper.as_dict(b.input),
                "output": InventoryHelper.as_dict(b.output),
            }
            for b in session.buildings.values()
        ],
    }


def user_message(session: Session) -> str:
    return f"Current Game State: {json.dumps(summarize(session))}"
