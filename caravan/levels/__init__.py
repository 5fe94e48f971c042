"""Level fixtures."""
from caravan.levels.loader import load_level
from caravan.levels.nile_delta import nile_delta

__all__ = ["load_level", "nile_delta"]
