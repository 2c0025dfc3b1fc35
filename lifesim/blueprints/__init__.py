from __future__ import annotations

from importlib import import_module
from pathlib import Path

from ..building import HouseBlueprint

# Dynamically load all tier modules in this package, keyed by house level
BLUEPRINTS: dict[int, HouseBlueprint] = {}
package_path = Path(__file__).parent
for path in package_path.glob("*.py"):
    if path.stem.startswith("__"):
        continue
    module_name = f"{__name__}.{path.stem}"
    module = import_module(module_name)
    bp = getattr(module, "BLUEPRINT", None)
    if isinstance(bp, HouseBlueprint):
        BLUEPRINTS[bp.level] = bp

__all__ = ["BLUEPRINTS"]
