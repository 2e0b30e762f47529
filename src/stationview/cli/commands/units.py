import sys
from typing import Optional, TextIO

from stationview.domain.units import DEFAULT_REGISTRY, UnitRegistry


def handle(registry: Optional[UnitRegistry] = None, stdout: Optional[TextIO] = None) -> int:
    out = stdout or sys.stdout
    for kind, unit, symbol in registry or DEFAULT_REGISTRY:
        out.write(f"{kind}\t{unit}\t{symbol}\n")
    return 0
