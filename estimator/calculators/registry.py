"""
Calculator registry. Maps calculator_type strings to calculator classes.
"""

from .base import BaseCalculator
from .concrete import ConcreteCalculator
from .doors_windows import DoorsWindowsCalculator
from .electrical import ElectricalCalculator
from .fencing import FenceCalculator
from .flooring import FlooringCalculator
from .foundation import FoundationCalculator
from .junk_removal import JunkRemovalCalculator
from .paint import PaintCalculator
from .plumbing import PlumbingCalculator
from .siding import SidingCalculator
from .tile import TileCalculator
from .veneer import VeneerCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "concrete": ConcreteCalculator,
    "doors_windows": DoorsWindowsCalculator,
    "fence": FenceCalculator,
    "flooring": FlooringCalculator,
    "foundation": FoundationCalculator,
    "siding": SidingCalculator,
    "tile": TileCalculator,
    "plumbing": PlumbingCalculator,
    "electrical": ElectricalCalculator,
    "paint": PaintCalculator,
    "junk_removal": JunkRemovalCalculator,
    "veneer": VeneerCalculator,
}


def get_calculator(calculator_type: str) -> BaseCalculator:
    """Returns an instance of the calculator for a trade, or raises ValueError."""
    if calculator_type not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for type: {calculator_type}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[calculator_type]()


def has_calculator(calculator_type: str) -> bool:
    return calculator_type in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """All registered calculator types, in display order."""
    return list(CALCULATOR_REGISTRY.keys())
