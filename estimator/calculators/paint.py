"""
Paint calculator.

net area = sum(surface L x H) - doors - windows
gallons = ceil(net area x (1 + waste%) x coats / (coverage x mean condition factor))
Worn surfaces soak up more paint, so a poor surface only gets 80% of rated coverage.
"""

from typing import List, Literal

from .base import BaseCalculator, Dimension, MeasurementInput, SubEntity, is_positive

PAINT_PRICES = {
    "interior": {"economy": 25.98, "standard": 35.98, "premium": 45.98},
    "exterior": {"economy": 30.98, "standard": 40.98, "premium": 50.98},
}
COVERAGE = {"interior": 400, "exterior": 350}   # sq ft per gallon
CONDITION_FACTORS = {"good": 1.0, "fair": 0.9, "poor": 0.8}

PRIMER_PRICES = {"interior": 25.98, "exterior": 30.98}
PRIMER_COVERAGE = 400
SUPPLIES_PRICE = 25.0
SUPPLIES_SQFT = 400


class Surface(SubEntity):
    length: Dimension = None
    height: Dimension = None
    condition: Literal["good", "fair", "poor"] = "good"


class PaintOpening(SubEntity):
    width: Dimension = 0.0
    height: Dimension = 0.0

    @classmethod
    def door(cls) -> "PaintOpening":
        return cls(width=3, height=7)

    @classmethod
    def window(cls) -> "PaintOpening":
        return cls(width=3, height=3)


class PaintInput(MeasurementInput):
    paint_location: Literal["interior", "exterior"] = "interior"
    surfaces: List[Surface] = []
    doors: List[PaintOpening] = []
    windows: List[PaintOpening] = []
    coats: Literal[1, 2] = 2
    paint_type: Literal["economy", "standard", "premium"] = "standard"
    paint_finish: Literal["flat", "eggshell", "satin", "semi-gloss"] = "eggshell"
    include_primer: bool = False
    include_waste: bool = True
    waste_factor: Literal[5, 10, 15] = 10


class PaintCalculator(BaseCalculator):

    calculator_type = "paint"
    input_model = PaintInput

    def missing_fields(self, inputs: PaintInput) -> list:
        if not inputs.surfaces:
            return ["surfaces"]
        missing = []
        for i, surface in enumerate(inputs.surfaces):
            if not is_positive(surface.length):
                missing.append(f"surfaces[{i}].length")
            if not is_positive(surface.height):
                missing.append(f"surfaces[{i}].height")
        return missing

    def compute(self, inputs: PaintInput, resolver) -> list:
        items = []
        location = inputs.paint_location

        gross = sum(s.length * s.height for s in inputs.surfaces)
        openings = sum((o.width or 0) * (o.height or 0) for o in inputs.doors + inputs.windows)
        area = max(gross - openings, 0.0)
        area_with_waste = self.apply_waste(area, inputs.waste_factor) if inputs.include_waste else area

        # 1. Paint
        paint_name = f"{location.capitalize()} {inputs.paint_type.capitalize()} Paint"
        coverage = resolver.resolve_unit_value(paint_name, COVERAGE[location], "paint")
        condition = sum(CONDITION_FACTORS[s.condition] for s in inputs.surfaces) / len(inputs.surfaces)
        gallons = self.units_needed(area_with_waste * inputs.coats / (coverage * condition))
        price = resolver.resolve_price(paint_name, PAINT_PRICES[location][inputs.paint_type], "paint")
        items.append(self.line_item("Total Wall Area", area, "square feet"))
        items.append(self.line_item(f"Paint Needed ({inputs.paint_type}, {inputs.paint_finish})",
                                    gallons, "gallons", gallons * price))

        # 2. Primer
        if inputs.include_primer:
            primer_name = f"{location.capitalize()} Primer"

            primer_coverage = resolver.resolve_unit_value(primer_name, PRIMER_COVERAGE, "primer")
            primer_gallons = self.units_needed(area_with_waste / primer_coverage)
            price = resolver.resolve_price(primer_name, PRIMER_PRICES[location], "primer")
            items.append(self.line_item("Primer Needed", primer_gallons, "gallons", primer_gallons * price))

        # 3. Supplies (rollers, tape, drop cloths)
        sets = self.units_needed(area / SUPPLIES_SQFT)
        price = resolver.resolve_price("Painting Supplies", SUPPLIES_PRICE, "supplies")
        items.append(self.line_item("Painting Supplies", 1, "set", sets * price))

        items.append(self.total_line(items))
        return items
