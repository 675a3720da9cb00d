"""
Flooring material calculator.

area_with_waste = area x (1 + waste%) x pattern multiplier
boxes = ceil(area_with_waste / sq ft per box)
Underlayment (100 sq ft rolls) only for products that need it.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from .base import BaseCalculator, Dimension, MeasurementInput, is_positive, is_set

PATTERN_MULTIPLIERS = {"straight": 1.0, "diagonal": 1.1, "herringbone": 1.15}


@dataclass(frozen=True)
class FlooringProduct:
    name: str
    sqft_per_box: float
    price_per_box: float
    requires_underlayment: bool
    patterns: tuple
    pieces_per_box: int = 0

    @property
    def is_custom(self) -> bool:
        return self.name.startswith("Custom")


FLOORING_PRODUCTS = {
    "hardwood": [
        FlooringProduct("3/4\" Oak Strip", 25, 159.98, False, ("straight", "diagonal", "herringbone"), 24),
        FlooringProduct("3/4\" Oak Plank", 25, 179.98, False, ("straight", "diagonal"), 12),
        FlooringProduct("Custom Hardwood", 0, 0, False, ("straight", "diagonal", "herringbone")),
    ],
    "engineered": [
        FlooringProduct("3/8\" Engineered Oak", 22, 129.98, True, ("straight", "diagonal"), 8),
        FlooringProduct("1/2\" Engineered Maple", 20, 149.98, True, ("straight", "diagonal"), 6),
        FlooringProduct("Custom Engineered", 0, 0, True, ("straight", "diagonal")),
    ],
    "laminate": [
        FlooringProduct("8mm Laminate", 22.5, 49.98, True, ("straight",), 8),
        FlooringProduct("12mm Laminate", 17.5, 69.98, True, ("straight",), 6),
        FlooringProduct("Custom Laminate", 0, 0, True, ("straight",)),
    ],
    "vinyl": [
        FlooringProduct("Luxury Vinyl Plank", 23.64, 89.98, False, ("straight", "diagonal"), 10),
        FlooringProduct("WPC Vinyl Plank", 19.2, 109.98, False, ("straight", "diagonal"), 8),
        FlooringProduct("Custom Vinyl", 0, 0, False, ("straight", "diagonal")),
    ],
    "carpet": [
        FlooringProduct("Plush Carpet", 144, 359.98, True, ("straight",), 1),
        FlooringProduct("Berber Carpet", 144, 299.98, True, ("straight",), 1),
        FlooringProduct("Custom Carpet", 0, 0, True, ("straight",)),
    ],
}

UNDERLAYMENT = {
    "standard": {"name": "Standard Foam", "price_per_sqft": 0.45},
    "premium": {"name": "Premium Foam with Vapor Barrier", "price_per_sqft": 0.75},
    "moisture-barrier": {"name": "Moisture Barrier", "price_per_sqft": 0.35},
}
UNDERLAYMENT_ROLL_SQFT = 100

TRANSITION_STRIP_FT = 4
TRANSITION_STRIP_PRICE = 19.98


class FlooringInput(MeasurementInput):
    input_type: Literal["dimensions", "area"] = "dimensions"
    length: Dimension = None
    width: Dimension = None
    area: Dimension = None
    flooring_type: Literal["hardwood", "laminate", "vinyl", "carpet", "engineered"] = "hardwood"
    selected_flooring: int = 0
    install_pattern: Literal["straight", "diagonal", "herringbone"] = "straight"
    waste_factor: Dimension = 10.0   # percent
    include_underlayment: bool = True
    underlayment_type: Literal["standard", "premium", "moisture-barrier"] = "standard"
    include_transition_strips: bool = False
    transition_strip_length: Dimension = None
    custom_name: str = ""
    custom_price_per_box: Dimension = None
    custom_sqft_per_box: Dimension = None


class FlooringCalculator(BaseCalculator):

    calculator_type = "flooring"
    input_model = FlooringInput

    def product(self, inputs: FlooringInput) -> Optional[FlooringProduct]:
        options = FLOORING_PRODUCTS[inputs.flooring_type]
        if 0 <= inputs.selected_flooring < len(options):
            return options[inputs.selected_flooring]
        return None

    def missing_fields(self, inputs: FlooringInput) -> list:
        missing = []
        if inputs.input_type == "dimensions":
            if not is_set(inputs.length):
                missing.append("length")
            if not is_set(inputs.width):
                missing.append("width")
        elif not is_set(inputs.area):
            missing.append("area")

        product = self.product(inputs)
        if product is None:
            missing.append("selected_flooring")
        else:
            if inputs.install_pattern not in product.patterns:
                missing.append("install_pattern")
            if product.is_custom:
                if not is_set(inputs.custom_price_per_box):
                    missing.append("custom_price_per_box")
                if not is_positive(inputs.custom_sqft_per_box):
                    missing.append("custom_sqft_per_box")

        if inputs.include_transition_strips and not is_set(inputs.transition_strip_length):
            missing.append("transition_strip_length")
        return missing

    def compute(self, inputs: FlooringInput, resolver) -> list:
        items = []
        product = self.product(inputs)

        if inputs.input_type == "dimensions":
            area = inputs.length * inputs.width
        else:
            area = inputs.area

        if product.is_custom:
            name = inputs.custom_name or product.name
            sqft_per_box = inputs.custom_sqft_per_box
            price_per_box = inputs.custom_price_per_box
        else:
            name = product.name
            sqft_per_box = resolver.resolve_unit_value(name, product.sqft_per_box, inputs.flooring_type)
            price_per_box = resolver.resolve_price(name, product.price_per_box, inputs.flooring_type)

        waste = inputs.waste_factor or 0
        area_with_waste = self.apply_waste(area, waste) * PATTERN_MULTIPLIERS[inputs.install_pattern]

        # 1. Area
        items.append(self.line_item("Total Area", area, "sq ft"))
        pattern_note = f" & {inputs.install_pattern} pattern" if inputs.install_pattern != "straight" else ""
        items.append(self.line_item(f"Area with {waste:g}% waste{pattern_note}", area_with_waste, "sq ft"))

        # 2. Flooring
        boxes = self.units_needed(area_with_waste / sqft_per_box)
        items.append(self.line_item(name, boxes, "boxes", boxes * price_per_box))

        # 3. Underlayment
        if inputs.include_underlayment and product.requires_underlayment:
            underlayment = UNDERLAYMENT[inputs.underlayment_type]
            roll_sqft = resolver.resolve_unit_value(underlayment["name"], UNDERLAYMENT_ROLL_SQFT, "underlayment")
            rolls = self.units_needed(area_with_waste / roll_sqft)
            roll_price = resolver.resolve_price(
                underlayment["name"], underlayment["price_per_sqft"] * UNDERLAYMENT_ROLL_SQFT, "underlayment")
            items.append(self.line_item(underlayment["name"], rolls, f"{roll_sqft:g} sq ft rolls"
, rolls * roll_price))

        # 4. Transition strips
        if inputs.include_transition_strips:
            strips = self.units_needed(inputs.transition_strip_length / TRANSITION_STRIP_FT)
            price = resolver.resolve_price("Transition Strip", TRANSITION_STRIP_PRICE, "trim")
            items.append(self.line_item("Transition Strips", strips, "4ft pieces", strips * price))

        items.append(self.total_line(items))
        return items
