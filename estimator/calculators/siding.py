"""
Siding material calculator.

Net wall area = rectangles + gable triangles - openings (all in feet).
squares = ceil(net area x (1 + waste%) / 100)
Accessories are sized from net area, wall perimeter, and opening perimeter.
"""

from typing import List, Literal

from .base import BaseCalculator, Dimension, MeasurementInput, SubEntity, is_positive, is_set

# per square (100 sq ft), by siding type and profile
SIDING_PRICES = {
    "vinyl": {"lap": 179.98, "dutch-lap": 199.98, "vertical": 219.98, "shake": 259.98},
    "fiber-cement": {"lap": 319.98, "dutch-lap": 339.98, "vertical": 359.98, "shake": 399.98},
    "wood": {"lap": 399.98, "dutch-lap": 419.98, "vertical": 439.98, "shake": 479.98},
    "metal": {"lap": 299.98, "dutch-lap": 319.98, "vertical": 279.98, "shake": 379.98},
    "engineered-wood": {"lap": 359.98, "dutch-lap": 379.98, "vertical": 399.98, "shake": 439.98},
}

TRIM_PRICES = {"vinyl": 17.98, "wood": 25.98, "aluminum": 31.98, "fiber-cement": 39.98}  # 16 ft piece

# (coverage per unit, price)
HOUSE_WRAP = (1000, 159.98)
WRAP_TAPE = (165, 12.98)
INSULATION = (100, 49.98)
STARTER = (12, 13.98)
J_CHANNEL = (12.5, 17.98)
CORNER_POST = (10, 39.98)
TRIM_PIECE_FT = 16
FASTENERS_PER_SQUARE = 250
FASTENER_BOX = (1000, 29.98)


def titled(text: str) -> str:
    return " ".join(part.capitalize() for part in text.replace("-", " ").split())


class WallOpening(SubEntity):
    type: Literal["door", "window", "garage", "custom"] = "window"
    width: Dimension = 0.0    # feet
    height: Dimension = 0.0   # feet


class Wall(SubEntity):
    length: Dimension = None
    height: Dimension = None
    is_gable: bool = False
    gable_height: Dimension = None
    openings: List[WallOpening] = []

    def gross_area(self) -> float:
        area = self.length * self.height
        if self.is_gable and is_set(self.gable_height):
            area += self.length * self.gable_height / 2
        return area

    def openings_area(self) -> float:
        return sum((o.width or 0) * (o.height or 0) for o in self.openings)

    def openings_perimeter(self) -> float:
        return sum(2 * ((o.width or 0) + (o.height or 0)) for o in self.openings)


class SidingInput(MeasurementInput):
    walls: List[Wall] = []
    siding_type: Literal["vinyl", "fiber-cement", "wood", "metal", "engineered-wood"] = "vinyl"
    siding_profile: Literal["lap", "dutch-lap", "vertical", "shake"] = "lap"
    siding_exposure: int = 4
    include_trim: bool = True
    trim_type: Literal["vinyl", "wood", "aluminum", "fiber-cement"] = "vinyl"
    include_insulation: bool = False
    include_house_wrap: bool = True
    include_starter: bool = True
    include_j_channel: bool = True
    include_corners: bool = True
    waste_factor: Dimension = 15.0


class SidingCalculator(BaseCalculator):

    calculator_type = "siding"
    input_model = SidingInput

    def missing_fields(self, inputs: SidingInput) -> list:
        if not inputs.walls:
            return ["walls"]
        missing = []
        for i, wall in enumerate(inputs.walls):
            if not is_positive(wall.length):
                missing.append(f"walls[{i}].length")
            if not is_positive(wall.height):
                missing.append(f"walls[{i}].height")
            if wall.is_gable and not is_set(wall.gable_height):
                missing.append(f"walls[{i}].gable_height")
        return missing

    def compute(self, inputs: SidingInput, resolver) -> list:
        items = []
        walls = inputs.walls

        wall_area = sum(w.gross_area() - w.openings_area() for w in walls)
        perimeter = sum(2 * (w.length + w.height) for w in walls)
        openings_perimeter = sum(w.openings_perimeter() for w in walls)

        def priced(name, category, coverage_and_price, quantity_basis, label, unit):
            coverage = resolver.resolve_unit_value(name, coverage_and_price[0], category)
            count = self.units_needed(quantity_basis / coverage)
            price = resolver.resolve_price(name, coverage_and_price[1], category)
            items.append(self.line_item(label, count, unit, count * price))
            return count

        # 1. Siding
        area_with_waste = self.apply_waste(wall_area, inputs.waste_factor)
        squares = self.units_needed(area_with_waste / 100)
        profile = inputs.siding_profile.replace("-", " ")
        siding_name = f"{titled(inputs.siding_type)} Siding ({profile})"
        siding_price = resolver.resolve_price(
            siding_name, SIDING_PRICES[inputs.siding_type][inputs.siding_profile], "siding")
        items.append(self.line_item("Total Wall Area", wall_area, "sq ft"))
        items.append(self.line_item(siding_name, squares, "squares", squares * siding_price))

        # 2. House wrap + tape
        if inputs.include_house_wrap:
            priced("House Wrap", "weather barrier", HOUSE_WRAP, wall_area, "House Wrap", "1000 sf rolls")
            priced("House Wrap Tape", "weather barrier", WRAP_TAPE, perimeter, "House Wrap Tape", "rolls")

        # 3. Insulation
        if inputs.include_insulation:
            priced("Foam Insulation", "insulation", INSULATION, wall_area, "Foam Insulation", "bundles")

        # 4. Starter strip
        if inputs.include_starter:
            priced("Starter Strip", "accessories", STARTER, perimeter, "Starter Strip", "12ft pieces")

        # 5. J-channel around openings and wall edges
        if inputs.include_j_channel:
            priced("J-Channel", "accessories", J_CHANNEL, openings_perimeter + perimeter,
                   "J-Channel", "12.5ft pieces")

        # 6. Corner posts, four outside corners at the tallest wall
        if inputs.include_corners:
            tallest = max(w.height for w in walls)
            priced("Corner Post", "accessories", CORNER_POST, tallest * 4, "Corner Posts", "10ft pieces")

        # 7. Trim
        if inputs.include_trim:
            trim_name = f"{titled(inputs.trim_type)} Trim"

            pieces = self.units_needed(openings_perimeter / TRIM_PIECE_FT)
            price = resolver.resolve_price(trim_name, TRIM_PRICES[inputs.trim_type], "trim")
            items.append(self.line_item(trim_name, pieces, "16ft pieces", pieces * price))

        # 8. Fasteners
        box_count, box_price = FASTENER_BOX
        box_count = resolver.resolve_unit_value("Siding Fasteners", box_count, "fasteners")
        boxes = self.units_needed(squares * FASTENERS_PER_SQUARE / box_count)
        price = resolver.resolve_price("Siding Fasteners", box_price, "fasteners")
        items.append(self.line_item("Siding Fasteners", boxes, "boxes (1000 ct)", boxes * price))

        items.append(self.total_line(items))
        return items
