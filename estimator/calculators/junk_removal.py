"""
Junk removal calculator.

base = max(volume x volume rate, weight x weight rate)   the rate that costs more wins
subtotal = base + labor + distance + disposal + permit + hazardous
total = subtotal x access multiplier x (1 + 0.15 x (floors - 1))

The multipliers scale the whole subtotal, never individual lines. The difference
is shown as its own adjustment line so the total still sums its lines.
"""

from typing import List, Literal

from .base import BaseCalculator, Count, Dimension, MeasurementInput, SubEntity, is_set

# (cubic feet, pounds) per item
COMMON_ITEMS = {
    "furniture": {
        "sofa": (60, 150),
        "loveseat": (40, 100),
        "armchair": (25, 75),
        "dining-table": (45, 120),
        "mattress-twin": (20, 40),
        "mattress-full": (30, 55),
        "mattress-queen": (35, 65),
        "mattress-king": (42, 80),
        "dresser": (35, 100),
        "bookshelf": (30, 85),
    },
    "appliances": {
        "refrigerator": (80, 250),
        "washer": (40, 200),
        "dryer": (40, 150),
        "dishwasher": (30, 120),
        "stove": (45, 180),
        "microwave": (8, 30),
    },
    "construction": {
        "drywall-pile": (50, 300),
        "lumber-pile": (40, 200),
        "concrete-debris": (30, 400),
        "roofing-material": (45, 250),
        "tiles": (25, 150),
    },
    "yard": {
        "branches": (35, 100),
        "dirt": (20, 300),
        "grass-clippings": (30, 80),
        "leaves": (40, 60),
        "rocks": (15, 250),
    },
    "electronics": {
        "tv-crt": (15, 60),
        "tv-flat": (20, 40),
        "computer": (8, 25),
        "printer": (6, 20),
        "monitor": (5, 15),
    },
    "misc": {
        "boxes": (10, 30),
        "bags": (8, 20),
        "tires": (12, 25),
        "metal-scrap": (15, 100),
        "glass": (10, 75),
    },
}

VOLUME_RATE = 1.50      # per cubic foot
WEIGHT_RATE = 0.50      # per pound
LABOR_RATE = 45.0       # per worker-hour
CUBIC_FEET_PER_HOUR = 100
DISTANCE_RATE = 2.50    # per mile
SPECIAL_DISPOSAL_FEE = 25.0
PERMIT_FEE = 150.0
HAZARDOUS_RATE = 0.75   # per pound

ACCESS_MULTIPLIERS = {"easy": 1.0, "moderate": 1.25, "difficult": 1.5}
FLOOR_SURCHARGE = 0.15


class JunkItem(SubEntity):
    type: str = "misc-boxes"
    volume: Dimension = 0.0
    weight: Dimension = 0.0
    quantity: Count = 1
    requires_special_disposal: bool = False
    needs_disassembly: bool = False

    @classmethod
    def from_catalog(cls, category: str, item_type: str) -> "JunkItem":
        volume, weight = COMMON_ITEMS[category][item_type]
        return cls(
            type=f"{category}-{item_type}",
            volume=volume,
            weight=weight,
            requires_special_disposal=category == "electronics" or "mattress" in item_type,
            needs_disassembly=category == "furniture" and "mattress" not in item_type,
        )

    def label(self) -> str:
        return " ".join(word.capitalize() for word in self.type.split("-"))


class JunkRemovalInput(MeasurementInput):
    items: List[JunkItem] = []
    needs_labor: bool = True
    laborers: Literal[2, 3, 4] = 2
    distance: Dimension = None
    include_disposal: bool = True
    needs_permit: bool = False
    is_hazardous: bool = False
    access_difficulty: Literal["easy", "moderate", "difficult"] = "easy"
    floors: int = 1


class JunkRemovalCalculator(BaseCalculator):

    calculator_type = "junk_removal"
    input_model = JunkRemovalInput

    def missing_fields(self, inputs: JunkRemovalInput) -> list:
        missing = []
        if not inputs.items:
            missing.append("items")
        if not is_set(inputs.distance):
            missing.append("distance")
        if inputs.floors < 1:
            missing.append("floors")
        return missing

    def multiplier(self, inputs: JunkRemovalInput) -> float:
        floor_multiplier = 1 + (inputs.floors - 1) * FLOOR_SURCHARGE
        return ACCESS_MULTIPLIERS[inputs.access_difficulty] * floor_multiplier

    def compute(self, inputs: JunkRemovalInput, resolver) -> list:
        items = []
        total_volume = 0.0
        total_weight = 0.0

        # 1. Items
        for item in inputs.items:
            total_volume += (item.volume or 0) * item.quantity
            total_weight += (item.weight or 0) * item.quantity
            items.append(self.line_item(item.label(), item.quantity, "items"))

        # 2. Base removal cost
        volume_rate = resolver.resolve_price("Volume Rate", VOLUME_RATE, "rates")
        weight_rate = resolver.resolve_price("Weight Rate", WEIGHT_RATE, "rates")
        base = max(total_volume * volume_rate, total_weight * weight_rate)
        items.append(self.line_item("Total Volume", total_volume, "cubic feet"))
        items.append(self.line_item("Total Weight", total_weight, "pounds"))
        items.append(self.line_item("Base Removal Cost", base, "USD", base))

        # 3. Labor, one hour per 100 cubic feet
        if inputs.needs_labor:
            hours = self.units_needed(total_volume / CUBIC_FEET_PER_HOUR)
            rate = resolver.resolve_price("Labor Rate", LABOR_RATE, "rates")
            items.append(self.line_item(f"Labor ({inputs.laborers} workers, {hours} hours)",

                                        inputs.laborers * hours, "labor hours", rate * inputs.laborers * hours))

        # 4. Distance
        rate = resolver.resolve_price("Distance Rate", DISTANCE_RATE, "rates")
        items.append(self.line_item("Distance Fee", inputs.distance, "miles", inputs.distance * rate))

        # 5. Special disposal
        special = [item for item in inputs.items if item.requires_special_disposal]
        if inputs.include_disposal and special:
            fee = resolver.resolve_price("Special Disposal Fee", SPECIAL_DISPOSAL_FEE, "fees")
            items.append(self.line_item("Special Disposal Fee", len(special), "items",
                                        sum(item.quantity for item in special) * fee))

        # 6. Permit
        if inputs.needs_permit:
            fee = resolver.resolve_price("Disposal Permit", PERMIT_FEE, "fees")
            items.append(self.line_item("Disposal Permit", 1, "permit", fee))

        # 7. Hazardous material
        if inputs.is_hazardous:
            rate = resolver.resolve_price("Hazardous Material Fee", HAZARDOUS_RATE, "fees")
            items.append(self.line_item("Hazardous Material Fee", total_weight, "pounds", total_weight * rate))

        # 8. Access and floors scale everything above
        multiplier = self.multiplier(inputs)
        if multiplier != 1:
            subtotal = sum(item.cost for item in items if item.cost is not None)
            items.append(self.line_item("Access Difficulty & Floor Adjustment", multiplier, "multiplier",
                                        subtotal * (multiplier - 1)))

        items.append(self.total_line(items))
        return items
