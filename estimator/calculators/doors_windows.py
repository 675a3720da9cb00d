"""
Doors & windows (framing openings) material calculator.

Each opening is priced by style and material, times quantity, with optional
pre-hung kit, trim (perimeter in linear feet) and hardware. Insulation,
flashing, caulk and shims are computed across all openings.
No total line is emitted.
"""

from typing import List, Literal

from .base import BaseCalculator, MeasurementInput, SubEntity, Dimension, is_positive

DOOR_STYLES = {
    "entry": {"name": "Entry Door", "prices": {"steel": 299.98, "fiberglass": 499.98, "wood": 699.98}},
    "interior": {"name": "Interior Door", "prices": {"hollow-core": 49.98, "solid-core": 99.98, "wood": 199.98}},
    "patio": {"name": "Patio Door", "prices": {"vinyl": 599.98, "aluminum": 799.98, "wood": 1299.98}},
    "french": {"name": "French Door", "prices": {"wood": 899.98, "fiberglass": 799.98, "steel": 699.98}},
    "bifold": {"name": "Bifold Door", "prices": {"hollow-core": 99.98, "solid-core": 149.98, "wood": 249.98}},
}

WINDOW_STYLES = {
    "single-hung": {"name": "Single Hung Window", "prices": {"vinyl": 199.98, "aluminum": 249.98, "wood": 399.98}},
    "double-hung": {"name": "Double Hung Window", "prices": {"vinyl": 249.98, "aluminum": 299.98, "wood": 499.98}},
    "casement": {"name": "Casement Window", "prices": {"vinyl": 299.98, "aluminum": 349.98, "wood": 599.98}},
    "sliding": {"name": "Sliding Window", "prices": {"vinyl": 249.98, "aluminum": 299.98, "wood": 499.98}},
    "picture": {"name": "Picture Window", "prices": {"vinyl": 299.98, "aluminum": 349.98, "wood": 599.98}},
}

TRIM_STYLES = {
    "basic": {"name": "Basic Trim", "price": 2.98},  # per linear foot
    "colonial": {"name": "Colonial Trim", "price": 3.98},
    "craftsman": {"name": "Craftsman Trim", "price": 4.98},
    "modern": {"name": "Modern Trim", "price": 3.98},
}

HARDWARE_PRICES = {
    "door_interior": {"basic": 24.98, "premium": 49.98},
    "door_exterior": {"basic": 79.98, "premium": 149.98},
    "window": {"basic": 19.98, "premium": 39.98},
}

PRE_HUNG_KIT = {True: 149.98, False: 79.98}  # keyed by exterior

INSULATION_ROLL_FT = 20
INSULATION_PRICE = 12.98
FLASHING_PRICE = 12.98      # one roll per exterior unit
CAULK_FT_PER_TUBE = 20
CAULK_PRICE = 6.98
SHIM_UNITS_PER_PACK = 2
SHIM_PRICE = 4.98


class Opening(SubEntity):
    type: Literal["door", "window"] = "door"
    style: str = "entry"
    material: str = "steel"
    finish: str = ""
    width: Dimension = 36.0    # inches
    height: Dimension = 80.0   # inches
    quantity: int = 1
    include_trim: bool = True
    trim_style: Literal["basic", "colonial", "craftsman", "modern"] = "basic"
    include_hardware: bool = True
    hardware_grade: Literal["basic", "premium"] = "basic"
    is_exterior: bool = True
    is_pre_hung: bool = True

    @classmethod
    def new(cls, opening_type: str = "door") -> "Opening":
        """A fresh opening with the usual starting values for its type."""
        if opening_type == "window":
            return cls(type="window", style="single-hung", material="vinyl", width=32.0, height=60.0,
                       is_exterior=False, is_pre_hung=False)
        return cls()

    def perimeter_feet(self) -> float:
        return (self.width * 2 + self.height * 2) / 12.0


class DoorsWindowsInput(MeasurementInput):
    openings: List[Opening] = []
    include_insulation: bool = True
    include_flashing: bool = True
    include_caulk: bool = True
    include_shims: bool = True


def styles_for(opening_type: str) -> dict:
    return DOOR_STYLES if opening_type == "door" else WINDOW_STYLES


class DoorsWindowsCalculator(BaseCalculator):

    calculator_type = "doors_windows"
    input_model = DoorsWindowsInput

    def missing_fields(self, inputs: DoorsWindowsInput) -> list:
        if not inputs.openings:
            return ["openings"]
        missing = []
        for i, opening in enumerate(inputs.openings):
            styles = styles_for(opening.type)
            if opening.style not in styles:
                missing.append(f"openings[{i}].style")
            elif opening.material not in styles[opening.style]["prices"]:
                missing.append(f"openings[{i}].material")
            if not is_positive(opening.width):
                missing.append(f"openings[{i}].width")
            if not is_positive(opening.height):
                missing.append(f"openings[{i}].height")
            if opening.quantity < 1:
                missing.append(f"openings[{i}].quantity")
        return missing

    def compute(self, inputs: DoorsWindowsInput, resolver) -> list:
        items = []
        openings = inputs.openings

        for opening in openings:
            style = styles_for(opening.type)[opening.style]
            qty = opening.quantity

            # 1. The unit itself
            unit_name = f"{style['name']} ({opening.material})"
            unit_price = resolver.resolve_price(
                unit_name, style["prices"][opening.material], "doors" if opening.type == "door" else "windows")
            items.append(self.line_item(unit_name, qty, "units", unit_price * qty))


            # 2. Pre-hung frame kit (doors only)
            if opening.type == "door" and opening.is_pre_hung:
                kit_name = "Exterior Pre-hung Frame Kit" if opening.is_exterior else "Interior Pre-hung Frame Kit"
                kit_price = resolver.resolve_price(kit_name, PRE_HUNG_KIT[opening.is_exterior], "frames")
                items.append(self.line_item("Pre-hung Frame Kit", qty, "kits", kit_price * qty))

            # 3. Trim
            if opening.include_trim:
                trim = TRIM_STYLES[opening.trim_style]
                trim_length = opening.perimeter_feet() * qty
                trim_price = resolver.resolve_price(trim["name"], trim["price"], "trim")
                items.append(self.line_item(trim["name"], trim_length, "linear feet", trim_length * trim_price))

            # 4. Hardware
            if opening.include_hardware:
                if opening.type == "door":
                    table = "door_exterior" if opening.is_exterior else "door_interior"
                    hw_name = f"{'Exterior' if opening.is_exterior else 'Interior'} Door Hardware"
                else:
                    table = "window"
                    hw_name = "Window Hardware"
                hw_price = resolver.resolve_price(
                    f"{opening.hardware_grade.title()} {hw_name}",
                    HARDWARE_PRICES[table][opening.hardware_grade],
                    "hardware",
                )
                label = "Door Hardware" if opening.type == "door" else "Window Hardware"
                items.append(self.line_item(label, qty, "sets", hw_price * qty))

        total_units = sum(o.quantity for o in openings)
        perimeter_ft = sum(o.perimeter_feet() * o.quantity for o in openings)

        # 5. Job-wide consumables
        if inputs.include_insulation:
            roll_ft = resolver.resolve_unit_value("Insulation", INSULATION_ROLL_FT, "consumables")
            rolls = self.units_needed(perimeter_ft / roll_ft)
            price = resolver.resolve_price("Insulation", INSULATION_PRICE, "consumables")
            items.append(self.line_item("Insulation", rolls, f"{roll_ft:g}ft rolls"
, rolls * price))

        if inputs.include_flashing:
            exterior_units = sum(o.quantity for o in openings if o.is_exterior)
            price = resolver.resolve_price("Flashing Tape", FLASHING_PRICE, "consumables")
            items.append(self.line_item("Flashing Tape", exterior_units, "rolls", exterior_units * price))

        if inputs.include_caulk:
            ft_per_tube = resolver.resolve_unit_value("Caulk", CAULK_FT_PER_TUBE, "consumables")
            tubes = self.units_needed(perimeter_ft / ft_per_tube)
            price = resolver.resolve_price("Caulk", CAULK_PRICE, "consumables")
            items.append(self.line_item("Caulk", tubes, "tubes", tubes * price))

        if inputs.include_shims:
            packs = self.units_needed(total_units / SHIM_UNITS_PER_PACK)
            price = resolver.resolve_price("Shim Packs", SHIM_PRICE, "consumables")
            items.append(self.line_item("Shim Packs", packs, "packs", packs * price))

        return items
