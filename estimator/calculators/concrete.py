"""
Concrete material calculator.

Volume from geometry:
  wall:     length x height x thickness (in) / 27 -> cubic yards
  flatwork: length x width x depth (in) / 27      -> cubic yards
Metric inputs are metres with thickness/depth in centimetres, volume in m3.

Delivered as bags (yield per cubic yard by bag size) or by truck (1 unit
minimum load, flat fee below the minimum).
"""

from typing import Literal

from .base import BaseCalculator, Dimension, MeasurementInput, is_positive, is_set

CUBIC_YARDS_PER_CUBIC_METER = 1.30795

# Bags per cubic yard, by bag weight (lb)
BAG_YIELD = {60: 60, 80: 45}
BAG_PRICES = {60: 4.98, 80: 5.89}

TRUCK_PRICE = {"imperial": 185.00, "metric": 242.00}  # per yd3 / per m3
MIN_LOAD = 1.0
SHORT_LOAD_FEE = 150.00
# Loads under this volume typically carry extra fees from the plant
SMALL_LOAD_THRESHOLD = {"imperial": 3.0, "metric": 2.29}

# Priced per cubic yard of delivered concrete
ADDITIVE_PRICES = {
    "Color Additive": 45.00,
    "Fiber Additive": 18.00,
}

REBAR = {
    "imperial": {"bar_length": 20.0, "price": 8.98, "spacing_per_unit": 12.0, "unit": "feet"},
    "metric": {"bar_length": 6.0, "price": 9.50, "spacing_per_unit": 100.0, "unit": "meters"},
}
MESH_SHEET_COVERAGE = {"imperial": 100.0, "metric": 9.29}
MESH_PRICES = {"6x6": 12.98, "4x4": 16.98}


class ConcreteInput(MeasurementInput):
    concrete_type: Literal["wall", "flatwork"] = "flatwork"
    unit: Literal["imperial", "metric"] = "imperial"
    length: Dimension = None
    width: Dimension = None
    height: Dimension = None      # wall height, or flatwork depth (in / cm)
    thickness: Dimension = None   # wall thickness (in / cm)
    delivery_method: Literal["bags", "truck"] = "bags"
    bag_size: Literal[60, 80] = 80
    reinforcement: Literal["none", "rebar", "mesh"] = "none"
    rebar_spacing: Dimension = 12.0  # in / cm
    mesh_type: Literal["6x6", "4x4"] = "6x6"
    include_color: bool = False
    include_fiber: bool = False


class ConcreteCalculator(BaseCalculator):

    calculator_type = "concrete"
    input_model = ConcreteInput

    def missing_fields(self, inputs: ConcreteInput) -> list:
        missing = []
        if not is_set(inputs.length):
            missing.append("length")
        if inputs.concrete_type == "flatwork":
            if not is_set(inputs.width):
                missing.append("width")
            if not is_set(inputs.height):
                missing.append("height")
        else:
            if not is_set(inputs.height):
                missing.append("height")
            if not is_set(inputs.thickness):
                missing.append("thickness")
        if inputs.reinforcement == "rebar" and not is_positive(inputs.rebar_spacing):
            missing.append("rebar_spacing")
        return missing

    def volume(self, inputs: ConcreteInput) -> float:
        """Volume in the input's unit system (yd3 or m3)."""
        per_unit = 12.0 if inputs.unit == "imperial" else 100.0
        if inputs.concrete_type == "wall":
            cubic = inputs.length * inputs.height * (inputs.thickness / per_unit)
        else:
            cubic = inputs.length * inputs.width * (inputs.height / per_unit)
        return cubic / 27.0 if inputs.unit == "imperial" else cubic

    def compute(self, inputs: ConcreteInput, resolver) -> list:
        items = []
        imperial = inputs.unit == "imperial"
        volume_unit = "cubic yards" if imperial else "cubic meters"

        volume = self.volume(inputs)
        volume_yd3 = volume if imperial else volume * CUBIC_YARDS_PER_CUBIC_METER

        # 1. Volume
        items.append(self.line_item("Concrete Volume", volume, volume_unit))

        # 2. Concrete
        if inputs.delivery_method == "bags":
            bag_size = inputs.bag_size
            bags = self.units_needed(volume_yd3 * BAG_YIELD[bag_size])
            bag_price = resolver.resolve_price(f"{bag_size}lb Concrete Bag", BAG_PRICES[bag_size], "concrete")
            items.append(self.line_item(f"{bag_size}lb Bags of Concrete", bags, "bags", bags * bag_price))
            delivered_yd3 = volume_yd3
        else:
            delivered = max(volume, MIN_LOAD)
            truck_price = resolver.resolve_price("Ready-Mix Concrete", TRUCK_PRICE[inputs.unit], "concrete")
            items.append(self.line_item("Ready-Mix Concrete", delivered, volume_unit, delivered * truck_price))
            if volume < MIN_LOAD:
                fee = resolver.resolve_price("Short Load Fee", SHORT_LOAD_FEE, "delivery")
                items.append(self.line_item("Short Load Delivery Fee", 1, "load", fee))
            delivered_yd3 = delivered if imperial else delivered * CUBIC_YARDS_PER_CUBIC_METER

        # 3. Additives, priced on the delivered volume
        for name, enabled in (("Color Additive", inputs.include_color),
                              ("Fiber Additive", inputs.include_fiber)):
            if enabled:
                price = resolver.resolve_price(name, ADDITIVE_PRICES[name], "additives")
                items.append(self.line_item(name, delivered_yd3, "cubic yards", delivered_yd3 * price))

        # 4. Reinforcement over the poured face
        span = inputs.height if inputs.concrete_type == "wall" else inputs.width
        if inputs.reinforcement == "rebar":
            rebar = REBAR[inputs.unit]
            spacing = inputs.rebar_spacing / rebar["spacing_per_unit"]
            bars_along_length = self.units_needed(span / spacing) + 1
            bars_along_span = self.units_needed(inputs.length / spacing) + 1
            total_length = inputs.length * bars_along_length + span * bars_along_span
            bar_length = resolver.resolve_unit_value("Rebar", rebar["bar_length"], "reinforcement")
            pieces = self.units_needed(total_length / bar_length)
            price = resolver.resolve_price("Rebar", rebar["price"], "reinforcement")
            items.append(self.line_item("Rebar Length Needed", total_length, rebar["unit"], pieces * price))
            bar_unit = "ft" if imperial else "m"
            items.append(self.line_item("Rebar Pieces", pieces, f"{bar_length:g}{bar_unit} bars"))
        elif inputs.reinforcement == "mesh":
            name = f"{inputs.mesh_type} Wire Mesh"
            coverage = resolver.resolve_unit_value(name, MESH_SHEET_COVERAGE[inputs.unit], "reinforcement")
            sheets = self.units_needed(inputs.length * span / coverage)
            price = resolver.resolve_price(name, MESH_PRICES[inputs.mesh_type], "reinforcement")
            items.append(self.line_item(f"{inputs.mesh_type} Mesh Sheets Needed", sheets, "sheets", sheets * price))

        # 5. Small-load warning for truck delivery
        if inputs.delivery_method == "truck" and volume < SMALL_LOAD_THRESHOLD[inputs.unit]:
            items.append(self.warning_line(
                f"Small load: ready-mix suppliers typically charge extra fees under "
                f"{SMALL_LOAD_THRESHOLD[inputs.unit]:g} {volume_unit}",

                volume, volume_unit,
            ))

        items.append(self.total_line(items))
        return items
