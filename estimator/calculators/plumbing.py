"""
Plumbing material calculator.

Fixtures, piping runs, and optional equipment each price independently and
accumulate into one total. Pipe footage carries a 10% overage for offsets and
cut waste; fittings are counted per run.
"""

from typing import List, Literal, Optional

from .base import BaseCalculator, Count, Dimension, MeasurementInput, SubEntity, is_positive, is_set

FIXTURES = {
    "sink": {"cost": 149.98, "description": "Standard Stainless Steel Kitchen Sink"},
    "toilet": {"cost": 199.98, "description": "Standard Two-Piece Toilet"},
    "shower": {"cost": 299.98, "description": "Standard Shower Kit"},
    "tub": {"cost": 399.98, "description": "Standard Alcove Bathtub"},
    "washer": {"cost": 24.98, "description": "Washer Connection Box"},
    "dishwasher": {"cost": 19.98, "description": "Dishwasher Connection Kit"},
    "custom": {"cost": 0.0, "description": "Custom Fixture"},
}
SHOWER_COMPONENTS = [
    ("Pressure Balance Shower Valve", 129.98),
    ("Standard Shower Head", 49.98),
    ("Shower Trim Kit", 79.98),
    ("Shower Drain Assembly", 39.98),
]
FIXTURE_DEFAULTS = {
    # type: (distance from stack ft, drain size in)
    "sink": (6, 1.5),
    "toilet": (4, 3),
    "shower": (8, 2),
    "tub": (8, 2),
    "washer": (10, 2),
    "dishwasher": (6, 1.5),
    "custom": (0, 2),
}
SUPPLY_LINE_PRICE = 12.98
DRAIN_ASSEMBLY_PRICES = {"toilet": 24.98, "tub": 49.98, "shower": 39.98}
DRAIN_ASSEMBLY_DEFAULT = 29.98

# per foot, by material and nominal size (in)
PIPE_PRICES = {
    "pex": {0.5: 0.89, 0.75: 1.29, 1: 1.89},
    "copper": {0.5: 3.98, 0.75: 5.98, 1: 7.98},
    "cpvc": {0.5: 1.29, 0.75: 1.98, 1: 2.98},
    "pvc": {1.5: 2.98, 2: 3.98, 3: 5.98, 4: 8.98},
    "abs": {1.5: 3.98, 2: 4.98, 3: 6.98, 4: 9.98},
    "cast-iron": {2: 12.98, 3: 18.98, 4: 24.98},
}
PIPE_OVERAGE = 1.1

FITTING_PRICES = {
    "pex": {"elbows90": 1.98, "elbows45": 1.98, "tees": 2.49, "couplings": 1.49, "adapters": 2.98, "valves": 8.98},
    "copper": {"elbows90": 3.98, "elbows45": 3.98, "tees": 4.98, "couplings": 2.98, "adapters": 4.98, "valves": 12.98},
    "cpvc": {"elbows90": 1.98, "elbows45": 1.98, "tees": 2.98, "couplings": 1.49, "adapters": 2.98, "valves": 9.98},
    "pvc": {"elbows90": 2.98, "elbows45": 2.98, "tees": 3.98, "couplings": 1.98, "adapters": 3.98, "valves": 12.98},
    "abs": {"elbows90": 3.49, "elbows45": 3.49, "tees": 4.49, "couplings": 2.49, "adapters": 4.49, "valves": 14.98},
    "cast-iron": {"elbows90": 18.98, "elbows45": 18.98, "tees": 24.98, "couplings": 12.98, "adapters": 16.98,
                  "valves": 49.98},
}
FITTING_LABELS = {
    "elbows90": "90° Elbows",
    "elbows45": "45° Elbows",
    "tees": "Tees",
    "couplings": "Couplings",
    "adapters": "Adapters",
    "valves": "Valves",
}

WATER_HEATER_PRICES = {
    "tank": {30: 399.98, 40: 449.98, 50: 549.98, 75: 799.98},
    "tankless": {30: 699.98, 40: 899.98, 50: 1099.98, 75: 1499.98},
}
WATER_HEATER_KIT = {"tank": 89.98, "tankless": 149.98}
SOFTENER_PRICE = 599.98
SOFTENER_KIT = 89.98
PRESSURE_TANK_PRICES = {20: 199.98, 30: 249.98, 40: 299.98}
PRESSURE_TANK_KIT = 69.98
SEWER_PIPE_PRICE = 12.98   # 4" PVC, per foot
CLEANOUT_PRICE = 24.98

RUN_DEFAULTS = {
    "supply": (0.75, "pex"),
    "drain": (3, "pvc"),
    "vent": (1.5, "pvc"),
}


class Fixture(SubEntity):
    type: Literal["sink", "toilet", "shower", "tub", "washer", "dishwasher", "custom"] = "sink"
    name: Optional[str] = None
    supply_lines: Count = 2
    drain_size: float = 1.5
    vent_size: float = 1.5
    distance_from_stack: Dimension = 0.0
    cost: Dimension = None   # unset means the catalog price for the type

    @classmethod
    def new(cls, fixture_type: str = "sink") -> "Fixture":
        distance, drain = FIXTURE_DEFAULTS[fixture_type]
        return cls(type=fixture_type, supply_lines=1 if fixture_type == "toilet" else 2,
                   drain_size=drain, distance_from_stack=distance, cost=FIXTURES[fixture_type]["cost"])


class Fittings(MeasurementInput):
    elbows90: Count = 0
    elbows45: Count = 0
    tees: Count = 0
    couplings: Count = 0
    adapters: Count = 0
    valves: Count = 0


class PipingRun(SubEntity):
    type: Literal["supply", "drain", "vent"] = "supply"
    size: float = 0.75
    length: Dimension = None
    material: Literal["pex", "copper", "cpvc", "pvc", "abs", "cast-iron"] = "pex"
    fittings: Fittings = Fittings()

    @classmethod
    def new(cls, run_type: str = "supply") -> "PipingRun":
        size, material = RUN_DEFAULTS[run_type]
        return cls(type=run_type, size=size, material=material)


class PlumbingInput(MeasurementInput):
    fixtures: List[Fixture] = []
    piping_runs: List[PipingRun] = []
    include_water_heater: bool = False
    water_heater_type: Literal["tank", "tankless"] = "tank"
    water_heater_size: Literal[30, 40, 50, 75] = 40
    include_water_softener: bool = False
    include_pressure_tank: bool = False
    pressure_tank_size: Literal[20, 30, 40] = 30
    include_sewer_connection: bool = True
    sewer_length: Dimension = None
    include_cleanouts: bool = True
    cleanout_count: Count = 2


def size_label(size: float) -> str:
    return f"{size:g}"


class PlumbingCalculator(BaseCalculator):

    calculator_type = "plumbing"
    input_model = PlumbingInput

    def missing_fields(self, inputs: PlumbingInput) -> list:
        missing = []
        if not inputs.piping_runs:
            missing.append("piping_runs")
        for i, run in enumerate(inputs.piping_runs):
            if not is_positive(run.length):
                missing.append(f"piping_runs[{i}].length")
            if run.size not in PIPE_PRICES[run.material]:
                missing.append(f"piping_runs[{i}].size")
        if inputs.include_sewer_connection and not is_set(inputs.sewer_length):
            missing.append("sewer_length")
        return missing

    def compute(self, inputs: PlumbingInput, resolver) -> list:
        items = []

        # 1. Fixtures
        for fixture in inputs.fixtures:
            details = FIXTURES[fixture.type]
            name = fixture.name if fixture.type == "custom" and fixture.name else details["description"]
            if is_set(fixture.cost):
                cost = fixture.cost
            else:
                cost = resolver.resolve_price(details["description"], details["cost"], "fixtures")
            items.append(self.line_item(name, 1, "piece", cost))

            if fixture.type == "shower":
                for component, price in SHOWER_COMPONENTS:
                    items.append(self.line_item(component, 1, "piece",
                                                resolver.resolve_price(component, price, "fixtures")))

            kind = fixture.type.capitalize()
            line_price = resolver.resolve_price("Supply Line", SUPPLY_LINE_PRICE, "fittings")
            items.append(self.line_item(f"{kind} Supply Lines", fixture.supply_lines,
                                        "pieces", fixture.supply_lines * line_price))

            drain_price = resolver.resolve_price(
                f"{kind} Drain Assembly", DRAIN_ASSEMBLY_PRICES.get(fixture.type, DRAIN_ASSEMBLY_DEFAULT), "fittings")
            items.append(self.line_item(f"{kind} Drain Assembly", 1, "set", drain_price))

        # 2. Piping runs
        for run in inputs.piping_runs:
            size, material = size_label(run.size), run.material.upper()
            pipe_name = f'{size}" {material} Pipe'
            feet = self.units_needed(run.length * PIPE_OVERAGE)
            price = resolver.resolve_price(pipe_name, PIPE_PRICES[run.material][run.size], "pipe")
            items.append(self.line_item(f'{size}" {material} {run.type} Pipe', feet, "feet", feet * price))

            for fitting, label in FITTING_LABELS.items():
                count = getattr(run.fittings, fitting)
                if count > 0:
                    fitting_name = f'{size}" {material} {label}'
                    price = resolver.resolve_price(fitting_name, FITTING_PRICES[run.material][fitting], "fittings")
                    items.append(self.line_item(fitting_name, count, "pieces", count * price))

        # 3. Water heater
        if inputs.include_water_heater:
            kind, size = inputs.water_heater_type, inputs.water_heater_size
            name = f"{size} Gallon Water Heater" if kind == "tank" else "Tankless Water Heater"
            price = resolver.resolve_price(name, WATER_HEATER_PRICES[kind][size], "equipment")
            items.append(self.line_item(name, 1, "unit", price))
            kit = resolver.resolve_price("Water Heater Installation Kit", WATER_HEATER_KIT[kind], "equipment")
            items.append(self.line_item("Water Heater Installation Kit", 1, "kit", kit))

        # 4. Water softener
        if inputs.include_water_softener:
            items.append(self.line_item("Water Softener System", 1, "unit",
                                        resolver.resolve_price("Water Softener System", SOFTENER_PRICE, "equipment")))
            items.append(self.line_item("Softener Installation Kit", 1, "kit",
                                        resolver.resolve_price("Softener Installation Kit", SOFTENER_KIT,
                                                               "equipment")))

        # 5. Pressure tank
        if inputs.include_pressure_tank:
            name = f"{inputs.pressure_tank_size} Gallon Pressure Tank"

            items.append(self.line_item(name, 1, "unit", resolver.resolve_price(
                name, PRESSURE_TANK_PRICES[inputs.pressure_tank_size], "equipment")))
            items.append(self.line_item("Pressure Tank Installation Kit", 1, "kit", resolver.resolve_price(
                "Pressure Tank Installation Kit", PRESSURE_TANK_KIT, "equipment")))

        # 6. Sewer
        if inputs.include_sewer_connection:
            price = resolver.resolve_price('4" Sewer Pipe', SEWER_PIPE_PRICE, "pipe")
            items.append(self.line_item('4" Sewer Pipe', inputs.sewer_length, "feet", inputs.sewer_length * price))

        # 7. Cleanouts
        if inputs.include_cleanouts and inputs.cleanout_count > 0:
            price = resolver.resolve_price("Cleanout", CLEANOUT_PRICE, "fittings")
            items.append(self.line_item("Cleanouts", inputs.cleanout_count, "pieces", inputs.cleanout_count * price))

        items.append(self.total_line(items))
        return items
