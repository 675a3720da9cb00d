"""
Electrical rough-in calculator.

Per circuit:
  wire rolls = ceil(length x conductors x 1.2 / roll length), 3 conductors at 240V, 2 at 120V
  conduit = ceil(ceil(length x 1.1) / 10) ten-foot pieces, 2 fittings per piece
  one breaker per circuit
The panel and grounding set are optional. Electrical estimates carry no total line.
"""

from typing import List, Literal, Optional

from pydantic import Field

from .base import BaseCalculator, Count, Dimension, MeasurementInput, SubEntity, is_positive

# price per roll, by wire type and gauge (AWG)
WIRE_PRICES = {
    "nm-b": {14: 89.98, 12: 109.98, 10: 159.98, 8: 249.98, 6: 399.98},
    "thhn": {14: 49.98, 12: 69.98, 10: 99.98, 8: 159.98, 6: 259.98},
    "ser": {6: 299.98, 8: 199.98},
    "uf-b": {14: 119.98, 12: 149.98, 10: 199.98, 8: 299.98, 6: 449.98},
}
WIRE_ROLL_FT = {"ser": 125, "thhn": 500}
DEFAULT_ROLL_FT = 250
WIRE_SLACK = 1.2

# per 10 ft piece, by conduit type and trade size (in)
CONDUIT_PRICES = {
    "emt": {0.5: 4.98, 0.75: 6.98, 1: 8.98},
    "pvc": {0.5: 3.98, 0.75: 5.98, 1: 7.98},
    "flex": {0.5: 12.98, 0.75: 15.98, 1: 19.98},
}
CONDUIT_PIECE_FT = 10
CONDUIT_OVERAGE = 1.1
CONDUIT_FITTING_PRICE = 1.98
FITTINGS_PER_PIECE = 2

PANEL_PRICES = {
    100: {20: 89.98, 30: 119.98, 40: 149.98},
    150: {20: 119.98, 30: 149.98, 40: 179.98},
    200: {20: 149.98, 30: 179.98, 40: 209.98},
}
GROUND_ROD = (2, 12.98)
GROUND_CLAMP = (2, 4.98)
GROUND_WIRE = 20.98   # 25 ft of #6 bare copper

GFCI_PRICE = 19.98
RECEPTACLE_PRICE = 3.98
DEVICES_PER_GFCI = 4
SWITCH_PRICE = 4.98
BOX_PRICES = {"lighting": 0.98}
BOX_DEFAULT_PRICE = 1.98

BREAKER_HIGH_AMP = 24.98   # 30A and up
BREAKER_AFCI = 39.98
BREAKER_STANDARD = 8.98


class Circuit(SubEntity):
    type: Literal["lighting", "receptacle", "appliance", "hvac"] = "lighting"
    amperage: Literal[15, 20, 30, 40, 50] = 15
    voltage: Literal[120, 240] = 120
    length: Dimension = None
    wire_gauge: Literal[14, 12, 10, 8, 6] = 14
    wire_type: Literal["nm-b", "thhn", "ser", "uf-b"] = "nm-b"
    conduit: bool = False
    conduit_type: Optional[Literal["emt", "pvc", "flex"]] = None
    conduit_size: Optional[float] = None
    device_count: Count = 0
    box_count: Count = 0

    def roll_length(self) -> int:
        return WIRE_ROLL_FT.get(self.wire_type, DEFAULT_ROLL_FT)


class ElectricalInput(MeasurementInput):
    circuits: List[Circuit] = []
    include_panel: bool = False
    panel_size: Literal[100, 150, 200] = 200
    panel_spaces: Literal[20, 30, 40] = 30
    include_ground_rods: bool = True
    # persisted as includeGFCI / includeAFCI
    include_gfci: bool = Field(True, alias="includeGFCI")
    include_afci: bool = Field(True, alias="includeAFCI")


class ElectricalCalculator(BaseCalculator):

    calculator_type = "electrical"
    input_model = ElectricalInput

    def missing_fields(self, inputs: ElectricalInput) -> list:
        if not inputs.circuits:
            return ["circuits"]
        missing = []
        for i, circuit in enumerate(inputs.circuits):
            if not is_positive(circuit.length):
                missing.append(f"circuits[{i}].length")
            if circuit.wire_gauge not in WIRE_PRICES[circuit.wire_type]:
                missing.append(f"circuits[{i}].wire_gauge")
            if circuit.conduit:
                if circuit.conduit_type is None:
                    missing.append(f"circuits[{i}].conduit_type")
                elif circuit.conduit_size not in CONDUIT_PRICES[circuit.conduit_type]:
                    missing.append(f"circuits[{i}].conduit_size")
        return missing

    def breaker_price(self, circuit: Circuit, afci: bool) -> float:
        if circuit.amperage >= 30:
            return BREAKER_HIGH_AMP
        return BREAKER_AFCI if afci else BREAKER_STANDARD

    def compute(self, inputs: ElectricalInput, resolver) -> list:
        items = []

        # 1. Panel + grounding
        if inputs.include_panel:
            name = f"{inputs.panel_size}A Panel ({inputs.panel_spaces} spaces)"
            price = resolver.resolve_price(name, PANEL_PRICES[inputs.panel_size][inputs.panel_spaces], "panels")
            items.append(self.line_item(name, 1, "panel", price))

            if inputs.include_ground_rods:
                rods, rod_price = GROUND_ROD
                clamps, clamp_price = GROUND_CLAMP
                cost = (rods * resolver.resolve_price("Ground Rod", rod_price, "grounding")
                        + clamps * resolver.resolve_price("Ground Rod Clamp", clamp_price, "grounding")
                        + resolver.resolve_price("Ground Wire", GROUND_WIRE, "grounding"))
                items.append(self.line_item("Grounding System", 1, "set", cost))

        # 2. Circuits
        for circuit in inputs.circuits:
            wire_name = f"{circuit.wire_gauge} AWG {circuit.wire_type.upper()} Wire"
            roll_ft = resolver.resolve_unit_value(wire_name, circuit.roll_length(), "wire")
            conductors = 3 if circuit.voltage == 240 else 2
            rolls = self.units_needed(circuit.length * conductors * WIRE_SLACK / roll_ft)
            price = resolver.resolve_price(wire_name, WIRE_PRICES[circuit.wire_type][circuit.wire_gauge], "wire")
            items.append(self.line_item(wire_name, rolls, f"{roll_ft:g}ft rolls", rolls * price))

            if circuit.conduit:
                conduit_name = f'{circuit.conduit_size:g}" {circuit.conduit_type.upper()} Conduit'
                pieces = self.units_needed(self.units_needed(circuit.length * CONDUIT_OVERAGE) / CONDUIT_PIECE_FT)
                price = resolver.resolve_price(
                    conduit_name, CONDUIT_PRICES[circuit.conduit_type][circuit.conduit_size], "conduit")
                items.append(self.line_item(conduit_name, pieces, "10ft lengths", pieces * price))

                fittings = pieces * FITTINGS_PER_PIECE
                price = resolver.resolve_price("Conduit Fitting", CONDUIT_FITTING_PRICE, "conduit")
                items.append(self.line_item("Conduit Fittings", fittings, "pieces", fittings * price))

            if circuit.device_count > 0:
                if circuit.type == "receptacle":
                    gfci = self.units_needed(circuit.device_count / DEVICES_PER_GFCI) if inputs.include_gfci else 0
                    standard = circuit.device_count - gfci
                    cost = (gfci * resolver.resolve_price("GFCI Receptacle", GFCI_PRICE, "devices")
                            + standard * resolver.resolve_price("Receptacle", RECEPTACLE_PRICE, "devices"))
                elif circuit.type == "lighting":
                    cost = circuit.device_count * resolver.resolve_price("Switch", SWITCH_PRICE, "devices")
                else:
                    cost = 0.0
                items.append(self.line_item(f"{circuit.type.capitalize()} Devices", circuit.device_count,
                                            "pieces", cost))

            if circuit.box_count > 0:
                price = resolver.resolve_price("Electrical Box", BOX_PRICES.get(circuit.type, BOX_DEFAULT_PRICE),
                                               "boxes")
                items.append(self.line_item("Electrical Boxes", circuit.box_count, "pieces",
                                            circuit.box_count * price))

            breaker = f"{circuit.amperage}A Circuit Breaker"

            if inputs.include_afci:
                breaker += " (AFCI)"
            price = resolver.resolve_price(breaker, self.breaker_price(circuit, inputs.include_afci), "breakers")
            items.append(self.line_item(breaker, 1, "piece", price))

        return items
