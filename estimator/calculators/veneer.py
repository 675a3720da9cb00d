"""
Veneer calculator. Installed cost is quoted per square foot of wall face.
"""

from .base import BaseCalculator, Dimension, MeasurementInput, is_set


class VeneerInput(MeasurementInput):
    length: Dimension = None          # feet
    height: Dimension = None          # feet
    cost_per_sq_ft: Dimension = None


class VeneerCalculator(BaseCalculator):

    calculator_type = "veneer"
    input_model = VeneerInput

    def missing_fields(self, inputs: VeneerInput) -> list:
        return [name for name in ("length", "height", "cost_per_sq_ft") if not is_set(getattr(inputs, name))]

    def compute(self, inputs: VeneerInput, resolver) -> list:
        square_footage = inputs.length * inputs.height
        items = [
            self.line_item("Total Square Footage", square_footage, "sq ft"),
            self.line_item("Veneer Materials", square_footage, "sq ft", square_footage * inputs.cost_per_sq_ft),
        ]
        items.append(self.total_line(items))
        return items
