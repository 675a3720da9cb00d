"""
Fence material calculator.

Standard mode:
  posts = ceil(length / spacing) + 1 + corners
  infill by fence type: panels (8 ft), pickets (2 per ft), chain-link fabric (sq yd)
  rails = ceil(length / 8) x rails per section (not for panel fences)
  gates priced individually, hardware optional
Custom mode bypasses all geometry: linear feet x price per foot.
"""

from typing import List, Literal

from .base import BaseCalculator, Dimension, MeasurementInput, SubEntity, is_positive, is_set

# fence type -> material -> component -> price
MATERIAL_PRICES = {
    "privacy": {
        "wood": {"panel": 45.98, "post": 24.98, "rail": 12.98, "cap": 4.98},
        "vinyl": {"panel": 89.98, "post": 34.98, "rail": 19.98, "cap": 6.98},
        "metal": {"panel": 79.98, "post": 29.98, "rail": 16.98, "cap": 5.98},
        "composite": {"panel": 129.98, "post": 49.98, "rail": 24.98, "cap": 8.98},
    },
    "picket": {
        "wood": {"picket": 2.98, "post": 19.98, "rail": 9.98, "cap": 3.98},
        "vinyl": {"picket": 4.98, "post": 29.98, "rail": 14.98, "cap": 5.98},
        "metal": {"picket": 3.98, "post": 24.98, "rail": 12.98, "cap": 4.98},
        "composite": {"picket": 6.98, "post": 39.98, "rail": 19.98, "cap": 7.98},
    },
    "chain-link": {
        "metal": {"fabric": 5.98, "post": 19.98, "rail": 8.98, "cap": 2.98},
    },
    "ranch": {
        "wood": {"rail": 14.98, "post": 24.98, "cap": 4.98},
        "vinyl": {"rail": 24.98, "post": 34.98, "cap": 6.98},
    },
    "panel": {
        "wood": {"panel": 69.98, "post": 24.98, "cap": 4.98},
        "vinyl": {"panel": 129.98, "post": 34.98, "cap": 6.98},
        "composite": {"panel": 189.98, "post": 49.98, "cap": 8.98},
    },
}

GATE_PRICES = {
    "single": {"wood": 129.98, "vinyl": 199.98, "metal": 169.98, "composite": 249.98},
    "double": {"wood": 249.98, "vinyl": 399.98, "metal": 329.98, "composite": 499.98},
    "rolling": {"wood": 399.98, "vinyl": 599.98, "metal": 499.98, "composite": 799.98},
}
GATE_HARDWARE_PRICES = {"single": 49.98, "double": 89.98, "rolling": 149.98}
GATE_DEFAULT_WIDTHS = {"single": 36.0, "double": 72.0, "rolling": 120.0}

SECTION_LENGTH_FT = 8
PICKETS_PER_FOOT = 2
CONCRETE_CU_FT_PER_INCH = 0.33   # 12" diameter hole
CONCRETE_BAGS_PER_CU_YD = 4      # 60lb bags
CONCRETE_BAG_PRICE = 6.98
SPIKE_PRICE = 12.98
BRACKET_PRICE = 14.98
KICKBOARD_PRICE = 8.98


class Gate(SubEntity):
    type: Literal["single", "double", "rolling"] = "single"
    material: Literal["wood", "vinyl", "metal", "composite"] = "wood"
    width: Dimension = None    # inches
    height: Dimension = None   # inches
    include_hardware: bool = True

    @classmethod
    def new(cls, gate_type: str = "single", material: str = "wood", height: float = 72.0) -> "Gate":
        return cls(type=gate_type, material=material, width=GATE_DEFAULT_WIDTHS[gate_type], height=height)


class Corner(SubEntity):
    angle: float = 90.0


class FenceInput(MeasurementInput):
    mode: Literal["standard", "custom"] = "standard"
    fence_type: Literal["privacy", "picket", "chain-link", "ranch", "panel"] = "privacy"
    material: Literal["wood", "vinyl", "metal", "composite"] = "wood"
    length: Dimension = None   # feet
    height: Dimension = None   # feet
    post_spacing: Literal[6, 8] = 8
    gates: List[Gate] = []
    corners: List[Corner] = []
    slope_type: Literal["level", "stepping", "racking"] = "level"
    slope_percentage: Dimension = None
    include_post_caps: bool = True
    include_kickboard: bool = False
    post_mount_type: Literal["concrete", "spike", "bracket"] = "concrete"
    concrete_depth: Dimension = None   # inches
    custom_linear_feet: Dimension = None
    custom_price_per_foot: Dimension = None


def title(word: str) -> str:
    return word[:1].upper() + word[1:]


class FenceCalculator(BaseCalculator):

    calculator_type = "fence"
    input_model = FenceInput

    def missing_fields(self, inputs: FenceInput) -> list:
        missing = []
        if inputs.mode == "custom":
            if not is_set(inputs.custom_linear_feet):
                missing.append("custom_linear_feet")
            if not is_set(inputs.custom_price_per_foot):
                missing.append("custom_price_per_foot")
            return missing
        if not is_set(inputs.length):
            missing.append("length")
        if not is_set(inputs.height):
            missing.append("height")
        if inputs.post_mount_type == "concrete" and not is_positive(inputs.concrete_depth):
            missing.append("concrete_depth")
        if inputs.material not in MATERIAL_PRICES[inputs.fence_type]:
            missing.append("material")
        return missing

    def compute(self, inputs: FenceInput, resolver) -> list:
        if inputs.mode == "custom":
            return self._custom(inputs)

        items = []
        length = inputs.length
        prices = MATERIAL_PRICES[inputs.fence_type][inputs.material]
        material = title(inputs.material)

        # 1. Posts
        post_count = self.units_needed(length / inputs.post_spacing) + 1 + len(inputs.corners)
        post_price = resolver.resolve_price(f"{material} Post", prices["post"], "posts")
        items.append(self.line_item(f"{material} Posts", post_count, "posts", post_count * post_price))

        # 2. Post caps
        if inputs.include_post_caps:
            cap_price = resolver.resolve_price(f"{material} Post Cap", prices["cap"], "posts")
            items.append(self.line_item("Post Caps", post_count, "caps", post_count * cap_price))

        # 3. Post mounting
        if inputs.post_mount_type == "concrete":
            per_post = inputs.concrete_depth * CONCRETE_CU_FT_PER_INCH
            total_cu_yd = per_post * post_count / 27
            bags = self.units_needed(total_cu_yd * CONCRETE_BAGS_PER_CU_YD)
            bag_price = resolver.resolve_price("Concrete Mix", CONCRETE_BAG_PRICE, "concrete")
            items.append(self.line_item("Concrete Mix", bags, "60lb bags", bags * bag_price))
        elif inputs.post_mount_type == "spike":
            price = resolver.resolve_price("Post Spike", SPIKE_PRICE, "hardware")
            items.append(self.line_item("Post Spikes", post_count, "pieces", post_count * price))
        else:
            price = resolver.resolve_price("Post Mounting Bracket", BRACKET_PRICE, "hardware")
            items.append(self.line_item("Post Mounting Brackets", post_count, "pieces", post_count * price))

        # 4. Infill
        sections = self.units_needed(length / SECTION_LENGTH_FT)
        if inputs.fence_type in ("privacy", "panel"):
            price = resolver.resolve_price(f"{material} Panel", prices["panel"], "panels")
            items.append(self.line_item(f"{material} Panels", sections, "8ft panels", sections * price))
        elif inputs.fence_type == "picket":
            pickets = self.units_needed(length * PICKETS_PER_FOOT)
            price = resolver.resolve_price(f"{material} Picket", prices["picket"], "pickets")
            items.append(self.line_item(f"{material} Pickets", pickets, "pickets", pickets * price))
        elif inputs.fence_type == "chain-link":
            square_yards = self.units_needed(length * inputs.height / 9)
            price = resolver.resolve_price("Chain Link Fabric", prices["fabric"], "fabric")
            items.append(self.line_item("Chain Link Fabric", square_yards, "square yards", square_yards * price))

        # 5. Rails
        if inputs.fence_type != "panel":
            rails_per_section = 3 if inputs.fence_type == "ranch" else 2
            rails = sections * rails_per_section
            price = resolver.resolve_price(f"{material} Rail", prices["rail"], "rails")
            items.append(self.line_item(f"{material} Rails", rails, "8ft pieces", rails * price))

        # 6. Kickboard
        if inputs.include_kickboard:
            price = resolver.resolve_price("Kickboard", KICKBOARD_PRICE, "rails")
            items.append(self.line_item("Kickboard", sections, "8ft pieces", sections * price))

        # 7. Gates
        for gate in inputs.gates:
            gate_name = f"{title(gate.type)} Gate"
            price = resolver.resolve_price(
                f"{title(gate.material)} {gate_name}", GATE_PRICES[gate.type][gate.material], "gates")
            items.append(self.line_item(gate_name, 1, "unit", price))
            if gate.include_hardware:
                hw_price = resolver.resolve_price(
                    f"{gate_name} Hardware", GATE_HARDWARE_PRICES[gate.type], "hardware")
                items.append(self.line_item(f"{gate_name} Hardware", 1, "set", hw_price))


        items.append(self.total_line(items))
        return items

    def _custom(self, inputs: FenceInput) -> list:
        feet = inputs.custom_linear_feet
        cost = feet * inputs.custom_price_per_foot
        items = [self.line_item("Custom Fence Installation", feet, "linear feet", cost)]
        items.append(self.total_line(items))
        return items
