"""
Foundation material calculator.

Every group works off one shared perimeter = 2(L + W) and area = L x W:
  1. footing concrete          6. steel (footing / wall / slab, sized independently)
  2. stem or basement wall     7. vapor barrier
  3. backfill (not basements)  8. waterproofing
  4. gravel base               9. drainage pipe + gravel
  5. slab concrete            10. ICF walls (blocks + core concrete), optional
All concrete shares one strength-indexed price per cubic yard.
"""

from typing import Literal

from .base import BaseCalculator, Dimension, MeasurementInput, is_positive, is_set

CONCRETE_PRICES = {3000: 125.0, 3500: 135.0, 4000: 145.0, 4500: 155.0}  # per yd3
BACKFILL_PRICES = {"native": 15.0, "gravel": 45.0, "sand": 35.0}         # per yd3
GRAVEL_PRICE = 45.0                                                     # per yd3

REBAR_PRICES = {"#3": 8.98, "#4": 12.98, "#5": 18.98}  # per 20 ft bar
REBAR_BAR_LENGTH = 20.0
WALL_VERTICAL_SPACING_IN = 16
WALL_VERTICAL_EMBED_FT = 2

VAPOR_BARRIER_ROLL_SQFT = 1000
VAPOR_BARRIER_PRICE = 89.98
WATERPROOFING_SQFT_PER_GAL = 100
WATERPROOFING_PRICE = 45.98
DRAIN_PIPE_SECTION_FT = 10
DRAIN_PIPE_PRICE = 12.98
OVERLAP = 1.1

ICF_BLOCK_SQFT = 5.33     # face area of one standard 16" x 48" block
ICF_BLOCK_WASTE = 1.05
ICF_BLOCK_PRICES = {6: 24.98, 8: 27.98, 10: 31.98}  # by core thickness (in)


class FoundationInput(MeasurementInput):
    foundation_type: Literal["strip-footing", "spread-footings", "thickened-edge", "frost-wall"] = "strip-footing"
    is_basement: bool = False
    length: Dimension = None
    width: Dimension = None
    footing_width: Dimension = None        # inches
    footing_depth: Dimension = None        # inches
    stem_wall_height: Dimension = None     # feet
    stem_wall_thickness: Dimension = None  # inches
    slab_thickness: Dimension = None       # inches
    gravel_base_depth: Dimension = None    # inches
    soil_type: Literal["sandy", "clay", "rock"] = "clay"
    backfill_type: Literal["native", "gravel", "sand"] = "gravel"
    frost_depth: Dimension = None
    include_vapor_barrier: bool = True
    include_steel_reinforcement: bool = True
    rebar_size: Literal["#3", "#4", "#5"] = "#4"
    rebar_spacing: Literal[12, 16, 18] = 16
    include_waterproofing: bool = True
    include_drainage: bool = True
    concrete_strength: Literal[3000, 3500, 4000, 4500] = 3500
    include_icf: bool = False
    icf_wall_length: Dimension = None   # feet, defaults to the perimeter
    icf_wall_height: Dimension = None   # feet
    icf_core_thickness: Literal[6, 8, 10] = 6


REQUIRED_FIELDS = (
    "length", "width", "footing_width", "footing_depth",
    "stem_wall_height", "stem_wall_thickness", "slab_thickness", "gravel_base_depth",
)


class FoundationCalculator(BaseCalculator):

    calculator_type = "foundation"
    input_model = FoundationInput

    def missing_fields(self, inputs: FoundationInput) -> list:
        missing = [name for name in REQUIRED_FIELDS if not is_set(getattr(inputs, name))]
        if inputs.include_icf and not is_positive(inputs.icf_wall_height):
            missing.append("icf_wall_height")
        return missing

    def compute(self, inputs: FoundationInput, resolver) -> list:
        items = []
        length, width = inputs.length, inputs.width
        perimeter = 2 * (length + width)
        area = length * width
        strength = inputs.concrete_strength
        wall = "Basement" if inputs.is_basement else "Stem"

        concrete_price = resolver.resolve_price(
            f"{strength} PSI Concrete", CONCRETE_PRICES[strength], "concrete")
        gravel_price = resolver.resolve_price("Gravel", GRAVEL_PRICE, "aggregate")

        # 1. Footing
        footing_volume = perimeter * (inputs.footing_width / 12) * (inputs.footing_depth / 12) / 27
        items.append(self.line_item(f"Footing Concrete ({strength} PSI)", footing_volume, "cubic yards",
                                    footing_volume * concrete_price))

        # 2. Stem / basement wall
        wall_volume = perimeter * inputs.stem_wall_height * (inputs.stem_wall_thickness / 12) / 27
        items.append(self.line_item(f"{wall} Wall Concrete ({strength} PSI)", wall_volume, "cubic yards",
                                    wall_volume * concrete_price))

        # 3. Backfill inside the stem walls, up to the underside of the gravel
        if not inputs.is_basement:
            wall_ft = inputs.stem_wall_thickness / 12
            interior_area = (length - wall_ft * 2) * (width - wall_ft * 2)
            fill_height = inputs.stem_wall_height - (inputs.slab_thickness / 12 + inputs.gravel_base_depth / 12)
            backfill_volume = max(interior_area * fill_height / 27, 0.0)
            name = f"{inputs.backfill_type.title()} Backfill"
            price = resolver.resolve_price(name, BACKFILL_PRICES[inputs.backfill_type], "aggregate")
            items.append(self.line_item(name, backfill_volume, "cubic yards", backfill_volume * price))

        # 4. Gravel base
        gravel_volume = area * (inputs.gravel_base_depth / 12) / 27
        items.append(self.line_item("Gravel Base", gravel_volume, "cubic yards", gravel_volume * gravel_price))

        # 5. Slab
        slab_volume = area * (inputs.slab_thickness / 12) / 27
        slab_label = "Basement Floor" if inputs.is_basement else "Slab"
        items.append(self.line_item(f"{slab_label} Concrete ({strength} PSI)",
                                    slab_volume, "cubic yards", slab_volume * concrete_price))

        # 6. Steel
        if inputs.include_steel_reinforcement:
            bar_price = resolver.resolve_price(f"{inputs.rebar_size} Rebar",
                                               REBAR_PRICES[inputs.rebar_size], "reinforcement")

            footing_pieces = self.units_needed(perimeter * 2 / REBAR_BAR_LENGTH)
            items.append(self.line_item("Footing Rebar", footing_pieces, "20ft pieces", footing_pieces * bar_price))

            vertical_bars = self.units_needed(perimeter * 12 / WALL_VERTICAL_SPACING_IN)
            vertical_length = inputs.stem_wall_height + WALL_VERTICAL_EMBED_FT
            vertical_pieces = self.units_needed(vertical_bars * vertical_length / REBAR_BAR_LENGTH)
            horizontal_pieces = self.units_needed(perimeter * 2 / REBAR_BAR_LENGTH)
            wall_pieces = vertical_pieces + horizontal_pieces
            items.append(self.line_item(f"{wall} Wall Rebar", wall_pieces, "20ft pieces", wall_pieces * bar_price))

            spacing_ft = inputs.rebar_spacing / 12
            longitudinal = self.units_needed(width / spacing_ft) + 1
            transverse = self.units_needed(length / spacing_ft) + 1
            slab_rebar_length = longitudinal * length + transverse * width
            slab_pieces = self.units_needed(slab_rebar_length / REBAR_BAR_LENGTH)
            slab_rebar = "Floor" if inputs.is_basement else "Slab"
            items.append(self.line_item(f'{slab_rebar} Rebar ({inputs.rebar_spacing}" o.c.)',
                                        slab_pieces, "20ft pieces", slab_pieces * bar_price))

        # 7. Vapor barrier
        if inputs.include_vapor_barrier:
            roll_sqft = resolver.resolve_unit_value("10-mil Vapor Barrier", VAPOR_BARRIER_ROLL_SQFT, "membranes")
            rolls = self.units_needed(area * OVERLAP / roll_sqft)
            price = resolver.resolve_price("10-mil Vapor Barrier", VAPOR_BARRIER_PRICE, "membranes")
            items.append(self.line_item("10-mil Vapor Barrier", rolls, f"{roll_sqft:g} sf rolls", rolls * price))

        # 8. Waterproofing
        if inputs.include_waterproofing:
            coverage = resolver.resolve_unit_value("Waterproofing Membrane", WATERPROOFING_SQFT_PER_GAL, "membranes")
            gallons = self.units_needed(perimeter * inputs.stem_wall_height * OVERLAP / coverage)
            price = resolver.resolve_price("Waterproofing Membrane", WATERPROOFING_PRICE, "membranes")
            items.append(self.line_item("Waterproofing Membrane", gallons, "gallons", gallons * price))

        # 9. Drainage
        if inputs.include_drainage:
            pipe_ft = self.units_needed(perimeter * OVERLAP)
            sections = self.units_needed(pipe_ft / DRAIN_PIPE_SECTION_FT)
            price = resolver.resolve_price("Drainage Pipe", DRAIN_PIPE_PRICE, "drainage")
            items.append(self.line_item("Drainage Pipe", sections, "10ft sections", sections * price))

            # 2 ft x 2 ft trench of gravel around the perimeter
            drain_gravel = perimeter * 2 * 2 / 27
            items.append(self.line_item("Drainage Gravel", drain_gravel, "cubic yards", drain_gravel * gravel_price))

        # 10. ICF walls
        if inputs.include_icf:
            wall_length = inputs.icf_wall_length if is_positive(inputs.icf_wall_length) else perimeter
            wall_area = wall_length * inputs.icf_wall_height
            core = inputs.icf_core_thickness
            block_name = f'{core}" ICF Block'
            block_sqft = resolver.resolve_unit_value(block_name, ICF_BLOCK_SQFT, "icf")
            blocks = self.units_needed(wall_area * ICF_BLOCK_WASTE / block_sqft)
            block_price = resolver.resolve_price(block_name, ICF_BLOCK_PRICES[core], "icf")
            items.append(self.line_item(f'ICF Blocks ({core}" core)', blocks, "blocks", blocks * block_price))

            core_volume = wall_area * (core / 12) / 27
            items.append(self.line_item(f"ICF Core Concrete ({strength} PSI)",
 core_volume, "cubic yards",
                                        core_volume * concrete_price))

        items.append(self.total_line(items))
        return items
