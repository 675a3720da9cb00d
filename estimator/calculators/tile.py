"""
Tile material calculator.

Area from floor (L x W), wall (L x H) or a direct entry, minus openings.
area_with_waste = area x (1 + waste%) x pattern multiplier
tiles = ceil(area_with_waste / tile sq ft), boxes = ceil(tiles / pieces per box)
Setting materials (mortar, grout) use area_with_waste; substrate (backer
board, membrane) uses the net area.
"""

from typing import List, Literal

from .base import BaseCalculator, Dimension, MeasurementInput, SubEntity, is_positive, is_set

PATTERN_MULTIPLIERS = {
    "straight": 1.1,
    "diagonal": 1.15,
    "herringbone": 1.2,
    "brick": 1.1,
    "basketweave": 1.15,
}

MORTAR_SQFT_PER_BAG = 90
MORTAR_PRICES = {"modified": 24.98, "unmodified": 19.98, "epoxy": 89.98}

GROUT_COVERAGE = {0.125: 200, 0.25: 150, 0.375: 100}   # sq ft per bag, by joint width (in)
GROUT_PRICES = {"sanded": 19.98, "unsanded": 22.98, "epoxy": 79.98}

BACKER_BOARD_SQFT = 32
BACKER_BOARD_PRICES = {"1/4": 15.98, "1/2": 19.98}
SCREWS_PER_SHEET = 30
SCREW_BOX = (100, 12.98)

MEMBRANE_ROLL = (100, 89.98)

EDGE_PIECE_FT = 8
EDGING_PRICES = {"metal": 12.98, "stone": 24.98}


class TileOpening(SubEntity):
    type: Literal["door", "window", "cabinet", "custom"] = "door"
    width: Dimension = 0.0    # feet
    height: Dimension = 0.0   # feet


class TileInput(MeasurementInput):
    surface_type: Literal["floor", "wall"] = "floor"
    input_type: Literal["dimensions", "area"] = "dimensions"
    length: Dimension = None
    width: Dimension = None
    height: Dimension = None
    area: Dimension = None
    tile_width: Dimension = 12.0     # inches
    tile_length: Dimension = 12.0    # inches
    pieces_per_box: int = 12
    price_per_box: Dimension = 45.98
    pattern: Literal["straight", "diagonal", "herringbone", "brick", "basketweave"] = "straight"
    grout_width: float = 0.25             # inches
    openings: List[TileOpening] = []
    waste_factor: Dimension = 15.0
    include_backer_board: bool = True
    backer_board_thickness: Literal["1/4", "1/2"] = "1/4"
    mortar_type: Literal["modified", "unmodified", "epoxy"] = "modified"
    grout_type: Literal["sanded", "unsanded", "epoxy"] = "sanded"
    include_membrane: bool = False
    include_edging: bool = True
    edging_type: Literal["metal", "stone"] = "metal"


def capitalized(word: str) -> str:
    return word[:1].upper() + word[1:]


class TileCalculator(BaseCalculator):

    calculator_type = "tile"
    input_model = TileInput

    def missing_fields(self, inputs: TileInput) -> list:
        missing = []
        if inputs.input_type == "area":
            if not is_set(inputs.area):
                missing.append("area")
        else:
            if not is_set(inputs.length):
                missing.append("length")
            second = "width" if inputs.surface_type == "floor" else "height"
            if not is_set(getattr(inputs, second)):
                missing.append(second)
        if not is_positive(inputs.tile_width):
            missing.append("tile_width")
        if not is_positive(inputs.tile_length):
            missing.append("tile_length")
        if inputs.pieces_per_box < 1:
            missing.append("pieces_per_box")
        if not is_set(inputs.price_per_box):
            missing.append("price_per_box")
        if inputs.grout_width not in GROUT_COVERAGE:
            missing.append("grout_width")
        return missing

    def surface_area(self, inputs: TileInput) -> float:
        if inputs.input_type == "area":
            area = inputs.area
        elif inputs.surface_type == "wall":
            area = inputs.length * inputs.height
        else:
            area = inputs.length * inputs.width
        openings = sum((o.width or 0) * (o.height or 0) for o in inputs.openings)
        return max(area - openings, 0.0)

    def compute(self, inputs: TileInput, resolver) -> list:
        items = []
        area = self.surface_area(inputs)
        waste = inputs.waste_factor or 0
        area_with_waste = self.apply_waste(area, waste) * PATTERN_MULTIPLIERS[inputs.pattern]

        # 1. Area
        items.append(self.line_item("Total Surface Area", area, "square feet"))
        items.append(self.line_item(f"Area with {waste:g}% Waste & {inputs.pattern} Pattern",
                                    area_with_waste, "square feet"))

        # 2. Tile
        tile_name = f'Tile ({inputs.tile_width:g}"x{inputs.tile_length:g}")'
        tile_sqft = inputs.tile_width * inputs.tile_length / 144
        tiles = self.units_needed(area_with_waste / tile_sqft)
        boxes = self.units_needed(tiles / inputs.pieces_per_box)
        box_price = resolver.resolve_price(tile_name, inputs.price_per_box, "tile")
        items.append(self.line_item(tile_name, boxes, "boxes", boxes * box_price))

        # 3. Mortar
        mortar_name = f"{capitalized(inputs.mortar_type)} Mortar"
        coverage = resolver.resolve_unit_value(mortar_name, MORTAR_SQFT_PER_BAG, "setting materials")
        bags = self.units_needed(area_with_waste / coverage)
        price = resolver.resolve_price(mortar_name, MORTAR_PRICES[inputs.mortar_type], "setting materials")
        items.append(self.line_item(mortar_name, bags, "50lb bags", bags * price))

        # 4. Grout
        grout_name = f"{capitalized(inputs.grout_type)} Grout"
        bags = self.units_needed(area_with_waste / GROUT_COVERAGE[inputs.grout_width])
        price = resolver.resolve_price(grout_name, GROUT_PRICES[inputs.grout_type], "setting materials")
        items.append(self.line_item(f'{grout_name} ({inputs.grout_width:g}" joints)', bags, "25lb bags",
                                    bags * price))

        # 5. Backer board + screws
        if inputs.include_backer_board:
            board_name = f'{inputs.backer_board_thickness}" Backer Board'
            sheets = self.units_needed(area / BACKER_BOARD_SQFT)
            price = resolver.resolve_price(board_name, BACKER_BOARD_PRICES[inputs.backer_board_thickness],
                                           "substrate")
            items.append(self.line_item(board_name, sheets, "3x5 sheets", sheets * price))

            per_box = resolver.resolve_unit_value("Backer Board Screws", SCREW_BOX[0], "fasteners")
            screw_boxes = self.units_needed(sheets * SCREWS_PER_SHEET / per_box)
            price = resolver.resolve_price("Backer Board Screws", SCREW_BOX[1], "fasteners")
            items.append(self.line_item("Backer Board Screws", screw_boxes, "100ct boxes", screw_boxes * price))

        # 6. Membrane
        if inputs.include_membrane:
            roll_sqft = resolver.resolve_unit_value("Waterproof Membrane", MEMBRANE_ROLL[0], "substrate")
            rolls = self.units_needed(area / roll_sqft)
            price = resolver.resolve_price("Waterproof Membrane", MEMBRANE_ROLL[1], "substrate")
            items.append(self.line_item("Waterproof Membrane", rolls, "100sf rolls", rolls * price))

        # 7. Edging needs both length and width regardless of surface
        if inputs.include_edging and is_set(inputs.length) and is_set(inputs.width):
            if inputs.surface_type == "floor":
                edge_length = 2 * (inputs.length + inputs.width)
            else:
                edge_length = inputs.length + inputs.width
            edge_name = f"{capitalized(inputs.edging_type)} Edge Trim"

            pieces = self.units_needed(edge_length / EDGE_PIECE_FT)
            price = resolver.resolve_price(edge_name, EDGING_PRICES[inputs.edging_type], "trim")
            items.append(self.line_item(edge_name, pieces, "8ft pieces", pieces * price))

        items.append(self.total_line(items))
        return items
