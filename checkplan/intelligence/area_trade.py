"""Area x trade matrix detection.

Maps every area referenced by an estimate (scope record titles and cost item
area labels) to the set of trades whose cost codes touch it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from checkplan.intelligence.context import UNNAMED_SECTION
from checkplan.models import (
    AreaTradeMatrix,
    AreaTradeScope,
    AreaType,
    MatrixArea,
    ScopeRecord,
    TradeType,
)

logger = logging.getLogger(__name__)

# Ordered: first area type with a matching keyword wins. This table differs
# from the context builder's on purpose ("bed", "primary", "guest").
AREA_TYPE_KEYWORDS: tuple[tuple[AreaType, tuple[str, ...]], ...] = (
    (AreaType.KITCHEN, ("kitchen",)),
    (AreaType.BATH, ("bath", "powder", "shower")),
    (AreaType.LIVING, ("living", "family", "great room")),
    (AreaType.BEDROOM, ("bed", "primary", "guest", "master")),
    (AreaType.HALL, ("hall", "corridor", "entry", "foyer")),
    (AreaType.EXTERIOR, ("deck", "balcony", "patio", "exterior", "porch")),
)

# Ordered: first trade with a matching keyword wins for a cost item
TRADE_PATTERNS: tuple[tuple[TradeType, tuple[str, ...]], ...] = (
    (TradeType.DEMO, ("demo", "demolition", "dem-", "haul", "abatement")),
    (
        TradeType.PLUMBING,
        ("plumb", "pl-", "fixture", "faucet", "toilet", "sink", "drain", "pipe", "valve", "water heater"),
    ),
    (
        TradeType.ELECTRICAL,
        ("elec", "el-", "lighting", "light", "panel", "circuit", "wire", "outlet", "switch", "gfci", "afci"),
    ),
    (
        TradeType.HVAC,
        ("hvac", "mechanical", "furnace", "ac", "duct", "mini split", "heat pump", "vent", "exhaust"),
    ),
    (TradeType.CABINETS, ("cab", "cabinet", "cabs")),
    (
        TradeType.COUNTERTOPS,
        ("ct-", "counter", "quartz", "granite", "marble", "stone", "solid surface", "laminate top"),
    ),
    (
        TradeType.FLOORING,
        ("flr", "floor", "lvp", "lvt", "engineered", "hardwood", "carpet", "vinyl plank"),
    ),
    (TradeType.FLOOR_LEVELING, ("level", "floor level", "self-level", "gypcrete", "underlayment")),
    (TradeType.TILE, ("tile", "ceramic", "porcelain", "mosaic", "backsplash")),
    (
        TradeType.WATERPROOFING,
        ("waterproof", "hot mop", "pan liner", "schluter", "kerdi", "redguard", "laticrete", "membrane"),
    ),
    (TradeType.PAINT, ("paint", "pnt", "primer", "finish coat", "stain", "lacquer")),
    (TradeType.FRAMING, ("fram", "frm", "stud", "header", "beam", "structural", "lvl", "post", "joist")),
    (TradeType.DRYWALL, ("drywall", "drw", "gypsum", "sheetrock", "texture", "tape and mud")),
    (TradeType.INSULATION, ("insul", "ins-", "batt", "blown", "foam", "r-value")),
    (TradeType.ROOFING, ("roof", "shingle", "flashing", "gutter")),
    (TradeType.WINDOWS, ("window", "wnd", "glazing", "skylight")),
    (TradeType.DOORS, ("door", "dr-", "entry", "slider", "pocket door", "bi-fold")),
    (
        TradeType.APPLIANCES,
        ("appl", "appliance", "range", "oven", "dishwasher", "refrigerator", "microwave", "hood"),
    ),
    (TradeType.TRIM, ("trim", "molding", "baseboard", "crown", "casing", "millwork")),
    (TradeType.HARDWARE, ("hardware", "hdw", "knob", "pull", "hinge")),
)


def detect_area_type_from_text(text: str | None) -> AreaType:
    lower = (text or "").lower()
    for area_type, keywords in AREA_TYPE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return area_type
    return AreaType.OTHER


def detect_trade(code: str | None, name: str | None) -> TradeType | None:
    """Classify a cost code into a trade.

    Args:
        code: Cost code (e.g. "PL-200")
        name: Cost code name (e.g. "Linear drain")

    Returns:
        First trade whose keyword list matches, or None
    """
    search_text = f"{code or ''} {name or ''}".lower()
    for trade, patterns in TRADE_PATTERNS:
        if any(pattern in search_text for pattern in patterns):
            return trade
    return None


@dataclass
class _MatrixBuilder:
    areas: list[MatrixArea] = field(default_factory=list)
    trades_by_area: dict[str, list[TradeType]] = field(default_factory=dict)

    def add_area(self, key: str, scope_record_id: str) -> None:
        if key in self.trades_by_area:
            return
        self.areas.append(
            MatrixArea(key=key, type=detect_area_type_from_text(key), scope_record_id=scope_record_id)
        )
        self.trades_by_area[key] = []

    def add_trade(self, key: str, trade: TradeType) -> None:
        trades = self.trades_by_area.get(key)
        if trades is not None and trade not in trades:
            trades.append(trade)

    def build(self) -> AreaTradeMatrix:
        return AreaTradeMatrix(
            areas=list(self.areas),
            area_trade_scopes=[
                AreaTradeScope(area_key=key, trades=list(trades))
                for key, trades in self.trades_by_area.items()
            ],
        )


def build_area_trade_matrix(scope_records: Sequence[ScopeRecord]) -> AreaTradeMatrix:
    """Build the area x trade matrix from scope records.

    Areas are keyed by record title and by cost item area label (first key
    wins). A cost item's trade is credited to its record's area and, when it
    carries a different area label, to that area too. Items without a
    recognisable trade are ignored.
    """
    builder = _MatrixBuilder()

    for record in scope_records:
        record_key = record.title or UNNAMED_SECTION
        builder.add_area(record_key, record.id)

        for item in record.cost_items:
            if item.area_label:
                builder.add_area(item.area_label, record.id)

            trade = detect_trade(item.cost_code_code, item.cost_code_name)
            if trade is None:
                continue

            builder.add_trade(record_key, trade)
            if item.area_label and item.area_label != record_key:
                builder.add_trade(item.area_label, trade)

    matrix = builder.build()
    logger.debug(
        "Built area/trade matrix: areas=%d trade_links=%d",
        len(matrix.areas),
        sum(len(scope.trades) for scope in matrix.area_trade_scopes),
    )
    return matrix


def get_trades_for_area(matrix: AreaTradeMatrix, area_key: str) -> list[TradeType]:
    for scope in matrix.area_trade_scopes:
        if scope.area_key == area_key:
            return list(scope.trades)
    return []


def area_has_trade(matrix: AreaTradeMatrix, area_key: str, trade: TradeType) -> bool:
    return trade in get_trades_for_area(matrix, area_key)


def get_areas_by_type(matrix: AreaTradeMatrix, area_type: AreaType) -> list[MatrixArea]:
    return [area for area in matrix.areas if area.type == area_type]


def get_area(matrix: AreaTradeMatrix, area_key: str) -> MatrixArea | None:
    return next((area for area in matrix.areas if area.key == area_key), None)


@dataclass
class MatrixSummary:
    """Display summary of an area x trade matrix."""

    total_areas: int
    total_trades: int
    area_type_counts: dict[AreaType, int]
    trade_counts: dict[TradeType, int]


def summarize_matrix(matrix: AreaTradeMatrix) -> MatrixSummary:
    """Count areas per type and, per trade, how many areas it touches."""
    area_type_counts = {area_type: 0 for area_type in AreaType}
    for area in matrix.areas:
        area_type_counts[area.type] += 1

    trade_counts: dict[TradeType, int] = {}
    for scope in matrix.area_trade_scopes:
        for trade in scope.trades:
            trade_counts[trade] = trade_counts.get(trade, 0) + 1

    return MatrixSummary(
        total_areas=len(matrix.areas),
        total_trades=len(trade_counts),
        area_type_counts=area_type_counts,
        trade_counts=trade_counts,
    )
