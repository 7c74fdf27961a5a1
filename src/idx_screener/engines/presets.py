"""Named screening presets."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from idx_screener.common.enums import Preset
from idx_screener.common.records import StockRecord
from idx_screener.engines.errors import ScreenerValidationError
from idx_screener.engines.predicates import at_least, greater_than, less_than, less_than_field


@dataclass(frozen=True)
class PresetRule:
    preset: Preset
    label: str
    description: str
    fields: tuple[str, ...]
    predicate: Callable[[StockRecord], bool]

    def __call__(self, record: StockRecord) -> bool:
        return self.predicate(record)


PRESET_RULES: dict[Preset, PresetRule] = {
    Preset.STRONG_BUY: PresetRule(
        Preset.STRONG_BUY, "Strong Buy", "score ≥ 80", ("score",),
        lambda r: at_least(r, "score", 80.0),
    ),
    Preset.VALUE: PresetRule(
        Preset.VALUE, "Value", "PBV < Fair", ("pbv", "fair_pbv"),
        lambda r: less_than_field(r, "pbv", "fair_pbv"),
    ),
    Preset.INCOME: PresetRule(
        Preset.INCOME, "Income", "Div > 5%", ("dividend_yield",),
        lambda r: greater_than(r, "dividend_yield", 0.05),
    ),
    Preset.LOW_RISK: PresetRule(
        Preset.LOW_RISK, "Low Risk", "Z > 3", ("altman_z",),
        lambda r: greater_than(r, "altman_z", 3.0),
    ),
    Preset.CONTROLLED: PresetRule(
        Preset.CONTROLLED, "Controlled", "Top3 > 75%", ("shareholder_top3_pct",),
        lambda r: greater_than(r, "shareholder_top3_pct", 0.75),
    ),
    Preset.ILLIQUID: PresetRule(
        Preset.ILLIQUID, "Illiquid", "FF < 15%", ("free_float",),
        lambda r: less_than(r, "free_float", 0.15),
    ),
}


def resolve_preset(value: Any) -> Preset | None:
    """Coerce a preset id; ``None`` and ``""`` mean no preset."""
    if value is None or value == "":
        return None
    preset = Preset.coerce(value)
    if preset is None:
        raise ScreenerValidationError(
            f"Unknown preset: {value!r}",
            user_message=f"Unknown preset '{value}'. Choose one of: {', '.join(p.value for p in Preset)}",
        )
    return preset


def evaluate_preset(preset: Preset, record: StockRecord) -> bool:
    return PRESET_RULES[preset](record)


def toggle_preset(active: Preset | None, chosen: Preset) -> Preset | None:
    """Radio-button semantics with an off state."""
    return None if active is chosen else chosen


def preset_catalog() -> list[dict[str, str]]:
    return [
        {"id": rule.preset.value, "label": rule.label, "description": rule.description}
        for rule in PRESET_RULES.values()
    ]
