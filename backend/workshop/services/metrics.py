"""Sustainability estimates derived from token usage.

Both figures are linear in the token count; nothing is measured.
"""
from dataclasses import dataclass

from workshop.config import CO2_GRAMS_PER_TOKEN, COST_USD_PER_TOKEN


@dataclass(frozen=True)
class EnergyConsumption:
    tokens: int
    estimated_co2: float  # grams
    estimated_cost: float  # USD


def estimate_co2(tokens: int) -> float:
    return tokens * CO2_GRAMS_PER_TOKEN


def estimate_cost(tokens: int) -> float:
    return tokens * COST_USD_PER_TOKEN


def energy_consumption(input_tokens: int, output_tokens: int) -> EnergyConsumption:
    """Total tokens and the CO2/cost estimates for one completion"""
    tokens = max(int(input_tokens or 0), 0) + max(int(output_tokens or 0), 0)
    return EnergyConsumption(
        tokens=tokens,
        estimated_co2=estimate_co2(tokens),
        estimated_cost=estimate_cost(tokens),
    )
