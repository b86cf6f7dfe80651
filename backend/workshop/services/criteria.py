"""Default evaluation criteria and criteria-list helpers"""
from typing import Any, Dict, List

# Used when neither the session nor the request supplies criteria
DEFAULT_CRITERIA: List[Dict[str, str]] = [
    {"name": "Clarity", "description": "How clear and unambiguous is the prompt?"},
    {"name": "Specificity", "description": "How specific and detailed is the prompt for achieving the goal?"},
    {"name": "Efficiency", "description": "How concise yet complete is the prompt?"},
]

# Seeded into new workshop sessions and backfilled by the migration endpoint
DEFAULT_STAGE1_CRITERIA: List[Dict[str, str]] = [
    {"name": "Professionalism", "description": "Uses appropriate business language and tone"},
    {"name": "Empathy", "description": "Acknowledges customer concerns and shows understanding"},
    {"name": "Actionability", "description": "Provides clear next steps or solutions"},
    {"name": "Completeness", "description": "Addresses all aspects of the complaint"},
]

DEFAULT_STAGE2_CRITERIA: List[Dict[str, str]] = [
    {"name": "Strategic Thinking", "description": "Shows clear understanding of market positioning"},
    {"name": "Audience Targeting", "description": "Identifies and addresses specific customer segments"},
    {"name": "Channel Strategy", "description": "Proposes appropriate marketing channels and tactics"},
    {"name": "Measurability", "description": "Includes metrics and KPIs for success tracking"},
]

DEFAULT_SESSION_NAME = "Default Workshop Session"
DEFAULT_STAGE1_GOAL = "Write a prompt that generates a professional email response to a customer complaint"
DEFAULT_STAGE2_GOAL = "Write a prompt that generates a comprehensive marketing strategy for a new product launch"


def default_criteria_for_stage(stage: int) -> List[Dict[str, str]]:
    source = DEFAULT_STAGE1_CRITERIA if stage == 1 else DEFAULT_STAGE2_CRITERIA
    return [dict(c) for c in source]


def normalize_criteria(criteria: List[Any]) -> List[Dict[str, str]]:
    """
    Turn a list of criteria (dicts or objects with name/description) into plain dicts.

    Raises:
        ValueError: If a name is blank or repeated
    """
    normalized: List[Dict[str, str]] = []
    seen = set()
    for item in criteria or []:
        if isinstance(item, dict):
            name = item.get("name")
            description = item.get("description") or ""
        else:
            name = getattr(item, "name", None)
            description = getattr(item, "description", None) or ""
        name = str(name or "").strip()
        if not name:
            raise ValueError("criterion name cannot be empty")
        if name in seen:
            raise ValueError(f"duplicate criterion name '{name}'")
        seen.add(name)
        normalized.append({"name": name, "description": str(description).strip()})
    return normalized
