"""Rules layer - the generic engine plus per-variant rule sets.

Quick start::

    from variantchess.core import initial_board, Color
    from variantchess.rules import RuleEngine, create_rules

    engine = RuleEngine(create_rules("atomic"))
    moves = engine.get_valid_moves(initial_board(), 6, 4, Color.WHITE)
"""

from variantchess.rules.engine import RuleEngine
from variantchess.rules.variants import (
    AtomicRules,
    BattleRoyaleRules,
    HillRules,
    PortalRules,
    StandardRules,
    VariantRules,
    create_rules,
)

__all__ = [
    "RuleEngine",
    "VariantRules",
    "StandardRules",
    "AtomicRules",
    "HillRules",
    "BattleRoyaleRules",
    "PortalRules",
    "create_rules",
]
