"""Variant rule sets, one per :class:`~variantchess.core.enums.VariantKind`."""

from __future__ import annotations

from collections.abc import Callable

from variantchess.core.enums import VariantKind
from variantchess.rules.variants.arena import BattleRoyaleRules
from variantchess.rules.variants.atomic import AtomicRules
from variantchess.rules.variants.base import VariantRules
from variantchess.rules.variants.hill import HILL_SQUARES, HillRules
from variantchess.rules.variants.portal import PortalRules
from variantchess.rules.variants.standard import StandardRules

_FACTORIES: dict[VariantKind, Callable[[], VariantRules]] = {
    VariantKind.STANDARD: StandardRules,
    VariantKind.ATOMIC: AtomicRules,
    VariantKind.KING_OF_THE_HILL: HillRules,
    VariantKind.BATTLE_ROYALE: BattleRoyaleRules,
    VariantKind.PORTAL: PortalRules,
}


def create_rules(kind: VariantKind | str) -> VariantRules:
    """Fresh rule set for *kind* (enum member or its transport name).

    Raises:
        ValueError: for an unknown variant name.
    """
    return _FACTORIES[VariantKind(kind)]()


__all__ = [
    "HILL_SQUARES",
    "AtomicRules",
    "BattleRoyaleRules",
    "HillRules",
    "PortalRules",
    "StandardRules",
    "VariantRules",
    "create_rules",
]
