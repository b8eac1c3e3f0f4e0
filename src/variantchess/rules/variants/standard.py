"""Plain chess: every hook keeps its default."""

from __future__ import annotations

from variantchess.core.enums import VariantKind
from variantchess.rules.variants.base import VariantRules


class StandardRules(VariantRules):
    @property
    def kind(self) -> VariantKind:
        return VariantKind.STANDARD
