"""Portal chess - the board is a torus for sliding pieces.

Bishops, rooks and queens that run off one edge re-enter from the opposite
one, on both axes. Pawns, knights and kings never wrap.
"""

from __future__ import annotations

from variantchess.core.board import Board
from variantchess.core.enums import VariantKind
from variantchess.core.types import Square
from variantchess.rules.geometry import Direction
from variantchess.rules.variants.base import VariantRules


def wrapped_ray(src: Square, direction: Direction) -> list[Square]:
    """Squares along *direction* from *src*, wrapping, until back at *src*."""
    dr, dc = direction
    ray: list[Square] = []
    for step in range(1, 8):
        sq = ((src[0] + step * dr) % 8, (src[1] + step * dc) % 8)
        if sq == src:
            break
        ray.append(sq)
    return ray


class PortalRules(VariantRules):
    @property
    def kind(self) -> VariantKind:
        return VariantKind.PORTAL

    def reaches_by_slide(
        self,
        board: Board,
        src: Square,
        dst: Square,
        directions: tuple[Direction, ...],
    ) -> bool:
        # Two directions may reach the same square; any unblocked one counts.
        for direction in directions:
            for sq in wrapped_ray(src, direction):
                if sq == dst:
                    return True
                if board[sq[0]][sq[1]] is not None:
                    break
        return False
