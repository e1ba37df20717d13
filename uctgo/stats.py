"""Running win-rate statistics kept for tree nodes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MoveStats:
    """Number of playouts and the mean result (black wins / playouts)."""

    playouts: int = 0
    value: float = 0.0

    def add_result(self, result: float, playouts: int) -> None:
        """Fold ``playouts`` simulations with mean ``result`` into the stats."""
        total = self.playouts + playouts
        self.value += (result - self.value) * playouts / total
        self.playouts = total

    def rm_result(self, result: float, playouts: int) -> None:
        """Take back ``playouts`` simulations with mean ``result``.

        Removing as many playouts as are recorded, or more, zeroes the
        playout count but leaves the value untouched.
        """
        if self.playouts > playouts:
            total = self.playouts - playouts
            self.value += (self.value - result) * playouts / total
            self.playouts = total
        else:
            self.playouts = 0

    def merge(self, other: MoveStats) -> None:
        """Add the results held by ``other`` to these stats."""
        if other.playouts:
            self.playouts += other.playouts
            self.value += (other.value - self.value) * other.playouts / self.playouts

    def reverse_parity(self) -> None:
        """Flip the value to the opponent's point of view."""
        self.value = 1 - self.value