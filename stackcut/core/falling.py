from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from stackcut.core.geometry import Block, Position


@dataclass(slots=True)
class FallingPiece:
    """A discarded piece on a fixed-duration linear drop."""

    block: Block
    drop: float
    duration: float
    age: float = 0.0

    @property
    def start_y(self) -> float:
        return self.block.position.y

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(self.age / self.duration, 1.0)

    @property
    def position(self) -> Position:
        p = self.block.position
        return Position(x=p.x, y=self.start_y - self.drop * self.progress, z=p.z)

    @property
    def expired(self) -> bool:
        return self.age >= self.duration

    def advance(self, elapsed: float) -> None:
        self.age += elapsed


@dataclass(slots=True)
class FallingPieces:
    """Every piece currently dropping.

    Hosts advance this once per frame; expired pieces are pruned and never reused.
    """

    pieces: list[FallingPiece] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[FallingPiece]:
        return iter(self.pieces)

    def spawn(self, block: Block, *, drop: float, duration: float) -> FallingPiece:
        piece = FallingPiece(block=block, drop=drop, duration=duration)
        self.pieces.append(piece)
        return piece

    def advance(self, elapsed: float) -> list[FallingPiece]:
        """Advance every piece and return the ones that finished their drop."""

        done: list[FallingPiece] = []
        alive: list[FallingPiece] = []
        for piece in self.pieces:
            piece.advance(elapsed)
            (done if piece.expired else alive).append(piece)
        self.pieces = alive
        return done

    def clear(self) -> None:
        self.pieces = []
