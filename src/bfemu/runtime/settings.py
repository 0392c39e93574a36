from enum import Enum

from bfemu.common.hwconf import TAPE_SIZE


class Strategy(str, Enum):
    STREAM = 'stream'               # Re-read the source with seek() on every fetch
    MATERIALIZED = 'materialized'   # Decode the whole source once


class Bounds(str, Enum):
    WRAP = 'wrap'       # Cursor wraps around the tape ends
    CLAMP = 'clamp'     # Cursor sticks to the first/last cell
    FAULT = 'fault'     # Leaving the tape raises TapeFault


class Eof(str, Enum):
    KEEP = 'keep'       # Cell left unchanged
    ZERO = 'zero'       # Cell set to 0
    MAX = 'max'         # Cell set to 255


class RunSettings:
    strategy: Strategy
    tape_size: int
    bounds: Bounds
    eof: Eof

    def __init__(self):
        self.strategy = Strategy.STREAM
        self.tape_size = TAPE_SIZE
        self.bounds = Bounds.WRAP
        self.eof = Eof.KEEP

    def update(
        self,
        strategy: Strategy | str | None = None,
        tape_size: int | None = None,
        bounds: Bounds | str | None = None,
        eof: Eof | str | None = None
    ):
        if strategy is not None:
            self.strategy = Strategy(strategy)

        if tape_size is not None:
            if tape_size < 1:
                raise ValueError(f'Tape size must be positive, got {tape_size}')

            self.tape_size = tape_size

        if bounds is not None:
            self.bounds = Bounds(bounds)

        if eof is not None:
            self.eof = Eof(eof)

        return self
