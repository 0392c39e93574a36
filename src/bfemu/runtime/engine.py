import logging as lg
from typing import BinaryIO

from bfemu.common.hwconf import CELL_SIZE, CELL_MAX
from bfemu.common.ops import Op
from bfemu.runtime.program import Program
from bfemu.runtime.settings import RunSettings, Bounds, Eof


class Halt(Exception):
    pass


class ExecutionError(Exception):
    pass


class UnmatchedLoopEnd(ExecutionError):
    pass


class TapeFault(ExecutionError):
    pass


class Engine():
    tape: bytearray
    ptr: int    # Tape cursor
    inst: Op    # Last fetched instruction

    def __init__(
        self,
        program: Program,
        istream: BinaryIO,
        ostream: BinaryIO,
        settings: RunSettings | None = None
    ):
        self.program = program      # Instruction cursor
        self.istream = istream
        self.ostream = ostream
        self.settings = settings if settings is not None else RunSettings()

        self.tape = bytearray(self.settings.tape_size)
        self.ptr = 0
        self.inst = Op.NOP

    # - Helpers - #

    def debug_dump(self):
        lg.debug(
            f'PTR:{self.ptr} PC:{self.program.position} '
            f'CELL:{self.tape[self.ptr]:02X} INST:{self.inst.name}'
        )

    def cell(self) -> int:
        return self.tape[self.ptr]

    def set_cell(self, val: int):
        self.tape[self.ptr] = val % CELL_SIZE

    def move(self, delta: int):
        ptr = self.ptr + delta
        size = len(self.tape)

        if 0 <= ptr < size:
            self.ptr = ptr
            return

        bounds = self.settings.bounds

        if bounds == Bounds.WRAP:
            self.ptr = ptr % size

        elif bounds == Bounds.CLAMP:
            self.ptr = min(max(ptr, 0), size - 1)

        else:
            raise TapeFault(f'Tape cursor moved to {ptr}, outside of 0..{size - 1}')

    def skip_loop(self):
        depth = 1

        while depth > 0:
            self.inst = self.program.next()

            if self.inst == Op.LOOP_START:
                depth += 1

            elif self.inst == Op.LOOP_END:
                depth -= 1

            elif self.inst == Op.END:
                lg.warning('Unmatched loop start, program ends inside a skipped loop')
                raise Halt()

    def restart_loop(self):
        origin = self.program.position
        depth = 1

        while depth > 0:
            if self.program.at_start():
                raise UnmatchedLoopEnd(
                    f'No loop start matches the loop end at {origin}'
                )

            self.inst = self.program.prev()

            if self.inst == Op.LOOP_START:
                depth -= 1

            elif self.inst == Op.LOOP_END:
                depth += 1

    # - Operations - #

    def right(self):
        self.move(1)

    def left(self):
        self.move(-1)

    def inc(self):
        self.set_cell(self.cell() + 1)

    def dec(self):
        self.set_cell(self.cell() - 1)

    def out(self):
        self.ostream.write(bytes((self.cell(),)))
        self.ostream.flush()

    def inp(self):
        buf = self.istream.read(1)

        if buf:
            self.set_cell(buf[0])
            return

        eof = self.settings.eof

        if eof == Eof.ZERO:
            self.set_cell(0)

        elif eof == Eof.MAX:
            self.set_cell(CELL_MAX)

    def loop_start(self):
        if self.cell() == 0:
            self.skip_loop()

    def loop_end(self):
        if self.cell() != 0:
            self.restart_loop()

    def nop(self):
        pass

    def end(self):
        raise Halt()

    HANDLERS = {
        Op.RIGHT: right,
        Op.LEFT: left,
        Op.INC: inc,
        Op.DEC: dec,
        Op.OUT: out,
        Op.INP: inp,
        Op.LOOP_START: loop_start,
        Op.LOOP_END: loop_end,
        Op.NOP: nop,
        Op.END: end
    }

    # -- Implementation -- #

    def exec_next(self):
        self.inst = self.program.next()
        handler = self.HANDLERS[self.inst]
        handler(self)

    def run(self):
        lg.debug(f'Running {self.program.path or "<memory>"}')

        try:
            while True:
                self.exec_next()

        except Halt:
            lg.debug('Execution finished')
            self.debug_dump()
