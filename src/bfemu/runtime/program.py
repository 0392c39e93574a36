''' Program loaders: forward/backward instruction cursors over a source '''

import io
import logging as lg
from pathlib import Path
from typing import BinaryIO

import bfemu.common.ops as ops
from bfemu.common.ops import Op
from bfemu.runtime.settings import Strategy


class Program:
    position: int       # Last fetched instruction, -1 before the first fetch
    size: int           # Source length; END sits at index `size`
    path: Path | None   # Source file, None for in-memory sources

    def __init__(self, size: int, path: Path | None = None):
        self.position = -1
        self.size = size
        self.path = path

    def fetch(self, position: int) -> Op:
        raise NotImplementedError()

    def next(self) -> Op:
        if self.position < self.size:
            self.position += 1

        return self.fetch(self.position)

    def prev(self) -> Op:
        if self.at_start():
            raise IndexError(f'No instruction before position {self.position}')

        self.position -= 1
        return self.fetch(self.position)

    def at_start(self) -> bool:
        return self.position <= 0

    def close(self):
        pass


class MaterializedProgram(Program):
    instructions: tuple[Op, ...]

    def __init__(self, source: bytes, path: Path | None = None):
        super().__init__(len(source), path)
        self.instructions = ops.decode_all(source)

    def fetch(self, position: int) -> Op:
        return self.instructions[position]


class StreamProgram(Program):
    def __init__(self, stream: BinaryIO, path: Path | None = None):
        if not stream.seekable():
            raise ValueError('Streaming a program requires a seekable source')

        size = stream.seek(0, io.SEEK_END)
        stream.seek(0)

        super().__init__(size, path)
        self.stream = stream

    def fetch(self, position: int) -> Op:
        if position >= self.size:
            return Op.END

        # Sequential forward reads need no repositioning
        if self.stream.tell() != position:
            self.stream.seek(position)

        buf = self.stream.read(1)

        # Source shrank under us
        if not buf:
            return Op.END

        return ops.decode(buf[0])

    def close(self):
        self.stream.close()


def load(stream: BinaryIO, strategy: Strategy, path: Path | None = None) -> Program:
    ''' Takes ownership of `stream` '''
    if strategy == Strategy.STREAM:
        if stream.seekable():
            return StreamProgram(stream, path)

        lg.warning('Source is not seekable, materializing the program')

    source = stream.read()
    stream.close()
    return MaterializedProgram(source, path)


def open_program(path: Path, strategy: Strategy) -> Program:
    lg.debug(f'Loading {path} ({strategy.value})')

    if strategy == Strategy.MATERIALIZED:
        return MaterializedProgram(path.read_bytes(), path)

    return load(path.open('rb'), strategy, path)
