from enum import IntEnum


class Op(IntEnum):
    RIGHT = 0x01        # ptr += 1
    LEFT = 0x02         # ptr -= 1
    INC = 0x03          # T[ptr] += 1
    DEC = 0x04          # T[ptr] -= 1
    OUT = 0x05          # T[ptr] -> output
    INP = 0x06          # input -> T[ptr]
    LOOP_START = 0x07   # if T[ptr] .eq 0 skip past matching LOOP_END
    LOOP_END = 0x08     # if T[ptr] .ne 0 resume after matching LOOP_START

    NOP = 0x00          # Comments, whitespace and any other byte
    END = 0xFF          # Appended after the last source byte


SYMBOLS = {
    ord('>'): Op.RIGHT,
    ord('<'): Op.LEFT,
    ord('+'): Op.INC,
    ord('-'): Op.DEC,
    ord('.'): Op.OUT,
    ord(','): Op.INP,
    ord('['): Op.LOOP_START,
    ord(']'): Op.LOOP_END,
}


def decode(byte: int) -> Op:
    return SYMBOLS.get(byte, Op.NOP)


def decode_all(source: bytes) -> tuple[Op, ...]:
    ''' One instruction per source byte, terminated by END '''
    return tuple(decode(b) for b in source) + (Op.END,)
