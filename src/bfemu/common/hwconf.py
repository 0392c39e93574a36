TAPE_SIZE = 30_000          # Cells on the tape
CELL_SIZE = 0x100           # Cells are unsigned bytes, arithmetic wraps at this value
CELL_MAX = CELL_SIZE - 1
