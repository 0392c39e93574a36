# type: ignore
import pytest

from bfemu.common.hwconf import TAPE_SIZE
from bfemu.runtime.settings import RunSettings, Bounds, Eof
import bfemu.runtime.engine as engine

from unit_utils import make_engine
from fixtures import strategy  # noqa: F401


def run_with(source, strategy, stdin=b'', **kwargs):  # noqa: F811
    eng, ostream = make_engine(source, strategy, stdin, RunSettings().update(**kwargs))
    eng.run()
    return eng


def test_wrap_is_default(strategy):  # noqa: F811
    eng = run_with(b'<+', strategy)

    assert eng.ptr == TAPE_SIZE - 1
    assert eng.tape[-1] == 1


def test_wrap_right_edge(strategy):  # noqa: F811
    eng = run_with(b'>>>>+', strategy, tape_size=4, bounds=Bounds.WRAP)

    assert eng.ptr == 0
    assert eng.tape == bytearray([1, 0, 0, 0])


def test_wrap_repeated_left(strategy):  # noqa: F811
    eng = run_with(b'<' * 7, strategy, tape_size=4, bounds=Bounds.WRAP)
    assert eng.ptr == 1


def test_clamp(strategy):  # noqa: F811
    eng = run_with(b'<<<+', strategy, tape_size=3, bounds=Bounds.CLAMP)
    assert eng.ptr == 0
    assert eng.tape[0] == 1

    eng = run_with(b'>>>>>+', strategy, tape_size=3, bounds=Bounds.CLAMP)
    assert eng.ptr == 2
    assert eng.tape == bytearray([0, 0, 1])


def test_fault(strategy):  # noqa: F811
    with pytest.raises(engine.TapeFault):
        run_with(b'+<', strategy, bounds=Bounds.FAULT)

    with pytest.raises(engine.TapeFault):
        run_with(b'>', strategy, tape_size=1, bounds='fault')


def test_fault_leaves_cursor_in_place(strategy):  # noqa: F811
    eng, _ = make_engine(b'>><<<', strategy, settings=RunSettings().update(bounds=Bounds.FAULT))

    with pytest.raises(engine.TapeFault):
        eng.run()

    assert eng.ptr == 0
    assert eng.program.position == 4


def test_policy_is_deterministic(strategy):  # noqa: F811
    source = b'+[<+>-]<' * 3
    results = [run_with(source, strategy, tape_size=5).ptr for _ in range(3)]

    assert results == [2, 2, 2]


def test_eof_keep(strategy):  # noqa: F811
    eng = run_with(b'+++,', strategy)
    assert eng.tape[0] == 3


def test_eof_zero(strategy):  # noqa: F811
    eng = run_with(b'+++,', strategy, eof=Eof.ZERO)
    assert eng.tape[0] == 0


def test_eof_max(strategy):  # noqa: F811
    eng = run_with(b'+++,', strategy, eof='max')
    assert eng.tape[0] == 255


def test_invalid_tape_size():
    with pytest.raises(ValueError):
        RunSettings().update(tape_size=0)
