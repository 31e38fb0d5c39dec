## mathfp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from mathfp import operators as O
from mathfp.builtins import BINARY_OPERATORS, load_builtins_environment
from mathfp.environment import Environment
from mathfp.types import nil


def test_every_parsed_operator_has_an_implementation():
    from mathfp.parser import PRECEDENCES
    assert set(PRECEDENCES) == set(BINARY_OPERATORS)


def test_remainder_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        O.op_rem(1.0, 0.0)


def test_equality_does_not_mix_types():
    assert O.op_equal_q(1.0, 1.0)
    assert not O.op_equal_q(True, 1.0)
    assert O.op_differ_q(nil, False)


def test_builtins_environment_has_constants():
    env = load_builtins_environment()
    assert env.parent is None
    assert env["true"] is True and env["nil"] is nil
    assert all(env.is_constant(n) for n in ("true", "false", "nil"))


def test_environment_lookup_walks_outward_and_writes_locally():
    root = Environment()
    root.define("x", 1.0)
    child = root.child()
    assert child["x"] == 1.0
    child.define("x", 2.0)
    assert child["x"] == 2.0
    assert root["x"] == 1.0
    assert child.get("y", 0.0) == 0.0
    with pytest.raises(KeyError):
        child["y"]
