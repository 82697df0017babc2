import pytest

from treelox.environment import Environment
from treelox.errors import UndefinedAssignmentTarget, UndefinedVariableError
from treelox.scanner import Token, TokenType


def name(text, line=1):
    return Token(TokenType.IDENTIFIER, text, None, line)


def test_define_and_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get(name('a')) == 1.0


def test_lookup_walks_to_parent():
    globals_ = Environment()
    globals_.define('a', 'outer')
    inner = Environment(Environment(globals_))
    assert inner.get(name('a')) == 'outer'
    assert 'a' in inner
    assert inner.find('a') is globals_


def test_shadowing_does_not_touch_parent():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(outer)
    inner.define('a', 2.0)
    assert inner.get(name('a')) == 2.0
    assert outer.get(name('a')) == 1.0


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(outer)
    inner.assign(name('a'), 5.0)
    assert outer.values == {'a': 5.0}
    assert inner.values == {}


def test_get_undefined_raises_with_line():
    with pytest.raises(UndefinedVariableError) as excinfo:
        Environment().get(name('missing', line=7))
    assert excinfo.value.line == 7
    assert excinfo.value.message == "Undefined variable 'missing'."


def test_assign_undefined_leaves_environments_unchanged():
    outer = Environment()
    inner = Environment(outer)
    with pytest.raises(UndefinedAssignmentTarget):
        inner.assign(name('ghost'), 1.0)
    assert outer.values == {} and inner.values == {}
