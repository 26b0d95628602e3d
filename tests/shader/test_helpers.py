import pytest

from glint.glsl import load_glsl
from glint.shader import resolve_helpers, resolve_helper_order


def test_resolve_helper_order():
    assert resolve_helper_order([]) == []
    assert resolve_helper_order(["hash"]) == ["hash"]
    assert resolve_helper_order(["fbm"]) == ["hash", "noise", "fbm"]
    assert resolve_helper_order(["rotate2d", "hash"]) == ["hash", "rotate2d"]
    assert resolve_helper_order(["fbm", "noise", "hash", "fbm"]) == ["hash", "noise", "fbm"]

    # The result does not depend on the order of the input
    assert resolve_helper_order(["rotate2d", "fbm"]) == resolve_helper_order(["fbm", "rotate2d"])

    with pytest.raises(ValueError):
        resolve_helper_order(["hash", "perlin"])


def test_resolve_helpers():
    assert resolve_helpers([]) == ""

    code = resolve_helpers(["fbm", "noise", "hash"])
    assert code.count("float hash(vec2 p)") == 1
    assert code.count("float noise(vec2 p)") == 1
    assert code.count("float fbm(vec2 p)") == 1
    assert code.index("float hash(") < code.index("float noise(") < code.index("float fbm(")
    assert "\n\n\n" not in code


def test_load_glsl():
    code = load_glsl("rotate2d.glsl")
    assert code.startswith("mat2 rotate2d(float a)")
    assert load_glsl("rotate2d.glsl") is code
