import math

import pytest

from glint.params import (
    ParameterDeclaration,
    ScopedParameter,
    InvalidIdentifierError,
    check_fragment,
    scope,
    format_label,
    default_param_values,
    normalize_value,
    uniform_value,
)


def test_check_fragment():
    assert check_fragment("instance id", "abc123") == "abc123"
    assert check_fragment("parameter id", "driftSpeed1") == "driftSpeed1"

    for value in ["", "a_b", "a-b", "a b", "a.b", None, 3]:
        with pytest.raises(InvalidIdentifierError):
            check_fragment("instance id", value)

    # Is a ValueError
    with pytest.raises(ValueError):
        check_fragment("instance id", "a_b")


def test_scope():
    assert scope("k3x9q0", "speed") == ("k3x9q0_speed", "u_k3x9q0_speed")
    # Distinct pairs give distinct names
    names = {scope(i, p) for i in ["a1", "b2"] for p in ["x", "y"]}
    assert len(names) == 4


def test_format_label():
    assert format_label("driftSpeed1") == "Drift Speed1"
    assert format_label("grad_low") == "Grad Low"
    assert format_label("cellSize") == "Cell Size"
    assert format_label("amount") == "Amount"


def test_declaration_basics():
    p = ParameterDeclaration("speed", "float", 1, min=0, max=2, step=0.1)
    assert p.id == "speed"
    assert p.kind == "float"
    assert p.default == 1.0 and isinstance(p.default, float)
    assert p.label == "Speed"
    assert (p.min, p.max, p.step) == (0, 2, 0.1)
    assert p.display_unit is None
    assert p.group == "effects"
    assert p.options == ()
    assert p.glsl_type == "float"
    assert p.uniform_name == "u_speed"
    assert "speed" in repr(p)

    p = ParameterDeclaration("angle", "float", 90, label="Direction", display_unit="degrees")
    assert p.label == "Direction"
    assert p.display_unit == "degrees"


def test_declaration_defaults_are_normalized():
    assert ParameterDeclaration("c", "color", "red").default == "#ff0000"
    assert ParameterDeclaration("c", "color", (0, 0.5, 1)).default == "#0080ff"
    assert ParameterDeclaration("c", "color", "#FF7130").default == "#ff7130"
    assert ParameterDeclaration("v", "vec2", [1, 2]).default == (1.0, 2.0)
    assert ParameterDeclaration("n", "int", 3).default == 3
    assert ParameterDeclaration("b", "bool", True).default == 1.0
    assert ParameterDeclaration("s", "select", 1).default == 1.0


def test_declaration_glsl_types():
    types = {
        kind: ParameterDeclaration("x", kind, default).glsl_type
        for kind, default in [
            ("float", 0),
            ("int", 0),
            ("bool", 0),
            ("color", "#000"),
            ("vec2", (0, 0)),
            ("select", 0),
        ]
    }
    assert types == {
        "float": "float",
        "int": "int",
        "bool": "float",
        "color": "vec3",
        "vec2": "vec2",
        "select": "float",
    }


def test_declaration_fails():
    with pytest.raises(TypeError):
        ParameterDeclaration(3, "float", 0)
    with pytest.raises(InvalidIdentifierError):
        ParameterDeclaration("drift-speed", "float", 0)
    with pytest.raises(ValueError):
        ParameterDeclaration("x", "double", 0)
    with pytest.raises(ValueError):
        ParameterDeclaration("x", "float", 0, display_unit="radians")
    with pytest.raises(ValueError):
        ParameterDeclaration("x", "color", "notacolor")


def test_select_options():
    p = ParameterDeclaration(
        "orientation", "select", 0, options=[("Horizontal", 0.0), ("Vertical", 1.0)]
    )
    assert p.options == (("Horizontal", 0.0), ("Vertical", 1.0))
    assert p.glsl_type == "float"


def test_scoped_parameter():
    d = ParameterDeclaration("speed", "float", 0.5, group="animation")
    p = ScopedParameter("abc123", d)
    assert p.id == "abc123_speed"
    assert p.uniform_name == "u_abc123_speed"
    assert p.instance_id == "abc123"
    assert p.declaration is d
    assert p.kind == "float"
    assert p.default == 0.5
    assert p.label == "Speed"
    assert p.group == "animation"
    assert p.glsl_type == "float"
    assert p.display_unit is None


def test_default_param_values():
    decls = [
        ParameterDeclaration("a", "float", 0.5),
        ParameterDeclaration("b", "color", "#ff0000"),
    ]
    params = [ScopedParameter("x1", d) for d in decls]
    assert default_param_values(params) == {"x1_a": 0.5, "x1_b": "#ff0000"}
    assert default_param_values(decls) == {"a": 0.5, "b": "#ff0000"}


def test_uniform_value():
    p = ParameterDeclaration("x", "float", 0.25)
    assert uniform_value(p) == 0.25
    assert uniform_value(p, 2) == 2.0

    # Degrees are sent as radians
    p = ParameterDeclaration("angle", "float", 90, display_unit="degrees")
    assert uniform_value(p) == pytest.approx(math.pi / 2)
    assert uniform_value(p, 180) == pytest.approx(math.pi)
    assert uniform_value(p, 0) == 0.0

    # Ints are rounded half up
    p = ParameterDeclaration("n", "int", 0)
    assert uniform_value(p, 2.5) == 3
    assert uniform_value(p, 2.4) == 2
    assert uniform_value(p, -0.5) == 0
    assert isinstance(uniform_value(p, 2.5), int)

    # Bools become 1.0 or 0.0
    p = ParameterDeclaration("b", "bool", 0)
    assert uniform_value(p) == 0.0
    assert uniform_value(p, True) == 1.0
    assert uniform_value(p, 0.7) == 1.0
    assert uniform_value(p, 0.5) == 0.0

    # Colors become rgb tuples
    p = ParameterDeclaration("c", "color", "#ff0000")
    assert uniform_value(p) == (1.0, 0.0, 0.0)
    assert uniform_value(p, "#0000ff") == (0.0, 0.0, 1.0)

    p = ParameterDeclaration("v", "vec2", (0, 0))
    assert uniform_value(p, [1, 2]) == (1.0, 2.0)

    p = ParameterDeclaration("s", "select", 0)
    assert uniform_value(p, 1) == 1.0


def test_uniform_value_scoped():
    d = ParameterDeclaration("rotation", "float", 40, display_unit="degrees")
    p = ScopedParameter("abc", d)
    assert uniform_value(p) == pytest.approx(math.radians(40))


def test_normalize_value():
    assert normalize_value(ParameterDeclaration("x", "float", 0), "0.25") == 0.25
    assert normalize_value(ParameterDeclaration("n", "int", 0), 2.5) == 3
    assert normalize_value(ParameterDeclaration("b", "bool", 0), True) == 1.0
    assert normalize_value(ParameterDeclaration("c", "color", "#000"), "RED") == "#ff0000"
    assert normalize_value(ParameterDeclaration("v", "vec2", (0, 0)), [1, 2]) == (1.0, 2.0)

    p = ScopedParameter("abc", ParameterDeclaration("size", "float", 1.0))
    assert normalize_value(p, 2) == 2.0

    defaults = {"float": 0, "int": 0, "bool": 0, "color": "#000", "vec2": (0, 0)}
    bad = [
        ("float", "abc"),
        ("int", None),
        ("bool", "yes"),
        ("color", "notacolor"),
        ("vec2", 1.0),
        ("vec2", ("a", "b")),
    ]
    for kind, value in bad:
        p = ParameterDeclaration("x", kind, defaults[kind])
        with pytest.raises(ValueError):
            normalize_value(p, value)
