import random

import pytest

from glint.params import ParameterDeclaration as Param, InvalidIdentifierError
from glint.effects import (
    EffectDefinition,
    EffectInstance,
    EffectRegistry,
    generate_instance_id,
    category_band,
    default_registry,
)


def make_effect(id="tint", category="post", order=200, **kwargs):
    params = kwargs.pop("params", [Param("amount", "float", 0.5)])
    body = kwargs.pop("body", "color *= $amount;")
    return EffectDefinition(id, id.title(), category, order, params, body, **kwargs)


def test_category_band():
    assert category_band("uv-transform") == range(0, 100)
    assert category_band("generator") == range(100, 200)
    assert category_band("post") == range(200, 300)


def test_effect_definition():
    e = make_effect(description="Tints", required_helpers=["hash"])
    assert e.id == "tint"
    assert e.name == "Tint"
    assert e.category == "post"
    assert e.order == 200
    assert e.description == "Tints"
    assert e.required_helpers == ("hash",)
    assert [p.id for p in e.params] == ["amount"]
    assert e.body.names == ("amount",)
    assert e.post_mix_body is None

    scoped = e.scoped_params("k3x9q0")
    assert [p.id for p in scoped] == ["k3x9q0_amount"]
    assert [p.uniform_name for p in scoped] == ["u_k3x9q0_amount"]


def test_effect_definition_fails():
    # Bad category
    with pytest.raises(ValueError):
        make_effect(category="filter")
    # Bad order
    with pytest.raises(TypeError):
        make_effect(order=200.0)
    # Order outside the band of the category
    with pytest.raises(ValueError):
        make_effect(category="post", order=150)
    with pytest.raises(ValueError):
        make_effect(category="uv-transform", order=100)
    # Param ids cannot contain the delimiter
    with pytest.raises(InvalidIdentifierError):
        make_effect(params=[Param("my_amount", "float", 0)], body="")
    # Duplicate param ids
    with pytest.raises(ValueError):
        make_effect(params=[Param("amount", "float", 0), Param("amount", "int", 0)])
    # Not a param
    with pytest.raises(TypeError):
        make_effect(params=[("amount", "float", 0)], body="")
    # Placeholder of an unknown param
    with pytest.raises(ValueError):
        make_effect(body="color *= $strength;")
    # Unknown helper
    with pytest.raises(ValueError):
        make_effect(required_helpers=["perlin"])
    # Only generators have a post-mix body
    with pytest.raises(ValueError):
        make_effect(post_mix_body="color *= $amount;")


def test_generator_with_post_mix_body():
    e = make_effect(
        "bands",
        "generator",
        180,
        body="mixFactor = fract(uv.x * $amount);",
        post_mix_body="color *= 1.0 - $amount;",
    )
    assert e.post_mix_body.names == ("amount",)


def test_generate_instance_id():
    random.seed(1)
    ids = {generate_instance_id() for _ in range(100)}
    assert len(ids) > 90
    for id in ids:
        assert len(id) == 6
        assert id.isalnum() and id == id.lower()


def test_effect_instance():
    x = EffectInstance("vignette")
    assert x.effect_id == "vignette"
    assert len(x.instance_id) == 6
    assert x.enabled

    x = EffectInstance("vignette", "abc123", enabled=False)
    assert x.instance_id == "abc123"
    assert not x.enabled
    x.enabled = 1
    assert x.enabled is True
    assert "abc123" in repr(x)

    d = x.to_dict()
    assert d == {"instance_id": "abc123", "effect_id": "vignette", "enabled": True}
    y = EffectInstance.from_dict(d)
    assert (y.effect_id, y.instance_id, y.enabled) == ("vignette", "abc123", True)

    # Enabled is optional in a dict
    y = EffectInstance.from_dict({"instance_id": "abc123", "effect_id": "vignette"})
    assert y.enabled

    with pytest.raises(InvalidIdentifierError):
        EffectInstance("vignette", "abc_123")
    with pytest.raises(TypeError):
        EffectInstance(None)


def test_registry():
    a = make_effect("tint")
    b = make_effect("shade", order=250)
    c = make_effect("warp", "uv-transform", 50, params=[], body="")

    registry = EffectRegistry([a, b, c])
    assert len(registry) == 3
    assert "tint" in registry
    assert "nope" not in registry
    assert registry["tint"] is a
    assert registry.get("nope") is None
    assert registry.get("nope", a) is a
    assert registry.ids() == ["tint", "shade", "warp"]
    assert list(registry) == [a, b, c]
    assert registry.by_category("post") == [a, b]
    assert registry.by_category("uv-transform") == [c]
    assert registry.by_category("generator") == []

    with pytest.raises(KeyError):
        registry["nope"]


def test_registry_fails():
    a = make_effect("tint")
    with pytest.raises(ValueError):
        EffectRegistry([a, make_effect("tint", order=220)])
    with pytest.raises(TypeError):
        EffectRegistry(["tint"])


def test_registry_extended():
    registry = EffectRegistry([make_effect("tint")])
    extended = registry.extended(make_effect("shade", order=250))
    assert extended.ids() == ["tint", "shade"]
    assert registry.ids() == ["tint"]

    with pytest.raises(ValueError):
        registry.extended(make_effect("tint"))


def test_default_registry():
    assert len(default_registry) == 19
    assert [d.id for d in default_registry.by_category("uv-transform")] == [
        "pixelate",
        "diffuse-blur",
        "polar",
    ]
    assert len(default_registry.by_category("generator")) == 8
    assert len(default_registry.by_category("post")) == 8
