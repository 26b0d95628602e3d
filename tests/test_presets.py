import pytest

from glint import Color
from glint.effects import EffectRegistry, default_registry
from glint.presets import Preset, PRESETS, presets, get_preset


def test_builtin_presets():
    assert list(presets) == [
        "blank",
        "swirl",
        "glow",
        "retro",
        "cosmic",
        "ocean",
        "halftone",
        "led-bars",
        "plasma",
    ]
    assert len(PRESETS) == len(presets)


@pytest.mark.parametrize("preset", PRESETS, ids=lambda p: p.id)
def test_builtin_preset_is_valid(preset):
    for effect_id in preset.effects:
        assert effect_id in default_registry

    for key in preset.overrides:
        effect_id, param_id = key.split(".")
        assert effect_id in preset.effects
        assert param_id in [p.id for p in default_registry[effect_id].params]

    assert len(preset.colors) <= 5
    for color in preset.colors:
        assert Color(color).hex == color


def test_preset_instantiate():
    preset = get_preset("swirl")
    instances, values, colors = preset.instantiate(default_registry)

    assert [x.effect_id for x in instances] == list(preset.effects)
    assert len({x.instance_id for x in instances}) == len(instances)
    assert colors == ["#3c1ea8", "#ff7130"]

    ids = {x.effect_id: x.instance_id for x in instances}
    assert values[ids["domain-warp"] + "_warpIntensity"] == 4.0
    assert values[ids["film-grain"] + "_intensity"] == 0.08
    assert values[ids["vignette"] + "_radius"] == 0.7

    expected = sum(len(default_registry[x.effect_id].params) for x in instances)
    assert len(values) == expected

    # Every call gives fresh instances
    instances2, _, _ = preset.instantiate(default_registry)
    assert instances2[0] is not instances[0]


def test_preset_instantiate_defaults():
    instances, values, _ = get_preset("halftone").instantiate(default_registry)
    gradient = instances[0].instance_id
    assert values[gradient + "_angle"] == 135
    # Params without override get their default
    assert values[gradient + "_midpoint"] == 0.5


def test_preset_instantiate_unknown_effect():
    registry = EffectRegistry([default_registry["vignette"]])
    instances, values, colors = get_preset("swirl").instantiate(registry)
    assert [x.effect_id for x in instances] == ["vignette"]
    assert set(values) == {instances[0].instance_id + "_strength", instances[0].instance_id + "_radius"}


def test_blank_preset():
    instances, values, colors = get_preset("blank").instantiate(default_registry)
    assert (instances, values, colors) == ([], {}, [])


def test_preset_fails():
    with pytest.raises(ValueError):
        Preset("x", "X", ["vignette"], {"radius": 0.5}, [])
    with pytest.raises(ValueError):
        Preset("x", "X", ["vignette"], {"a.b.c": 0.5}, [])
    with pytest.raises(KeyError):
        get_preset("nope")


def test_preset_is_readonly():
    preset = get_preset("glow")
    with pytest.raises(TypeError):
        preset.overrides["vignette.radius"] = 1.0
    with pytest.raises(TypeError):
        presets["mine"] = preset
