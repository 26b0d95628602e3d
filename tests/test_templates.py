import pytest

from glint import templates, ShaderTemplate
from glint.shader import bake_shader
from glint.templates import TEMPLATES


def test_builtin_templates():
    assert list(templates) == ["blank", "swirl", "glow", "sunflare"]
    assert [t.id for t in TEMPLATES] == ["blank", "swirl", "glow", "sunflare"]
    for t in TEMPLATES:
        assert t.name
        assert t.description


@pytest.mark.parametrize("template", TEMPLATES, ids=lambda t: t.id)
def test_template_annotated_source(template):
    code = template.annotated_source
    # Includes are resolved
    assert "{$" not in code
    assert "float hash(vec2 p)" in code
    assert "/*@" in code


def test_swirl_template():
    source, params = templates["swirl"].preprocess()
    assert [p.id for p in params] == [
        "rotation",
        "driftSpeed1",
        "driftSpeed2",
        "noiseScale",
        "warpIntensity",
        "colorA",
        "colorB",
        "mixLow",
        "mixHigh",
        "grainIntensity",
    ]
    by_id = {p.id: p for p in params}
    assert by_id["colorA"].default == "#3c1ea8"
    assert by_id["colorB"].default == "#ff7130"
    assert by_id["noiseScale"].default == 0.8
    assert by_id["driftSpeed1"].group == "animation"
    assert by_id["mixLow"].group == "blending"

    assert "/*@" not in source
    assert source.count("uniform float u_noiseScale;") == 1
    assert "uniform vec2 u_resolution;\nuniform float u_rotation;" in source
    assert "float fbm(vec2 p)" in source


def test_glow_template():
    source, params = templates["glow"].preprocess()
    by_id = {p.id: p for p in params}
    assert by_id["breathColor"].default == "#1a0a00"
    assert by_id["maskStart"].group == "mask"
    assert by_id["gradLow"].group == "blending"
    assert "uniform vec3 u_breathColor;" in source


def test_sunflare_template():
    source, params = templates["sunflare"].preprocess()
    assert [p.id for p in params] == [
        "maskStart",
        "driftSpeed1",
        "driftSpeed2",
        "noiseScale",
        "warpIntensity",
        "waveSpeed",
        "displacement",
        "colorA",
        "colorB",
        "gradLow",
        "gradHigh",
        "brightness",
        "breathColor",
        "grainIntensity",
    ]
    by_id = {p.id: p for p in params}
    assert by_id["colorA"].default == "#432cdc"
    assert by_id["colorB"].default == "#ff7130"
    assert by_id["breathColor"].default == "#1a0a00"
    assert by_id["noiseScale"].default == 1.2
    assert by_id["displacement"].default == 0.3
    assert by_id["maskStart"].group == "mask"
    assert by_id["waveSpeed"].group == "animation"
    assert by_id["warpIntensity"].group == "noise"

    assert "/*@" not in source
    assert source.count("uniform float u_noiseScale;") == 1
    assert source.count("u_noiseScale") == 5
    assert "float fbm(vec2 p)" in source


def test_blank_template():
    source, params = templates["blank"].preprocess()
    by_id = {p.id: p for p in params}
    assert len(params) == 16
    assert by_id["colorA"].default == "#211961"
    assert by_id["colorB"].default == "#f99251"
    assert by_id["noiseIntensity"].default == 0.0
    assert by_id["vignetteSize"].default == 0.7
    assert by_id["animSpeed"].group == "animation"
    assert "float t = u_time * u_animSpeed;" in source


def test_template_preprocess_existing():
    template = templates["glow"]
    _, params = template.preprocess()
    _, params2 = template.preprocess(params)
    assert all(p1 is p2 for p1, p2 in zip(params, params2))


def test_template_bake():
    source, params = templates["swirl"].preprocess()
    baked = bake_shader(source, params, {"mixLow": 0.1})
    for p in params:
        assert p.uniform_name not in baked
    assert "smoothstep(0.1, 0.75, f)" in baked
    assert "vec3 colorA = vec3(0.235294, 0.117647, 0.658824);" in baked
    assert "uniform float u_time;" in baked


def test_custom_template():
    t = ShaderTemplate("nonexistent", "Nope")
    assert repr(t) == "<ShaderTemplate 'nonexistent'>"
    with pytest.raises(FileNotFoundError):
        t.annotated_source
