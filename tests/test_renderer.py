import math

import pytest

from glint.effects import EffectInstance, default_registry
from glint.shader import compose
from glint.renderer import (
    CompileError,
    RendererInterface,
    parse_compile_errors,
    sync_uniforms,
    sync_colors,
)


class RecordingRenderer(RendererInterface):
    def __init__(self, errors=None):
        self.errors = errors
        self.compiled = []
        self.uniforms = {}

    def compile(self, vertex_source, fragment_source):
        self.compiled.append((vertex_source, fragment_source))
        return self.errors

    def set_uniform(self, name, kind, value):
        self.uniforms[name] = (kind, value)


def test_compile_error():
    e = CompileError("fragment", "syntax error", 12)
    assert (e.stage, e.message, e.line) == ("fragment", "syntax error", 12)
    assert e == CompileError("fragment", "syntax error", 12)
    assert e != CompileError("fragment", "syntax error")
    assert "line 12" in repr(e)
    assert "line" not in repr(CompileError("link", "failed"))

    with pytest.raises(ValueError):
        CompileError("geometry", "oops")


def test_parse_compile_errors():
    log = (
        "ERROR: 0:12: 'foo' : undeclared identifier\n"
        "ERROR: 0:15: '' : syntax error\n"
        "\n"
        "Link failed"
    )
    errors = parse_compile_errors(log, "fragment")
    assert errors == [
        CompileError("fragment", "'foo' : undeclared identifier", 12),
        CompileError("fragment", "'' : syntax error", 15),
        CompileError("fragment", "Link failed"),
    ]
    assert parse_compile_errors("", "vertex") == []


def test_renderer_interface():
    r = RendererInterface()
    with pytest.raises(NotImplementedError):
        r.compile("", "")
    with pytest.raises(NotImplementedError):
        r.set_uniform("u_x", "float", 0.0)


def test_sync_uniforms():
    xs = [EffectInstance("gradient", "a1"), EffectInstance("glow-waves", "b2")]
    composed = compose(xs, 2, default_registry)
    renderer = RecordingRenderer()

    sync_uniforms(renderer, composed.params, {"a1_angle": 180, "b2_breathColor": "#ff0000"})

    assert set(renderer.uniforms) == {p.uniform_name for p in composed.params}
    kind, value = renderer.uniforms["u_a1_angle"]
    assert kind == "float"
    assert value == pytest.approx(math.pi)
    assert renderer.uniforms["u_a1_midpoint"] == ("float", 0.5)
    assert renderer.uniforms["u_b2_breathColor"] == ("color", (1.0, 0.0, 0.0))


def test_sync_colors():
    renderer = RecordingRenderer()
    sync_colors(renderer, ["#ff0000", "#0000ff"])
    assert renderer.uniforms == {
        "u_color0": ("color", (1.0, 0.0, 0.0)),
        "u_color1": ("color", (0.0, 0.0, 1.0)),
    }
