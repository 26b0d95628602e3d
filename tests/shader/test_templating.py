import jinja2
import pytest

from glint.shader import apply_templating, register_glsl_loader


def test_apply_templating():
    code = "float x = {{ value }};\n$$ if flag\nx *= 2.0;\n$$ endif\n"
    assert apply_templating(code, value="1.0", flag=False) == "float x = 1.0;\n"
    assert apply_templating(code, value="1.0", flag=True) == "float x = 1.0;\nx *= 2.0;\n"


def test_apply_templating_braces():
    # Glsl braces do not clash with the template syntax
    code = "void main() { {$ if x $}color = vec3(1.0);{$ endif $} }"
    assert apply_templating(code, x=True) == "void main() { color = vec3(1.0); }"


def test_apply_templating_undefined():
    with pytest.raises(ValueError) as err:
        apply_templating("float x = {{ value }};")
    assert "Cannot compose shader" in str(err.value)


def test_include_builtin_helper():
    code = "{$ include 'glint.hash.glsl' $}"
    assert apply_templating(code).startswith("float hash(vec2 p) {")


def test_register_glsl_loader():
    register_glsl_loader("tests1", {"tint.glsl": "color *= {{ amount }};"})
    register_glsl_loader("tests2", lambda name: f"// {name}")
    register_glsl_loader("tests3", jinja2.DictLoader({"x.glsl": "x"}))

    assert apply_templating("{$ include 'tests1.tint.glsl' $}", amount="0.5") == "color *= 0.5;"
    assert apply_templating("{$ include 'tests2.foo.glsl' $}") == "// foo.glsl"
    assert apply_templating("{$ include 'tests3.x.glsl' $}") == "x"

    # Already registered
    with pytest.raises(RuntimeError):
        register_glsl_loader("tests1", {})
    # Invalid context
    with pytest.raises(TypeError):
        register_glsl_loader("tests.4", {})
    with pytest.raises(TypeError):
        register_glsl_loader(4, {})
    # Invalid loader
    with pytest.raises(TypeError):
        register_glsl_loader("tests5", 42)
