"""
Baking replaces uniforms with literal values, so that the source can be
used without anything setting these uniforms. The built-in ``u_time``
and ``u_resolution`` are never baked.
"""

import re

from ..utils import hex_to_rgb
from ..utils.enums import ParamKind
from ..params import uniform_value
from .colorramp import color_uniform_name


def format_float(value):
    """Format a float as a glsl literal with at most 6 decimals, e.g. "0.5" or "2.0"."""
    text = f"{float(value):.6f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def _format_vec(name, values):
    return f"{name}({', '.join(format_float(v) for v in values)})"


# Format a shader-side value (see uniform_value) as glsl, per kind
_LITERAL_FORMATTERS = {
    ParamKind.float: format_float,
    ParamKind.int: str,
    ParamKind.bool: format_float,
    ParamKind.color: lambda rgb: _format_vec("vec3", rgb),
    ParamKind.vec2: lambda xy: _format_vec("vec2", xy),
    ParamKind.select: format_float,
}


def to_glsl_literal(param, value=None):
    """Get the glsl literal for the value of the given parameter.

    When value is None, the parameter's default is used. Degrees are
    converted to radians, as when the value is sent to the renderer.
    """
    return _LITERAL_FORMATTERS[param.kind](uniform_value(param, value))


def strip_declaration(source, glsl_type, uniform_name):
    """Remove the declaration line of the given uniform."""
    pattern = rf"^[ \t]*uniform\s+{glsl_type}\s+{uniform_name}\s*;[ \t]*\n?"
    return re.sub(pattern, "", source, flags=re.MULTILINE)


def substitute(source, uniform_name, literal):
    """Replace every reference to the given uniform with the literal."""
    return re.sub(rf"\b{uniform_name}\b", lambda m: literal, source)


def _bake(source, items):
    # Declarations must all be gone before names are replaced with literals
    for glsl_type, uniform_name, _ in items:
        source = strip_declaration(source, glsl_type, uniform_name)
    for _, uniform_name, literal in items:
        source = substitute(source, uniform_name, literal)
    return re.sub(r"\n{3,}", "\n\n", source)


def bake_shader(source, params, values, colors=()):
    """Bake parameters and colors into the source.

    Parameters
    ----------
    source : str
        The shader source, e.g. from ``compose()`` or ``preprocess_annotated()``.
    params : list
        The parameters to bake (ScopedParameter or ParameterDeclaration objects).
    values : dict
        The current values, keyed by parameter id. Missing values fall back
        to the parameter's default.
    colors : list
        The values of the color slots.

    Returns
    -------
    source : str
        The source without declarations or references for the baked uniforms.
    """
    items = [
        (p.glsl_type, p.uniform_name, to_glsl_literal(p, values.get(p.id)))
        for p in params
    ]
    for i, color in enumerate(colors):
        items.append(("vec3", color_uniform_name(i), _format_vec("vec3", hex_to_rgb(color))))
    return _bake(source, items)


def bake_colors(source, colors):
    """Bake only the color slots into the source."""
    return bake_shader(source, (), {}, colors)
