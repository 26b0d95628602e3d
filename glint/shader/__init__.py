"""
The shader module generates glsl: composing effects into a fragment shader,
preprocessing annotated templates, and baking values into literals.

.. currentmodule:: glint.shader

.. autosummary::
    :toctree: shader/

    compose
    ComposedSource
    move_instance
    preprocess_annotated
    detect_uniforms
    extract_parameters
    bake_shader
    build_color_ramp
    resolve_helpers
    register_glsl_loader

"""

# flake8: noqa

from .templating import register_glsl_loader, apply_templating
from .helpers import resolve_helpers, resolve_helper_order
from .colorramp import build_color_ramp, evaluate_color_ramp, MAX_COLORS
from .annotations import (
    preprocess_annotated,
    detect_uniforms,
    extract_parameters,
    infer_param,
    infer_group,
)
from .composer import compose, ComposedSource, move_instance, VERTEX_SOURCE
from .bake import bake_shader, bake_colors, to_glsl_literal, format_float
