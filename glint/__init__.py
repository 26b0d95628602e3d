"""Glint: compose real-time fragment shaders from parameterized effects."""

# flake8: noqa

from ._version import __version__
from . import utils

from .utils import Color, ReadOnlyDict, enums, logger
from .utils.enums import *
from .params import (
    ParameterDeclaration,
    ScopedParameter,
    InvalidIdentifierError,
    scope,
    default_param_values,
    normalize_value,
    uniform_value,
)
from .effects import (
    EffectDefinition,
    EffectInstance,
    EffectRegistry,
    default_registry,
)
from .shader import (
    compose,
    ComposedSource,
    move_instance,
    preprocess_annotated,
    detect_uniforms,
    extract_parameters,
    bake_shader,
    register_glsl_loader,
    VERTEX_SOURCE,
)
from .renderer import (
    RendererInterface,
    CompileError,
    parse_compile_errors,
    sync_uniforms,
    sync_colors,
)
from .presets import Preset, presets, get_preset
from .templates import ShaderTemplate, templates
from .project import Project, MAX_COLORS
