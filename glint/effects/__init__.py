"""
Effects are the building blocks of a composed shader.

.. currentmodule:: glint.effects

.. autosummary::
    :toctree: effects/
    :template: ../_templates/custom_layout.rst

    EffectDefinition
    EffectInstance
    EffectRegistry
    BodyTemplate

The ``default_registry`` holds the builtin effects.
"""

# flake8: noqa

from ._base import (
    BodyTemplate,
    EffectDefinition,
    EffectInstance,
    generate_instance_id,
    category_band,
)
from ._registry import EffectRegistry
from .uv import UV_EFFECTS
from .generators import GENERATOR_EFFECTS
from .post import POST_EFFECTS


default_registry = EffectRegistry([*UV_EFFECTS, *GENERATOR_EFFECTS, *POST_EFFECTS])
