"""
The enums used in glint. The enums are all available from the root ``glint`` namespace.

.. currentmodule:: glint.utils.enums

.. autosummary::
    :toctree: utils/enums
    :template: ../_templates/custom_layout.rst

    ParamKind
    EffectCategory
    DisplayUnit
    ShaderStage

"""

from wgpu.utils import BaseEnum


__all__ = [
    "DisplayUnit",
    "EffectCategory",
    "ParamKind",
    "ShaderStage",
]


class Enum(BaseEnum):
    """Enum base class for glint."""


class ParamKind(Enum):
    """The ParamKind enum specifies the kind of value a parameter holds.

    The kind determines the GLSL type of the uniform, the shape of the
    default value, and the literal that is produced when baking.
    """

    float = None  #: A scalar float, declared as ``float``.
    int = None  #: An integer, declared as ``int``.
    bool = None  #: A toggle, declared as ``float`` (1.0 or 0.0).
    color = None  #: An rgb color stored as hex string, declared as ``vec3``.
    vec2 = None  #: A 2-component vector, declared as ``vec2``.
    select = None  #: A choice between numeric options, declared as ``float``.


class EffectCategory(Enum):
    """The EffectCategory enum specifies where in the program an effect runs."""

    uv_transform = "uv-transform"  #: Remaps the working coordinates before anything samples them.
    generator = None  #: Produces the mix factor that drives the color ramp.
    post = None  #: Reads and modifies the final working color.


class DisplayUnit(Enum):
    """The DisplayUnit enum specifies how a value is presented to the user."""

    degrees = None  #: Shown in degrees, sent to the shader in radians.


# The GLSL type for each parameter kind.
GLSL_TYPES = {
    ParamKind.float: "float",
    ParamKind.int: "int",
    ParamKind.bool: "float",
    ParamKind.color: "vec3",
    ParamKind.vec2: "vec2",
    ParamKind.select: "float",
}

# Categories run in this order, regardless of how instances are arranged.
CATEGORY_RANK = {
    EffectCategory.uv_transform: 0,
    EffectCategory.generator: 1,
    EffectCategory.post: 2,
}


class ShaderStage(Enum):
    """The ShaderStage enum specifies where a compile error occurred."""

    vertex = None  #: Compiling the vertex shader.
    fragment = None  #: Compiling the fragment shader.
    link = None  #: Linking the program.
