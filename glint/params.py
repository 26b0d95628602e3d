"""
Parameters are the runtime-configurable knobs of a shader. An effect
definition (or an annotated template) declares them, and each placement of
an effect binds them to an instance, which yields globally unique scoped
names. The current values live in a flat dict that maps scoped id to value;
this module also converts such values to what the renderer expects.
"""

import re
import math

from .utils import Color, hex_to_rgb
from .utils.enums import ParamKind, DisplayUnit, GLSL_TYPES


# The character that joins an instance id and a parameter id.
DELIMITER = "_"

re_fragment = re.compile(r"^[A-Za-z0-9]+$")
re_identifier = re.compile(r"^\w+$")


class InvalidIdentifierError(ValueError):
    """Raised when an id cannot safely be concatenated into a generated name."""


def check_fragment(what, value):
    """Check that the given value can be used as one side of a scoped name.

    Raises InvalidIdentifierError when the value is not an alphanumeric
    identifier fragment (in particular when it contains the delimiter).
    """
    if not isinstance(value, str) or not re_fragment.match(value):
        raise InvalidIdentifierError(
            f"Invalid {what} {value!r}: must be alphanumeric and cannot contain {DELIMITER!r}."
        )
    return value


def scope(instance_id, param_id):
    """Get the ``(scoped_id, uniform_name)`` for a parameter of an effect instance.

    Both ids are validated when their owners are created, so this
    function does not check them again.
    """
    scoped_id = f"{instance_id}{DELIMITER}{param_id}"
    return scoped_id, f"u_{scoped_id}"


def format_label(id):
    """Turn an id like "driftSpeed1" or "grad_low" into "Drift Speed1" / "Grad Low"."""
    label = re.sub(r"([A-Z])", r" \1", id)
    label = re.sub(r"[_-]", " ", label).lstrip()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), label)


def _normalize_vec2(value):
    x, y = value
    return float(x), float(y)


def _round_half_up(value):
    return int(math.floor(float(value) + 0.5))


# How a value (or default) is normalized, per kind
_NORMALIZERS = {
    ParamKind.float: float,
    ParamKind.int: _round_half_up,
    ParamKind.bool: float,
    ParamKind.color: lambda v: Color(v).hex,
    ParamKind.vec2: _normalize_vec2,
    ParamKind.select: float,
}


class ParameterDeclaration:
    """The declaration of a single parameter.

    Parameters
    ----------
    id : str
        The id of the parameter, unique within its effect or template.
    kind : ParamKind
        The kind of value. Determines the GLSL type and the literal format.
    default : float | int | str | tuple
        The default value. Colors are given as hex strings, vec2 as a tuple.
    label : str | None
        The human readable name. Derived from the id if not given.
    min, max, step : float | None
        The numeric range for UI controls.
    display_unit : DisplayUnit | None
        The unit the value is presented in. Degrees are converted to radians
        before reaching the shader.
    group : str
        A label to organize controls. Not used when generating code.
    options : list | None
        For select parameters, a list of ``(label, value)`` tuples.
    """

    __slots__ = [
        "_id",
        "_kind",
        "_default",
        "_label",
        "_min",
        "_max",
        "_step",
        "_display_unit",
        "_group",
        "_options",
    ]

    def __init__(
        self,
        id,
        kind,
        default,
        *,
        label=None,
        min=None,
        max=None,
        step=None,
        display_unit=None,
        group="effects",
        options=None,
    ):
        if not isinstance(id, str):
            raise TypeError(f"Parameter id must be a str, not {id!r}")
        if not re_identifier.match(id):
            raise InvalidIdentifierError(f"Invalid parameter id {id!r}.")
        if kind not in ParamKind:
            raise ValueError(f"Parameter kind must be a string in {ParamKind}, not {kind!r}")
        if display_unit is not None and display_unit not in DisplayUnit:
            raise ValueError(
                f"Parameter display_unit must be None or a string in {DisplayUnit}, not {display_unit!r}"
            )

        self._id = id
        self._kind = kind
        self._default = _NORMALIZERS[kind](default)
        self._label = label or format_label(id)
        self._min = min
        self._max = max
        self._step = step
        self._display_unit = display_unit
        self._group = group
        self._options = tuple(options) if options else ()

    def __repr__(self):
        return f"<ParameterDeclaration {self._id!r} ({self._kind}) default={self._default!r}>"

    @property
    def id(self):
        """The parameter id."""
        return self._id

    @property
    def kind(self):
        """The ParamKind of this parameter."""
        return self._kind

    @property
    def default(self):
        """The (normalized) default value."""
        return self._default

    @property
    def label(self):
        return self._label

    @property
    def min(self):
        return self._min

    @property
    def max(self):
        return self._max

    @property
    def step(self):
        return self._step

    @property
    def display_unit(self):
        return self._display_unit

    @property
    def group(self):
        return self._group

    @property
    def options(self):
        """The ``(label, value)`` options of a select parameter."""
        return self._options

    @property
    def glsl_type(self):
        """The GLSL type of the uniform for this parameter."""
        return GLSL_TYPES[self._kind]

    @property
    def uniform_name(self):
        """The name of the (unscoped) uniform, used by annotated templates."""
        return f"u_{self._id}"


class ScopedParameter:
    """A parameter declaration bound to a specific effect instance.

    The ``id`` is the key into the value dict, and ``uniform_name`` is the
    name of the uniform in the composed shader. Other attributes are
    those of the declaration.
    """

    __slots__ = ["_instance_id", "_declaration", "_id", "_uniform_name"]

    def __init__(self, instance_id, declaration):
        self._instance_id = instance_id
        self._declaration = declaration
        self._id, self._uniform_name = scope(instance_id, declaration.id)

    def __repr__(self):
        return f"<ScopedParameter {self._uniform_name} ({self.kind})>"

    @property
    def id(self):
        """The scoped id, i.e. ``"{instance_id}_{param_id}"``."""
        return self._id

    @property
    def uniform_name(self):
        """The scoped uniform name, i.e. ``"u_{scoped_id}"``."""
        return self._uniform_name

    @property
    def instance_id(self):
        return self._instance_id

    @property
    def declaration(self):
        """The ParameterDeclaration this parameter was derived from."""
        return self._declaration

    @property
    def kind(self):
        return self._declaration.kind

    @property
    def default(self):
        return self._declaration.default

    @property
    def label(self):
        return self._declaration.label

    @property
    def group(self):
        return self._declaration.group

    @property
    def display_unit(self):
        return self._declaration.display_unit

    @property
    def glsl_type(self):
        return self._declaration.glsl_type


def default_param_values(params):
    """Build a value dict from the defaults of the given parameters."""
    return {p.id: p.default for p in params}


def normalize_value(param, value):
    """Normalize a value for the given parameter, like its default is.

    Raises ValueError when the value does not fit the kind of the parameter.
    """
    try:
        return _NORMALIZERS[param.kind](value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value {value!r} for {param.kind} parameter '{param.id}'.") from None


def _scalar_value(param, value):
    value = float(value)
    if param.display_unit == DisplayUnit.degrees:
        value = math.radians(value)
    return value


# Convert a stored value to what gets sent to the shader, per kind
_VALUE_CONVERTERS = {
    ParamKind.float: _scalar_value,
    ParamKind.int: lambda p, v: _round_half_up(v),
    ParamKind.bool: lambda p, v: 1.0 if float(v) > 0.5 else 0.0,
    ParamKind.color: lambda p, v: hex_to_rgb(v),
    ParamKind.vec2: lambda p, v: _normalize_vec2(v),
    ParamKind.select: _scalar_value,
}


def uniform_value(param, value=None):
    """Get the shader-side value for the given parameter.

    When value is None, the parameter's default is used. Degrees are
    converted to radians, bools become 1.0 or 0.0, colors become an rgb
    tuple, and ints are rounded.
    """
    if value is None:
        value = param.default
    return _VALUE_CONVERTERS[param.kind](param, value)
