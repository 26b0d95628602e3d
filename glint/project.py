"""
A project is the complete, editable state of a composition: the effect
instances in the order the user placed them, the current parameter values,
and the color slots. Every structural change is applied to this state as a
whole, and the shader is composed again from scratch.
"""

from .utils import Color, logger
from .effects import EffectInstance, default_registry
from .params import default_param_values, normalize_value
from .presets import Preset, get_preset
from .renderer import sync_uniforms, sync_colors
from .shader import compose, move_instance, bake_shader, VERTEX_SOURCE, MAX_COLORS


MAX_HISTORY = 50
NEW_COLOR = "#808080"


def _new_instance(effect_id, used_ids, enabled=True):
    instance = EffectInstance(effect_id, enabled=enabled)
    while instance.instance_id in used_ids:
        logger.debug(f"Instance id {instance.instance_id} is taken, generating another.")
        instance = EffectInstance(effect_id, enabled=enabled)
    return instance


class Project:
    """The state of a composition, and the operations to edit it.

    Parameters
    ----------
    name : str
        The name of the project.
    registry : EffectRegistry | None
        The catalog of effects. Defaults to the builtin effects.
    """

    def __init__(self, name="Untitled", *, registry=None):
        self._registry = default_registry if registry is None else registry
        self._name = name
        self._instances = []
        self._values = {}
        self._colors = []
        self._undo_stack = []
        self._redo_stack = []

    def __repr__(self):
        return f"<Project '{self._name}' with {len(self._instances)} effects and {len(self._colors)} colors>"

    @property
    def name(self):
        """The name of the project."""
        return self._name

    @name.setter
    def name(self, name):
        self._name = str(name)

    @property
    def registry(self):
        """The EffectRegistry used to look up effects."""
        return self._registry

    @property
    def instances(self):
        """The tuple of EffectInstance objects, in the order the user placed them."""
        return tuple(self._instances)

    @property
    def values(self):
        """A copy of the value mapping (scoped id to value)."""
        return dict(self._values)

    @property
    def colors(self):
        """The tuple of hex colors of the color slots."""
        return tuple(self._colors)

    # %% History

    def _push_history(self):
        self._undo_stack.append(self.to_dict())
        del self._undo_stack[:-MAX_HISTORY]
        self._redo_stack.clear()

    def _restore(self, d):
        self._name = d["name"]
        self._instances = [EffectInstance.from_dict(x) for x in d["effects"]]
        self._values = dict(d["values"])
        self._colors = list(d["colors"])

    @property
    def can_undo(self):
        return bool(self._undo_stack)

    @property
    def can_redo(self):
        return bool(self._redo_stack)

    def undo(self):
        """Revert the last change. Returns False if there is nothing to undo."""
        if not self._undo_stack:
            return False
        self._redo_stack.append(self.to_dict())
        self._restore(self._undo_stack.pop())
        return True

    def redo(self):
        """Apply the last undone change again. Returns False if there is nothing to redo."""
        if not self._redo_stack:
            return False
        self._undo_stack.append(self.to_dict())
        self._restore(self._redo_stack.pop())
        return True

    # %% Effects

    def _index_of(self, instance_id):
        for i, instance in enumerate(self._instances):
            if instance.instance_id == instance_id:
                return i
        raise KeyError(f"No effect instance '{instance_id}' in project.")

    def add_effect(self, effect_id):
        """Add an instance of the given effect at the end, with default values.

        Returns the new EffectInstance. Raises KeyError for an unknown effect.
        """
        if self._registry.get(effect_id) is None:
            raise KeyError(f"Unknown effect '{effect_id}'.")
        used_ids = {x.instance_id for x in self._instances}
        instance = _new_instance(effect_id, used_ids)

        self._push_history()
        self._instances.append(instance)
        self._values.update(self._default_values(instance))
        return instance

    def _default_values(self, instance):
        definition = self._registry.get(instance.effect_id)
        if definition is None:
            return {}
        return default_param_values(definition.scoped_params(instance.instance_id))

    def remove_effect(self, instance_id):
        """Remove an effect instance, and the values of its parameters."""
        index = self._index_of(instance_id)
        self._push_history()
        self._instances.pop(index)
        prefix = instance_id + "_"
        self._values = {k: v for k, v in self._values.items() if not k.startswith(prefix)}

    def toggle_effect(self, instance_id, enabled=None):
        """Enable or disable an effect instance. Toggles if enabled is None."""
        instance = self._instances[self._index_of(instance_id)]
        self._push_history()
        instance.enabled = not instance.enabled if enabled is None else enabled

    def move_effect(self, from_index, to_index):
        """Move an instance to another position within its category."""
        new_order = move_instance(self._instances, from_index, to_index, self._registry)
        if new_order != self._instances:
            self._push_history()
            self._instances = new_order

    # %% Values

    def _scoped_params(self):
        params = {}
        for instance in self._instances:
            definition = self._registry.get(instance.effect_id)
            if definition is not None:
                for param in definition.scoped_params(instance.instance_id):
                    params[param.id] = param
        return params

    def get_value(self, scoped_id):
        """Get the current value of a parameter, or its default if it has no value."""
        params = self._scoped_params()
        if scoped_id not in params:
            raise KeyError(f"No parameter '{scoped_id}' in project.")
        return self._values.get(scoped_id, params[scoped_id].default)

    def set_value(self, scoped_id, value):
        """Set the value of a parameter, by its scoped id.

        The value is normalized for the kind of the parameter, e.g. colors
        are stored as hex. Raises ValueError for a value that does not fit.
        """
        params = self._scoped_params()
        if scoped_id not in params:
            raise KeyError(f"No parameter '{scoped_id}' in project.")
        value = normalize_value(params[scoped_id], value)
        self._push_history()
        self._values[scoped_id] = value

    # %% Colors

    def _check_color_index(self, index):
        if not -len(self._colors) <= index < len(self._colors):
            raise IndexError(f"No color slot at index {index}.")

    def add_color(self, color=NEW_COLOR):
        """Add a color slot. At most MAX_COLORS slots are allowed."""
        if len(self._colors) >= MAX_COLORS:
            raise ValueError(f"A project can have at most {MAX_COLORS} colors.")
        color = Color(color).hex
        self._push_history()
        self._colors.append(color)

    def set_color(self, index, color):
        """Set the color of the slot at the given index."""
        self._check_color_index(index)
        color = Color(color).hex
        self._push_history()
        self._colors[index] = color

    def remove_color(self, index):
        """Remove the color slot at the given index."""
        self._check_color_index(index)
        self._push_history()
        self._colors.pop(index)

    # %% Output

    def compose(self):
        """Compose the fragment shader. Returns a ComposedSource."""
        return compose(self._instances, len(self._colors), self._registry)

    def bake(self):
        """Get the fragment source with all parameters and colors baked in."""
        composed = self.compose()
        return bake_shader(composed.source, composed.params, self._values, self._colors)

    def sync(self, renderer):
        """Compile the composed shader with the renderer, and set all uniforms.

        Returns None on success, or the list of CompileError objects. On
        failure, no uniforms are set.
        """
        composed = self.compose()
        errors = renderer.compile(VERTEX_SOURCE, composed.source)
        if errors:
            return errors
        sync_uniforms(renderer, composed.params, self._values)
        sync_colors(renderer, self._colors)
        return None

    # %% Persistence

    def to_dict(self):
        """Get the state as a dict of plain (json-compatible) values."""
        return {
            "name": self._name,
            "effects": [x.to_dict() for x in self._instances],
            "values": {
                k: list(v) if isinstance(v, tuple) else v for k, v in self._values.items()
            },
            "colors": list(self._colors),
        }

    @classmethod
    def from_dict(cls, d, *, registry=None):
        """Create a project from a dict produced by ``to_dict()``.

        An instance id that occurs more than once is replaced with a new id
        (with default values) for all but the first occurrence. More than
        MAX_COLORS colors raise a ValueError.
        """
        colors = [Color(c).hex for c in d.get("colors", [])]
        if len(colors) > MAX_COLORS:
            raise ValueError(f"A project can have at most {MAX_COLORS} colors, got {len(colors)}.")

        project = cls(d.get("name", "Untitled"), registry=registry)
        values = dict(d.get("values", {}))
        instances = []
        used_ids = set()
        for x in d.get("effects", []):
            instance = EffectInstance.from_dict(x)
            if instance.instance_id in used_ids:
                old_id = instance.instance_id
                instance = _new_instance(instance.effect_id, used_ids, instance.enabled)
                logger.warning(f"Duplicate instance id '{old_id}', using '{instance.instance_id}'.")
                values.update(project._default_values(instance))
            used_ids.add(instance.instance_id)
            instances.append(instance)

        project._instances = instances
        project._values = values
        project._colors = colors
        return project

    @classmethod
    def from_preset(cls, preset, *, registry=None):
        """Create a project from a Preset or the id of a builtin preset."""
        if not isinstance(preset, Preset):
            preset = get_preset(preset)
        project = cls(preset.name, registry=registry)
        instances, values, colors = preset.instantiate(project._registry)
        project._instances = instances
        project._values = values
        project._colors = [Color(c).hex for c in colors]
        return project
