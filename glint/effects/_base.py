import re
import random

from ..utils.enums import EffectCategory, CATEGORY_RANK
from ..params import ParameterDeclaration, ScopedParameter, check_fragment
from ..shader.helpers import HELPER_DEPENDENCIES


INSTANCE_ID_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"
INSTANCE_ID_LENGTH = 6

# Each category owns a band of 100 order values
BAND_SIZE = 100

re_placeholder = re.compile(r"\$(\w+)")


def generate_instance_id():
    """Generate a short random instance id."""
    return "".join(random.choices(INSTANCE_ID_CHARS, k=INSTANCE_ID_LENGTH))


def category_band(category):
    """Get the ``range`` of order values that belongs to the given category."""
    start = CATEGORY_RANK[category] * BAND_SIZE
    return range(start, start + BAND_SIZE)


class BodyTemplate:
    """A glsl snippet with ``$paramId`` placeholders.

    The source is split into literal text and placeholder tokens once, when
    the template is created. Rendering replaces each placeholder with a name
    obtained from a function, so no text is scanned twice.

    Parameters
    ----------
    source : str
        The glsl source of the snippet.
    param_ids : iterable of str
        The ids of the parameters that placeholders may refer to. A
        placeholder for any other name raises ValueError.
    """

    __slots__ = ["_source", "_tokens", "_names"]

    def __init__(self, source, param_ids):
        if not isinstance(source, str):
            raise TypeError(f"Body source must be a str, not {source!r}")
        param_ids = set(param_ids)

        # Tokens are (is_placeholder, text) tuples
        tokens = []
        names = []
        pos = 0
        for m in re_placeholder.finditer(source):
            name = m.group(1)
            if name not in param_ids:
                raise ValueError(f"Unknown placeholder ${name} in effect body.")
            if m.start() > pos:
                tokens.append((False, source[pos : m.start()]))
            tokens.append((True, name))
            if name not in names:
                names.append(name)
            pos = m.end()
        if pos < len(source):
            tokens.append((False, source[pos:]))

        self._source = source
        self._tokens = tuple(tokens)
        self._names = tuple(names)

    def __repr__(self):
        return f"<BodyTemplate with {len(self._tokens)} tokens>"

    @property
    def source(self):
        """The original source, placeholders included."""
        return self._source

    @property
    def names(self):
        """The parameter ids referenced by this template, in order of first use."""
        return self._names

    def render(self, name_for):
        """Produce glsl, by calling ``name_for(param_id)`` for each placeholder."""
        return "".join(name_for(text) if is_ref else text for is_ref, text in self._tokens)


class EffectDefinition:
    """The definition of an effect: a reusable, parameterized piece of shader code.

    Parameters
    ----------
    id : str
        The unique id of the effect in a registry, e.g. "film-grain".
    name : str
        The human readable name. Also used to title the snippet in generated code.
    category : EffectCategory
        Where the effect runs: "uv-transform", "generator" or "post".
    order : int
        The position within the category. Must fall in the band of the category
        (0-99 for uv-transform, 100-199 for generator, 200-299 for post).
    params : list of ParameterDeclaration
        The declared parameters, in order.
    body : str
        The glsl snippet, with ``$paramId`` placeholders. A generator body
        is expected to set ``mixFactor``.
    description : str
        A short description.
    required_helpers : iterable of str
        The names of the helper functions that the body calls.
    post_mix_body : str | None
        For generators: a snippet that runs after ``color`` has been set.
    """

    __slots__ = [
        "_id",
        "_name",
        "_category",
        "_order",
        "_params",
        "_body",
        "_description",
        "_required_helpers",
        "_post_mix_body",
    ]

    def __init__(
        self,
        id,
        name,
        category,
        order,
        params,
        body,
        *,
        description="",
        required_helpers=(),
        post_mix_body=None,
    ):
        if not isinstance(id, str) or not id:
            raise TypeError(f"Effect id must be a nonempty str, not {id!r}")
        if category not in CATEGORY_RANK:
            raise ValueError(
                f"Effect category must be a string in {EffectCategory}, not {category!r}"
            )
        if not isinstance(order, int):
            raise TypeError(f"Effect order must be an int, not {order!r}")
        if order not in category_band(category):
            band = category_band(category)
            raise ValueError(
                f"Order {order} of effect '{id}' is outside the {category} band ({band.start}-{band.stop - 1})."
            )

        params = tuple(params)
        param_ids = []
        for param in params:
            if not isinstance(param, ParameterDeclaration):
                raise TypeError(f"Effect params must be ParameterDeclaration, not {param!r}")
            check_fragment("parameter id", param.id)
            if param.id in param_ids:
                raise ValueError(f"Duplicate parameter id '{param.id}' in effect '{id}'.")
            param_ids.append(param.id)

        required_helpers = tuple(required_helpers)
        unknown = set(required_helpers).difference(HELPER_DEPENDENCIES)
        if unknown:
            raise ValueError(
                f"Effect '{id}' requires unknown helper(s): {', '.join(sorted(unknown))}"
            )

        if post_mix_body is not None and category != EffectCategory.generator:
            raise ValueError("Only generator effects can have a post-mix body.")

        self._id = id
        self._name = name
        self._category = category
        self._order = order
        self._params = params
        self._body = BodyTemplate(body, param_ids)
        self._description = description
        self._required_helpers = required_helpers
        self._post_mix_body = None
        if post_mix_body is not None:
            self._post_mix_body = BodyTemplate(post_mix_body, param_ids)

    def __repr__(self):
        return f"<EffectDefinition '{self._id}' ({self._category}, {self._order})>"

    @property
    def id(self):
        return self._id

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return self._description

    @property
    def category(self):
        return self._category

    @property
    def order(self):
        return self._order

    @property
    def params(self):
        """The tuple of ParameterDeclaration objects."""
        return self._params

    @property
    def body(self):
        """The BodyTemplate of the main snippet."""
        return self._body

    @property
    def post_mix_body(self):
        """The BodyTemplate of the post-mix snippet, or None."""
        return self._post_mix_body

    @property
    def required_helpers(self):
        return self._required_helpers

    def scoped_params(self, instance_id):
        """Get the list of ScopedParameter objects for an instance of this effect."""
        return [ScopedParameter(instance_id, param) for param in self._params]


class EffectInstance:
    """The placement of an effect in a composition.

    Parameters
    ----------
    effect_id : str
        The id of the EffectDefinition this instance refers to.
    instance_id : str | None
        The id of this instance. Generated when not given.
    enabled : bool
        Whether the instance takes part in composition.
    """

    __slots__ = ["_effect_id", "_instance_id", "_enabled"]

    def __init__(self, effect_id, instance_id=None, *, enabled=True):
        if not isinstance(effect_id, str):
            raise TypeError(f"Effect id must be a str, not {effect_id!r}")
        if instance_id is None:
            instance_id = generate_instance_id()
        self._effect_id = effect_id
        self._instance_id = check_fragment("instance id", instance_id)
        self._enabled = bool(enabled)

    def __repr__(self):
        state = "" if self._enabled else " (disabled)"
        return f"<EffectInstance {self._instance_id} of '{self._effect_id}'{state}>"

    @property
    def effect_id(self):
        return self._effect_id

    @property
    def instance_id(self):
        return self._instance_id

    @property
    def enabled(self):
        """Whether this instance is included when composing."""
        return self._enabled

    @enabled.setter
    def enabled(self, value):
        self._enabled = bool(value)

    def to_dict(self):
        return {
            "instance_id": self._instance_id,
            "effect_id": self._effect_id,
            "enabled": self._enabled,
        }

    @classmethod
    def from_dict(cls, d):
        return cls(d["effect_id"], d["instance_id"], enabled=d.get("enabled", True))
