"""
Composition turns an ordered list of effect instances into a single
fragment shader. Effects run per category (uv transforms, then generators,
then post effects), while the order that the user chose is kept within
each category. Multiple generators are layered: every generator after
the first only shows where its mix factor is clearly away from 0.5.
"""

from ..utils import logger
from ..utils.enums import CATEGORY_RANK, EffectCategory
from .templating import apply_templating
from .helpers import resolve_helpers
from .colorramp import build_color_ramp


VERTEX_SOURCE = """attribute vec2 a_position;
void main() {
  gl_Position = vec4(a_position, 0.0, 1.0);
}"""


PROGRAM_TEMPLATE = """
precision mediump float;
uniform float u_time;
uniform vec2 u_resolution;
$$ for i in range(color_count)
uniform vec3 u_color{{ i }};
$$ endfor
$$ if declarations

{{ declarations }}
$$ endif
$$ if helpers

{{ helpers }}
$$ endif

{{ color_ramp }}

void main() {
  vec2 uv = gl_FragCoord.xy / u_resolution;
  float aspect = u_resolution.x / u_resolution.y;
  vec2 st = uv * vec2(aspect, 1.0);
  float t = u_time;
  vec3 color = vec3(0.0);
  float mixFactor = 0.5;
$$ if uv_snippets

$$ for snippet in uv_snippets
{{ snippet }}
$$ endfor
$$ endif
$$ for layer in generators
$$ if loop.first

{{ layer.snippet }}

  color = colorRamp(mixFactor);
$$ else

  vec3 _prevColor{{ loop.index0 }} = color;
  mixFactor = 0.5;

{{ layer.snippet }}

  float _layerBlend{{ loop.index0 }} = smoothstep(0.0, 1.0, abs(mixFactor - 0.5) * 2.0);
  color = mix(_prevColor{{ loop.index0 }}, colorRamp(mixFactor), _layerBlend{{ loop.index0 }});
$$ endif
$$ if layer.post_mix

{{ layer.post_mix }}
$$ endif
$$ else

  color = colorRamp(mixFactor);
$$ endfor
$$ if post_snippets

$$ for snippet in post_snippets
{{ snippet }}
$$ endfor
$$ endif

  color = clamp(color, 0.0, 1.0);
  gl_FragColor = vec4(color, 1.0);
}
"""


class ComposedSource:
    """The result of composition: the fragment source and its parameters.

    The ``params`` are the ScopedParameter objects for which a uniform
    was declared, in declaration order. These are the uniforms that must
    be kept in sync with the renderer, and the ones that are baked on export.
    """

    __slots__ = ["_source", "_params", "_color_count"]

    def __init__(self, source, params, color_count):
        self._source = source
        self._params = tuple(params)
        self._color_count = color_count

    def __repr__(self):
        return f"<ComposedSource with {len(self._params)} params and {self._color_count} colors>"

    def __str__(self):
        return self._source

    @property
    def source(self):
        """The fragment shader source."""
        return self._source

    @property
    def vertex_source(self):
        """The vertex shader source to go with the fragment source."""
        return VERTEX_SOURCE

    @property
    def params(self):
        """The tuple of ScopedParameter objects declared in the source."""
        return self._params

    @property
    def color_count(self):
        """The number of color slot uniforms declared in the source."""
        return self._color_count


def format_snippet(title, code):
    """Indent a snippet into the body of main, titled with a comment."""
    return f"  // [{title}]\n  " + "\n  ".join(code.split("\n"))


def resolve_active(instances, registry):
    """Get the ``(instance, definition)`` pairs that take part in composition.

    Disabled instances and instances of unknown effects are skipped. The
    pairs are sorted by category; the sort is stable, so the given order is
    kept within a category.
    """
    active = []
    for instance in instances:
        if not instance.enabled:
            continue
        definition = registry.get(instance.effect_id)
        if definition is None:
            logger.debug(f"Skipping instance {instance.instance_id} of unknown effect '{instance.effect_id}'.")
            continue
        active.append((instance, definition))
    active.sort(key=lambda pair: CATEGORY_RANK[pair[1].category])
    return active


def compose(instances, color_count, registry):
    """Compose a fragment shader from effect instances.

    Parameters
    ----------
    instances : list of EffectInstance
        The instances, in the order that the user placed them.
    color_count : int
        The number of active color slots.
    registry : EffectRegistry
        The catalog to look up effect definitions in.

    Returns
    -------
    composed : ComposedSource
        The source, plus the parameters for which uniforms are declared.
    """
    active = resolve_active(instances, registry)

    seen_ids = set()
    for instance, _ in active:
        if instance.instance_id in seen_ids:
            raise ValueError(f"Duplicate instance id '{instance.instance_id}'.")
        seen_ids.add(instance.instance_id)

    required_helpers = set()
    for _, definition in active:
        required_helpers.update(definition.required_helpers)

    all_params = []
    uv_snippets = []
    generators = []
    post_snippets = []

    for instance, definition in active:
        params = definition.scoped_params(instance.instance_id)
        all_params.extend(params)
        names = {p.declaration.id: p.uniform_name for p in params}
        snippet = format_snippet(definition.name, definition.body.render(names.__getitem__))
        if definition.category == EffectCategory.uv_transform:
            uv_snippets.append(snippet)
        elif definition.category == EffectCategory.generator:
            post_mix = None
            if definition.post_mix_body is not None:
                post_mix = format_snippet(
                    f"{definition.name} post-mix",
                    definition.post_mix_body.render(names.__getitem__),
                )
            generators.append({"snippet": snippet, "post_mix": post_mix})
        else:
            post_snippets.append(snippet)

    declarations = [f"uniform {p.glsl_type} {p.uniform_name};" for p in all_params]

    source = apply_templating(
        PROGRAM_TEMPLATE,
        color_count=color_count,
        declarations="\n".join(declarations),
        helpers=resolve_helpers(required_helpers),
        color_ramp=build_color_ramp(color_count),
        uv_snippets=uv_snippets,
        generators=generators,
        post_snippets=post_snippets,
    )
    return ComposedSource(source.strip(), all_params, color_count)


def _category_of(instance, registry):
    definition = registry.get(instance.effect_id)
    return None if definition is None else definition.category


def move_instance(instances, from_index, to_index, registry):
    """Move an instance to another position, within its own category.

    Returns a new list. The target index is clamped to the range of
    indices that instances of the same category occupy. Moving onto an
    instance of another category, or moving an instance of an unknown
    effect, leaves the order unchanged.
    """
    result = list(instances)
    if not 0 <= from_index < len(result):
        raise IndexError(f"Cannot move instance at index {from_index}.")

    category = _category_of(result[from_index], registry)
    if category is None:
        return result
    if 0 <= to_index < len(result):
        if _category_of(result[to_index], registry) != category:
            return result

    indices = [i for i, x in enumerate(result) if _category_of(x, registry) == category]
    to_index = min(max(to_index, indices[0]), indices[-1])
    if to_index != from_index:
        result.insert(to_index, result.pop(from_index))
    return result
