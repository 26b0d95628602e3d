"""
The annotation path: an alternative to composing effects, for hand-written
shader templates. A literal value in the template can be annotated to make
it a parameter::

    float speed = /*@float:driftSpeed*/ 0.03 /*@*/;
    vec3 tint = /*@color:tint group:Colors*/ vec3(1.0, 0.5, 0.2) /*@*/;

Preprocessing replaces each annotated literal with a uniform reference,
infers a parameter declaration from the literal, and injects the uniform
declarations into the source.
"""

import re
import math

from ..utils import logger
from ..utils.enums import ParamKind
from ..params import ParameterDeclaration


ANNOTATION_RE = re.compile(r"/\*@(\w+):(\w+)(?:\s+group:(\w+))?\*/\s*(.*?)\s*/\*@\*/", re.DOTALL)

UNIFORM_RE = re.compile(r"uniform\s+(float|vec[23]|int|bool)\s+(u_\w+)\s*;")

# Uniforms that are set by the renderer and never become parameters
RESERVED_UNIFORMS = {"u_time", "u_resolution", "u_texture"}

re_uniform_line = re.compile(r"^\s*uniform\s+")
re_precision_line = re.compile(r"^\s*precision\s+")
re_float_prefix = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")
re_int_prefix = re.compile(r"^\s*[-+]?\d+")
re_vec = re.compile(r"vec\d\s*\(([^)]*)\)")

# Map the kind in an annotation (or a glsl type) to a ParamKind
ANNOTATION_KINDS = {
    "color": ParamKind.color,
    "vec3": ParamKind.color,
    "vec2": ParamKind.vec2,
    "int": ParamKind.int,
    "bool": ParamKind.bool,
    "float": ParamKind.float,
}

# Keywords in a parameter name, and the group they suggest. First match wins.
GROUP_KEYWORDS = [
    ("animation", ("speed", "drift", "time")),
    ("effects", ("grain", "bright", "vignette")),
    ("noise", ("warp", "noise", "scale", "fbm")),
    ("waves", ("wave", "displace", "freq", "amplitude")),
    ("blending", ("mix", "smooth")),
    ("mask", ("mask",)),
    ("transform", ("rotation", "angle")),
]


def infer_group(name, kind):
    """Guess a group label for a parameter from its name."""
    if kind == ParamKind.color:
        return "colors"
    lower = name.lower()
    for group, keywords in GROUP_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return group
        if group == "blending" and "grad" in lower and ("low" in lower or "high" in lower):
            return group
    return "effects"


def _parse_float(text):
    m = re_float_prefix.match(text)
    return float(m.group(0)) if m else None


def _parse_int(text):
    m = re_int_prefix.match(text)
    return int(m.group(0)) if m else None


def _parse_vec(text, count):
    m = re_vec.search(text)
    if not m:
        return None
    parts = [_parse_float(p) for p in m.group(1).split(",")]
    if len(parts) < count or None in parts[:count]:
        return None
    return tuple(parts[:count])


def _vec3_to_hex(text):
    rgb = _parse_vec(text, 3)
    if rgb is None or not text.lstrip().startswith("vec3"):
        return None
    ints = [min(255, max(0, int(math.floor(c * 255 + 0.5)))) for c in rgb]
    return "#" + "".join(f"{i:02x}" for i in ints)


# Parse a literal, and the value to use when it cannot be parsed
_LITERAL_PARSERS = {
    ParamKind.float: (_parse_float, 0.0),
    ParamKind.int: (_parse_int, 0),
    ParamKind.bool: (_parse_float, 0.0),
    ParamKind.color: (_vec3_to_hex, "#000000"),
    ParamKind.vec2: (lambda text: _parse_vec(text, 2), (0.0, 0.0)),
    ParamKind.select: (_parse_float, 0.0),
}


def _auto_range(kind, value):
    """Get (min, max, step) for an inferred parameter."""
    if kind == ParamKind.color:
        return None, None, 0.01
    elif kind == ParamKind.bool:
        return 0, 1, 1
    elif kind == ParamKind.int:
        return min(0, math.floor(value) - 5), max(10, math.ceil(value) + 10), 1
    # Float and vec2 (for which the range does not depend on the value)
    value = value if isinstance(value, (int, float)) else 0.0
    abs_value = abs(value)
    if abs_value < 0.001:
        lo, hi = 0.0, 1.0
    else:
        lo = min(0.0, value - abs_value)
        hi = max(abs_value * 0.1, value + abs_value * 2)
    return lo, hi, max(0.001, (hi - lo) / 200)


def infer_param(name, kind, literal, group=None):
    """Create a ParameterDeclaration from an annotated literal.

    Parameters
    ----------
    name : str
        The name in the annotation, used as the parameter id.
    kind : str
        The kind in the annotation, e.g. "float" or "color".
    literal : str
        The glsl literal that was annotated.
    group : str | None
        The group given in the annotation. Inferred from the name if not given.
    """
    kind = ANNOTATION_KINDS.get(kind, ParamKind.float)
    parse, fallback = _LITERAL_PARSERS[kind]
    value = parse(literal.strip())
    if value is None:
        logger.warning(f"Cannot parse {kind} literal {literal!r} for '{name}', using {fallback!r}.")
        value = fallback
    lo, hi, step = _auto_range(kind, value)
    return ParameterDeclaration(
        name,
        kind,
        value,
        min=lo,
        max=hi,
        step=step,
        group=group.lower() if group else infer_group(name, kind),
    )


def _is_declared(source, uniform_name):
    return re.search(rf"uniform\s+\w+\s+{uniform_name}\s*;", source) is not None


def inject_declarations(source, declarations):
    """Insert uniform declaration lines into the source.

    They go after the last existing uniform declaration, or after the
    precision line if there are no uniforms, or else at the top.
    """
    if not declarations:
        return source
    block = "\n".join(declarations)
    lines = source.split("\n")
    uniform_indices = [i for i, line in enumerate(lines) if re_uniform_line.match(line)]
    if uniform_indices:
        lines.insert(uniform_indices[-1] + 1, block)
    else:
        precision_indices = [i for i, line in enumerate(lines) if re_precision_line.match(line)]
        if precision_indices:
            lines[precision_indices[0] + 1 : precision_indices[0] + 1] = ["", block]
        else:
            lines.insert(0, block)
    return "\n".join(lines)


def preprocess_annotated(source, existing=()):
    """Turn annotated literals into uniforms.

    Parameters
    ----------
    source : str
        The annotated glsl source.
    existing : list of ParameterDeclaration
        Parameters known from an earlier pass. An annotation with the same
        name reuses the existing declaration, so that adjusted ranges and
        defaults survive edits of the source.

    Returns
    -------
    result : tuple
        The rewritten source, and the list of ParameterDeclaration objects
        in order of first appearance.
    """
    existing = {p.id: p for p in existing}
    params = {}

    def replace(m):
        kind, name, group, literal = m.groups()
        if name not in params:
            if name in existing:
                params[name] = existing[name]
            else:
                params[name] = infer_param(name, kind, literal, group)
        return params[name].uniform_name

    processed = ANNOTATION_RE.sub(replace, source)

    declarations = [
        f"uniform {p.glsl_type} {p.uniform_name};"
        for p in params.values()
        if not _is_declared(processed, p.uniform_name)
    ]
    return inject_declarations(processed, declarations), list(params.values())


# The generic parameters for plain uniform declarations, per glsl type
_DETECTED_DEFAULTS = {
    "float": (ParamKind.float, 0.5, dict(min=0, max=1, step=0.01)),
    "bool": (ParamKind.bool, 0.0, dict(min=0, max=1, step=1)),
    "int": (ParamKind.int, 0, dict(min=0, max=10, step=1)),
    "vec2": (ParamKind.vec2, (0.0, 0.0), dict(min=0, max=1, step=0.01)),
    "vec3": (ParamKind.color, "#888888", dict(step=0.01)),
}


def detect_uniforms(source):
    """Create parameters for the uniforms that a source declares.

    Reserved uniforms (time, resolution, texture) are skipped.
    """
    params = []
    seen = set(RESERVED_UNIFORMS)
    for glsl_type, uniform_name in UNIFORM_RE.findall(source):
        if uniform_name in seen:
            continue
        seen.add(uniform_name)
        kind, default, extra = _DETECTED_DEFAULTS[glsl_type]
        params.append(
            ParameterDeclaration(uniform_name[2:], kind, default, group="custom", **extra)
        )
    return params


def extract_parameters(source, existing=()):
    """Get the shader source and parameters for a hand-written template.

    If the source has annotations, these are preprocessed. Otherwise, if
    there are no existing parameters, the parameters are detected from
    the uniforms in the source. Otherwise the existing parameters are kept.
    """
    existing = list(existing)
    if ANNOTATION_RE.search(source):
        return preprocess_annotated(source, existing)
    elif not existing:
        return source, detect_uniforms(source)
    else:
        return source, existing
