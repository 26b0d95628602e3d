"""
Shared helper functions that effect bodies can call. A helper can depend on
other helpers; resolving a set of names produces the source of each needed
helper exactly once, with dependencies first.
"""

from ..glsl import load_glsl


# Maps helper name to the helpers it calls. The order of this dict is the
# canonical emission order, so that resolving is reproducible.
HELPER_DEPENDENCIES = {
    "hash": (),
    "noise": ("hash",),
    "fbm": ("noise",),
    "rotate2d": (),
}


def resolve_helper_order(names):
    """Get the list of helper names to emit for the given required names.

    The result includes (transitive) dependencies, has no duplicates, and
    lists every helper after the helpers it depends on.
    """
    names = set(names)
    unknown = names.difference(HELPER_DEPENDENCIES)
    if unknown:
        raise ValueError(f"Unknown helper function(s): {', '.join(sorted(unknown))}")

    ordered = []

    def visit(name):
        if name in ordered:
            return
        for dep in HELPER_DEPENDENCIES[name]:
            visit(dep)
        ordered.append(name)

    for name in HELPER_DEPENDENCIES:
        if name in names:
            visit(name)
    return ordered


def resolve_helpers(names):
    """Get the glsl source for the given helper names (and their dependencies)."""
    return "\n\n".join(
        load_glsl(f"{name}.glsl").strip() for name in resolve_helper_order(names)
    )
