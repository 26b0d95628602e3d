"""
This directory contains the glsl helper functions that effect bodies can
call. They can be loaded with ``load_glsl()``, or included in a template
via ``{$ include 'glint.name.glsl' $}``.
"""

import functools
import importlib.resources


@functools.lru_cache(maxsize=None)
def load_glsl(name):
    """Load glsl code from the glint builtin snippets."""
    ref = importlib.resources.files("glint.glsl") / name
    with importlib.resources.as_file(ref) as path:
        with open(path, "rb") as f:
            return f.read().decode()
