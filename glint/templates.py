"""
Builtin hand-written shader templates. Unlike composed shaders, these are
complete fragment shaders, with annotated literals that become parameters.
"""

from .glsl import load_glsl
from .shader import apply_templating, extract_parameters


class ShaderTemplate:
    """A hand-written, annotated fragment shader.

    The source is loaded from ``glint/glsl/<id>.frag`` and may include
    helper functions with ``{$ include 'glint.<name>.glsl' $}``.
    """

    __slots__ = ["_id", "_name", "_description"]

    def __init__(self, id, name, description=""):
        self._id = id
        self._name = name
        self._description = description

    def __repr__(self):
        return f"<ShaderTemplate '{self._id}'>"

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
    def annotated_source(self):
        """The source with annotations, and with includes resolved."""
        return apply_templating(load_glsl(f"{self._id}.frag"))

    def preprocess(self, existing=()):
        """Get ``(source, params)`` with the annotations turned into uniforms."""
        return extract_parameters(self.annotated_source, existing)


TEMPLATES = [
    ShaderTemplate("blank", "Blank", "Starter with gradient, noise, waves and post effects"),
    ShaderTemplate("swirl", "Swirl", "Domain-warped fractal noise with a two-color gradient"),
    ShaderTemplate("glow", "Glow", "Sine-wave displacement with a glowing lower half"),
    ShaderTemplate("sunflare", "SunFlare", "Noise-warped displacement with organic motion"),
]

templates = {t.id: t for t in TEMPLATES}
