"""
The interface to the renderer that compiles and runs the generated shaders.
Glint itself does not render; an application provides an object that
implements ``RendererInterface``.
"""

import re

from .utils import hex_to_rgb
from .utils.enums import ParamKind, ShaderStage
from .params import uniform_value
from .shader.colorramp import color_uniform_name


re_error_line = re.compile(r"ERROR:\s*\d+:(\d+):\s*(.*)")


class CompileError:
    """An error reported when compiling or linking a shader.

    Parameters
    ----------
    stage : ShaderStage
        The stage in which the error occurred: "vertex", "fragment" or "link".
    message : str
        The error message.
    line : int | None
        The line in the source that the error refers to, if known.
    """

    __slots__ = ["_stage", "_message", "_line"]

    def __init__(self, stage, message, line=None):
        if stage not in ShaderStage:
            raise ValueError(f"Compile error stage must be a string in {ShaderStage}, not {stage!r}")
        self._stage = stage
        self._message = message
        self._line = line

    def __repr__(self):
        where = f" line {self._line}" if self._line is not None else ""
        return f"<CompileError {self._stage}{where}: {self._message}>"

    def __eq__(self, other):
        if not isinstance(other, CompileError):
            return NotImplemented
        return (self._stage, self._message, self._line) == (other._stage, other._message, other._line)

    @property
    def stage(self):
        return self._stage

    @property
    def message(self):
        return self._message

    @property
    def line(self):
        return self._line


def parse_compile_errors(log, stage):
    """Parse a shader info log into a list of CompileError objects.

    Lines like ``ERROR: 0:12: 'foo' : undeclared identifier`` produce an
    error with a line number. Other nonempty lines produce an error
    without a line number.
    """
    errors = []
    for line in log.split("\n"):
        m = re_error_line.search(line)
        if m:
            errors.append(CompileError(stage, m.group(2).strip(), int(m.group(1))))
        elif line.strip():
            errors.append(CompileError(stage, line.strip()))
    return errors


class RendererInterface:
    """The renderer collaborator.

    It owns the compiled program. When compilation fails, it should keep
    using the last program that compiled successfully.
    """

    def compile(self, vertex_source, fragment_source):
        """Compile and link the given sources.

        Returns None on success, or a list of CompileError objects.
        """
        raise NotImplementedError()

    def set_uniform(self, name, kind, value):
        """Set the value of a uniform.

        The kind is a ParamKind. The value is already in the form that the
        shader expects (see ``uniform_value()``).
        """
        raise NotImplementedError()


def sync_uniforms(renderer, params, values):
    """Send the values of the given parameters to the renderer.

    Missing values fall back to the parameter's default.
    """
    for param in params:
        value = uniform_value(param, values.get(param.id))
        renderer.set_uniform(param.uniform_name, param.kind, value)


def sync_colors(renderer, colors):
    """Send the color slots to the renderer, as rgb tuples."""
    for i, color in enumerate(colors):
        renderer.set_uniform(color_uniform_name(i), ParamKind.color, hex_to_rgb(color))
