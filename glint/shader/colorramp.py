"""
The color ramp maps the mix factor produced by generators onto the active
color slots. The glsl function is generated for a specific number of colors.
"""

import numpy as np

from ..utils import hex_to_rgb
from .templating import apply_templating


# The maximum number of color slots
MAX_COLORS = 5


COLOR_RAMP_TEMPLATE = """
vec3 colorRamp(float t) {
$$ if n == 0
  return vec3(0.0);
$$ elif n == 1
  return u_color0;
$$ elif n == 2
  return mix(u_color0, u_color1, clamp(t, 0.0, 1.0));
$$ else
  float _ct = clamp(t, 0.0, 1.0) * {{ "%.1f" % (n - 1) }};
  vec3 c = u_color0;
$$ for i in range(1, n)
  c = mix(c, u_color{{ i }}, clamp(_ct - {{ "%.1f" % (i - 1) }}, 0.0, 1.0));
$$ endfor
  return c;
$$ endif
}
"""


def color_uniform_name(index):
    """Get the name of the uniform for the color slot at the given index."""
    return f"u_color{index}"


def build_color_ramp(color_count):
    """Generate the glsl ``colorRamp(float t)`` function for the given number of colors."""
    if not isinstance(color_count, int) or color_count < 0:
        raise ValueError(f"Color count must be a non-negative int, not {color_count!r}")
    if color_count > MAX_COLORS:
        raise ValueError(f"Color count cannot be more than {MAX_COLORS}, got {color_count}.")
    return apply_templating(COLOR_RAMP_TEMPLATE, n=color_count).strip()


def _mix(a, b, w):
    # Same as glsl mix(), exact at w == 0 and w == 1
    return a * (1.0 - w) + b * w


def evaluate_color_ramp(colors, t):
    """Evaluate the color ramp on the CPU.

    This mirrors the generated glsl, and is vectorized over ``t``. Returns
    an array of shape ``t.shape + (3,)``.
    """
    t = np.asarray(t, dtype=np.float64)
    rgb = np.array([hex_to_rgb(c) for c in colors], dtype=np.float64).reshape(-1, 3)
    n = len(rgb)
    out_shape = t.shape + (3,)
    if n == 0:
        return np.zeros(out_shape)
    elif n == 1:
        return np.broadcast_to(rgb[0], out_shape).copy()
    ct = np.clip(t, 0.0, 1.0)[..., None]
    if n == 2:
        return _mix(rgb[0], rgb[1], ct)
    ct = ct * (n - 1)
    c = np.broadcast_to(rgb[0], out_shape).copy()
    for i in range(1, n):
        w = np.clip(ct - (i - 1), 0.0, 1.0)
        c = _mix(c, rgb[i], w)
    return c
