"""
UV-transform effects remap the working coordinates ``uv`` and ``st``
before any generator samples them.
"""

from ..params import ParameterDeclaration as Param
from ._base import EffectDefinition


pixelate = EffectDefinition(
    "pixelate",
    "Pixelate",
    "uv-transform",
    10,
    [
        Param("cellSize", "float", 8.0, min=1, max=64, step=1, group="transform"),
    ],
    """{
  vec2 _cells = u_resolution / $cellSize;
  uv = (floor(uv * _cells) + 0.5) / _cells;
  st = uv * vec2(aspect, 1.0);
}""",
    description="Snap coordinates to a grid of square cells",
)


diffuse_blur = EffectDefinition(
    "diffuse-blur",
    "Diffuse Blur",
    "uv-transform",
    20,
    [
        Param("amount", "float", 0.02, min=0, max=0.1, step=0.002, group="transform"),
        Param("scale", "float", 20.0, min=1, max=50, step=1, group="transform"),
        Param("speed", "float", 0.5, min=0, max=2, step=0.05, group="transform"),
    ],
    """{
  vec2 _seed = uv * $scale + t * $speed;
  vec2 _offset = vec2(
    hash(_seed) - 0.5,
    hash(_seed + vec2(37.0, 93.0)) - 0.5
  );
  uv += _offset * $amount;
  st += _offset * $amount * vec2(aspect, 1.0);
}""",
    description="Noise-based UV displacement for a frosted look",
    required_helpers=["hash"],
)


polar = EffectDefinition(
    "polar",
    "Polar Coordinates",
    "uv-transform",
    30,
    [
        Param("scale", "float", 2.0, min=0.5, max=5, step=0.1, group="transform"),
        Param(
            "rotation",
            "float",
            0.0,
            min=0,
            max=360,
            step=1,
            display_unit="degrees",
            group="transform",
        ),
    ],
    """{
  vec2 _center = uv - 0.5;
  float _angle = atan(_center.y, _center.x) + $rotation;
  float _dist = length(_center) * $scale;
  uv = vec2(_angle / 6.28318 + 0.5, _dist);
  st = uv * vec2(aspect, 1.0);
}""",
    description="Convert UV to polar coordinates for radial patterns",
)


UV_EFFECTS = [pixelate, diffuse_blur, polar]
