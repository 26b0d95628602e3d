"""
Post effects read and modify the working ``color`` after all generators
have run.
"""

from ..params import ParameterDeclaration as Param
from ._base import EffectDefinition


brightness = EffectDefinition(
    "brightness",
    "Brightness",
    "post",
    200,
    [Param("amount", "float", 0.0, min=-0.5, max=0.5, step=0.01)],
    "color *= 1.0 + $amount;",
    description="Scale the overall brightness",
)


vignette = EffectDefinition(
    "vignette",
    "Vignette",
    "post",
    210,
    [
        Param("strength", "float", 0.5, min=0, max=1, step=0.01),
        Param("radius", "float", 0.7, min=0.2, max=1, step=0.01),
    ],
    """{
  float _d = length(uv - 0.5);
  color *= 1.0 - smoothstep($radius, $radius + 0.4, _d) * $strength;
}""",
    description="Darken towards the edges",
)


film_grain = EffectDefinition(
    "film-grain",
    "Film Grain",
    "post",
    220,
    [Param("intensity", "float", 0.08, min=0, max=0.3, step=0.005)],
    """{
  float _grain = hash(gl_FragCoord.xy + fract(t * 60.0) * 100.0);
  color += (_grain - 0.5) * $intensity;
}""",
    description="Animated per-pixel noise",
    required_helpers=["hash"],
)


crt_scanlines = EffectDefinition(
    "crt-scanlines",
    "CRT Scanlines",
    "post",
    230,
    [
        Param("lineWidth", "float", 400.0, label="Line Density", min=50, max=1000, step=10),
        Param("intensity", "float", 0.3, min=0, max=1, step=0.01),
        Param("flicker", "float", 0.03, min=0, max=0.2, step=0.005),
        Param(
            "orientation",
            "select",
            0.0,
            options=[("Horizontal", 0.0), ("Vertical", 1.0)],
        ),
    ],
    """{
  float _line = sin(mix(uv.y, uv.x, $orientation) * $lineWidth * 3.14159);
  color *= 1.0 - $intensity * (1.0 - _line * _line);
  color *= 1.0 - $flicker * (0.5 + 0.5 * sin(t * 60.0));
}""",
    description="Scanlines and flicker of an old monitor",
)


chromatic_aberration = EffectDefinition(
    "chromatic-aberration",
    "Chromatic Aberration",
    "post",
    240,
    [Param("amount", "float", 0.005, min=0, max=0.03, step=0.001)],
    """{
  float _shift = clamp(length(uv - 0.5) * $amount * 40.0, 0.0, 1.0);
  color = vec3(
    mix(color.r, color.g, _shift),
    color.g,
    mix(color.b, color.g, _shift * 0.5)
  ) + vec3(_shift * 0.1, 0.0, -_shift * 0.1);
}""",
    description="Color fringes towards the edges",
)


dot_grid = EffectDefinition(
    "dot-grid",
    "Dot Grid",
    "post",
    250,
    [
        Param("gridSize", "float", 12.0, min=4, max=40, step=1),
        Param("dotScale", "float", 0.45, min=0.2, max=0.6, step=0.01),
        Param("invert", "bool", 0.0),
    ],
    """{
  vec2 _cellUV = fract(gl_FragCoord.xy / $gridSize) - 0.5;
  float _luma = dot(color, vec3(0.299, 0.587, 0.114));
  float _radius = _luma * $dotScale;
  float _d = length(_cellUV);
  float _dot = smoothstep(_radius + 0.02, _radius - 0.02, _d);
  float _mask = mix(_dot, 1.0 - _dot, $invert);
  color *= _mask;
}""",
    description="Halftone-style dot pattern driven by luminance",
)


ascii_art = EffectDefinition(
    "ascii",
    "ASCII",
    "post",
    260,
    [
        Param("cellSize", "float", 8.0, min=4, max=20, step=1),
        Param("intensity", "float", 1.0, min=0, max=1, step=0.05),
    ],
    """{
  float _cs = $cellSize;
  vec2 _cuv = fract(gl_FragCoord.xy / _cs) - 0.5;
  float _luma = dot(color, vec3(0.299, 0.587, 0.114));

  float _c = length(_cuv);
  float _d = max(abs(_cuv.x), abs(_cuv.y));

  // Denser characters for brighter cells: dot, dash, cross, block
  float _char = step(0.1, _luma) * (1.0 - smoothstep(0.0, 0.12, _c));
  _char = max(_char, step(0.3, _luma) * (1.0 - smoothstep(0.06, 0.08, abs(_cuv.y))) * (1.0 - smoothstep(0.2, 0.25, abs(_cuv.x))));
  float _cross = (1.0 - smoothstep(0.06, 0.08, abs(_cuv.x))) + (1.0 - smoothstep(0.06, 0.08, abs(_cuv.y)));
  _char = max(_char, step(0.5, _luma) * clamp(_cross, 0.0, 1.0));
  _char = max(_char, step(0.75, _luma) * (1.0 - smoothstep(0.35, 0.4, _d)));

  color = mix(color, color * _char, $intensity);
}""",
    description="ASCII-art appearance using density-based character shapes",
)


dither = EffectDefinition(
    "dither",
    "Dither",
    "post",
    270,
    [
        Param("levels", "float", 4.0, min=2, max=16, step=1),
        Param("spread", "float", 0.5, min=0, max=1, step=0.05),
    ],
    """{
  vec2 _p = mod(gl_FragCoord.xy, 4.0);
  float _x = _p.x < 2.0 ? _p.x : 3.0 - _p.x;
  float _y = _p.y < 2.0 ? _p.y : 3.0 - _p.y;
  float _bayer = (_x * 2.0 + _y) / 4.0;
  _bayer = (_bayer + mod(floor(gl_FragCoord.x / 2.0) + floor(gl_FragCoord.y / 2.0), 2.0) * 0.25) / 1.25;

  float _n = $levels;
  color = floor(color * _n + $spread * (_bayer - 0.5)) / _n;
  color = clamp(color, 0.0, 1.0);
}""",
    description="Ordered dithering with a Bayer-like pattern",
)


POST_EFFECTS = [
    brightness,
    vignette,
    film_grain,
    crt_scanlines,
    chromatic_aberration,
    dot_grid,
    ascii_art,
    dither,
]
