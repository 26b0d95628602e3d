"""
Generator effects produce the ``mixFactor`` signal that drives the color
ramp. When several generators are active, each one after the first is
layered on top of the color produced so far.
"""

from ..params import ParameterDeclaration as Param
from ._base import EffectDefinition


gradient = EffectDefinition(
    "gradient",
    "Gradient",
    "generator",
    100,
    [
        Param(
            "angle",
            "float",
            90.0,
            min=0,
            max=360,
            step=1,
            display_unit="degrees",
            group="gradient",
        ),
        Param("midpoint", "float", 0.5, min=0, max=1, step=0.01, group="gradient"),
        Param("softness", "float", 0.8, min=0.01, max=1, step=0.01, group="gradient"),
    ],
    """{
  vec2 _dir = vec2(cos($angle), sin($angle));
  float _pos = dot(uv - 0.5, _dir) + 0.5;
  float _half = max($softness * 0.5, 0.001);
  mixFactor = smoothstep($midpoint - _half, $midpoint + _half, _pos);
}""",
    description="Linear gradient across the canvas",
)


noise = EffectDefinition(
    "noise",
    "Noise",
    "generator",
    110,
    [
        Param("scale", "float", 3.0, min=0.5, max=10, step=0.1, group="noise"),
        Param("speed", "float", 0.05, min=0, max=1, step=0.01, group="animation"),
        Param("contrast", "float", 1.5, min=0.1, max=4, step=0.05, group="noise"),
    ],
    """{
  float _n = fbm(st * $scale + vec2(t * $speed, t * $speed * 0.7));
  mixFactor = clamp((_n - 0.5) * $contrast + 0.5, 0.0, 1.0);
}""",
    description="Fractal value noise",
    required_helpers=["fbm"],
)


domain_warp = EffectDefinition(
    "domain-warp",
    "Domain Warp",
    "generator",
    120,
    [
        Param("noiseScale", "float", 0.8, min=0.1, max=3, step=0.01, group="noise"),
        Param("warpIntensity", "float", 4.0, min=0, max=10, step=0.1, group="noise"),
        Param(
            "rotation",
            "float",
            40.0,
            min=0,
            max=360,
            step=1,
            display_unit="degrees",
            group="transform",
        ),
        Param(
            "driftSpeed1",
            "float",
            0.03,
            label="Drift Speed X",
            min=0,
            max=0.2,
            step=0.001,
            group="animation",
        ),
        Param(
            "driftSpeed2",
            "float",
            0.04,
            label="Drift Speed Y",
            min=0,
            max=0.2,
            step=0.001,
            group="animation",
        ),
        Param("mixLow", "float", 0.25, min=0, max=1, step=0.01, group="blending"),
        Param("mixHigh", "float", 0.75, min=0, max=1, step=0.01, group="blending"),
    ],
    """{
  vec2 _rst = rotate2d($rotation) * st;
  vec2 _drift1 = vec2(sin(t * $driftSpeed1), cos(t * $driftSpeed2)) * 0.5;
  vec2 _drift2 = vec2(cos(t * 0.025), sin(t * 0.035)) * 0.5;
  float _drift3 = sin(t * 0.02) * 0.5;
  vec2 _q = vec2(
    fbm(_rst * $noiseScale + _drift1),
    fbm(_rst * $noiseScale + vec2(5.2, 1.3) + _drift1.yx)
  );
  vec2 _r = vec2(
    fbm(_rst * $noiseScale + $warpIntensity * _q + vec2(1.7, 9.2) + _drift2),
    fbm(_rst * $noiseScale + $warpIntensity * _q + vec2(8.3, 2.8) + _drift2.yx)
  );
  float _f = fbm(_rst * $noiseScale + $warpIntensity * _r + _drift3);
  mixFactor = smoothstep($mixLow, $mixHigh, _f);
  mixFactor = clamp(mixFactor + 0.15 * (_q.x - 0.5), 0.0, 1.0);
}""",
    description="Domain-warped fractal noise with slow drift",
    required_helpers=["fbm", "rotate2d"],
)


wave = EffectDefinition(
    "wave",
    "Wave",
    "generator",
    130,
    [
        Param("frequency", "float", 4.0, min=0.5, max=20, step=0.1, group="waves"),
        Param("amplitude", "float", 0.15, min=0, max=0.5, step=0.005, group="waves"),
        Param("speed", "float", 0.3, min=0, max=2, step=0.01, group="animation"),
        Param(
            "angle",
            "float",
            0.0,
            min=0,
            max=360,
            step=1,
            display_unit="degrees",
            group="waves",
        ),
    ],
    """{
  vec2 _dir = vec2(cos($angle), sin($angle));
  float _along = dot(st, _dir);
  float _across = dot(uv - 0.5, vec2(-_dir.y, _dir.x)) + 0.5;
  float _wave = sin(_along * $frequency + t * $speed) * $amplitude;
  _wave += sin(_along * $frequency * 0.7 - t * $speed * 0.6 + 2.0) * $amplitude * 0.5;
  mixFactor = clamp(_across + _wave, 0.0, 1.0);
}""",
    description="Sine waves that displace a linear ramp",
)


glow_waves = EffectDefinition(
    "glow-waves",
    "Glow Waves",
    "generator",
    140,
    [
        Param("maskStart", "float", 0.45, min=0, max=1, step=0.01, group="mask"),
        Param(
            "waveFreq",
            "float",
            5.0,
            label="Wave Frequency",
            min=1,
            max=15,
            step=0.1,
            group="waves",
        ),
        Param("waveSpeed", "float", 0.25, min=0, max=1, step=0.01, group="waves"),
        Param("displacement", "float", 0.3, min=0, max=0.8, step=0.01, group="waves"),
        Param(
            "gradLow",
            "float",
            0.6,
            label="Gradient Low",
            min=0,
            max=1,
            step=0.01,
            group="blending",
        ),
        Param(
            "gradHigh",
            "float",
            0.9,
            label="Gradient High",
            min=0,
            max=1,
            step=0.01,
            group="blending",
        ),
        Param(
            "brightness",
            "float",
            0.3,
            label="Brightness Boost",
            min=0,
            max=1,
            step=0.01,
            group="effects",
        ),
        Param("breathColor", "color", "#1a0a00", label="Glow Tint", group="colors"),
    ],
    """{
  float _gy = 1.0 - uv.y;
  float _mask = smoothstep($maskStart, 1.0, _gy);
  float _intensity = _mask * _mask;
  float _w = sin(st.x * $waveFreq - t * $waveSpeed + st.y * 0.8);
  _w += sin(st.x * 3.2 + t * $waveSpeed * 0.72 + 1.4) * 0.7;
  _w += sin(st.x * 8.0 - t * $waveSpeed * 1.2 - st.y * 1.2 + 2.8) * 0.4;
  _w /= 2.1;
  float _gradY = clamp(_gy + _w * _intensity * $displacement, 0.0, 1.0);
  float _gradPos = mix(_gy, _gradY, _mask);
  mixFactor = smoothstep($gradLow, $gradHigh, _gradPos);
}""",
    description="Wave displacement with a glowing lower half",
    post_mix_body="""{
  float _pmGy = 1.0 - uv.y;
  float _pmMask = smoothstep($maskStart, 1.0, _pmGy);
  float _pmIntensity = _pmMask * _pmMask;
  float _pmW = sin(st.x * $waveFreq - t * $waveSpeed + st.y * 0.8);
  float _pmBoost = 1.0 + _pmIntensity * $brightness * (0.5 + 0.5 * _pmW);
  color *= mix(1.0, _pmBoost, _pmMask);
  color += _pmIntensity * $breathColor * smoothstep(-0.2, 0.5, _pmW);
}""",
)


spiral = EffectDefinition(
    "spiral",
    "Spiral",
    "generator",
    150,
    [
        Param("arms", "float", 4.0, min=1, max=12, step=1, group="spiral"),
        Param("tightness", "float", 8.0, min=1, max=30, step=0.5, group="spiral"),
        Param("speed", "float", 0.5, min=0, max=3, step=0.1, group="spiral"),
        Param("thickness", "float", 0.5, min=0.1, max=1, step=0.05, group="spiral"),
    ],
    """{
  vec2 _center = st - vec2(aspect * 0.5, 0.5);
  float _angle = atan(_center.y, _center.x);
  float _dist = length(_center);
  float _spiral = sin($arms * _angle + _dist * $tightness - t * $speed);
  mixFactor = smoothstep(-$thickness, $thickness, _spiral);
}""",
    description="Animated spiral pattern with adjustable arms",
)


particles = EffectDefinition(
    "particles",
    "Floating Particles",
    "generator",
    160,
    [
        Param("density", "float", 8.0, min=2, max=20, step=1, group="particles"),
        Param("size", "float", 0.12, min=0.02, max=0.4, step=0.01, group="particles"),
        Param("speed", "float", 0.3, min=0, max=2, step=0.05, group="particles"),
        Param("drift", "float", 0.25, min=0, max=0.5, step=0.01, group="particles"),
        Param("softness", "float", 0.05, min=0.01, max=0.3, step=0.01, group="particles"),
    ],
    """{
  vec2 _p = st * $density;
  float _minDist = 1.0;
  vec2 _cell = floor(_p);
  for (int y = -1; y <= 1; y++) {
    for (int x = -1; x <= 1; x++) {
      vec2 _neighbor = _cell + vec2(float(x), float(y));
      float _h1 = hash(_neighbor);
      float _h2 = hash(_neighbor + vec2(37.0, 93.0));
      vec2 _point = _neighbor + vec2(_h1, _h2);
      _point += vec2(
        sin(t * $speed + _h1 * 6.2832) * $drift,
        cos(t * $speed * 0.7 + _h2 * 6.2832) * $drift
      );
      _minDist = min(_minDist, length(_p - _point));
    }
  }
  mixFactor = 1.0 - smoothstep($size - $softness, $size, _minDist);
}""",
    description="Animated dots drifting in space",
    required_helpers=["hash"],
)


led_bars = EffectDefinition(
    "led-bars",
    "LED Bars",
    "generator",
    170,
    [
        Param("columns", "float", 48.0, min=8, max=128, step=1, group="grid"),
        Param("rows", "float", 30.0, min=4, max=80, step=1, group="grid"),
        Param("cellGap", "float", 0.25, min=0, max=0.6, step=0.01, group="grid"),
        Param(
            "cellRound",
            "float",
            0.3,
            label="Cell Roundness",
            min=0,
            max=1,
            step=0.01,
            group="grid",
        ),
        Param("noiseScale", "float", 1.5, min=0.1, max=8, step=0.05, group="pattern"),
        Param(
            "vertStretch",
            "float",
            3.0,
            label="Vertical Stretch",
            min=0.5,
            max=10,
            step=0.1,
            group="pattern",
        ),
        Param("barWidth", "float", 0.5, min=0.05, max=1, step=0.01, group="pattern"),
        Param("speed", "float", 0.15, min=0, max=1, step=0.01, group="animation"),
        Param(
            "brightness",
            "float",
            0.9,
            label="LED Brightness",
            min=0,
            max=1.5,
            step=0.01,
            group="blending",
        ),
        Param(
            "bgDarkness",
            "float",
            0.06,
            label="Background Dark",
            min=0,
            max=0.3,
            step=0.005,
            group="blending",
        ),
    ],
    """{
  // LED grid coordinates
  float _cols = $columns;
  float _rows = $rows;
  vec2 _cell = floor(vec2(uv.x * _cols, uv.y * _rows));

  // Noise-driven vertical bars
  float _nx = _cell.x / _cols;
  float _ny = _cell.y / _rows;
  float _n = noise(vec2(_nx * $noiseScale * 4.0, _ny * $vertStretch + t * $speed));

  // Column position drives the ramp, with some noise variation
  mixFactor = clamp(_nx + (_n - 0.5) * 0.3, 0.0, 1.0);
}""",
    description="Vertical noise bars through an LED pixel grid",
    required_helpers=["hash", "noise"],
    post_mix_body="""{
  float _pmCols = $columns;
  float _pmRows = $rows;
  vec2 _pmGridUV = vec2(uv.x * _pmCols, uv.y * _pmRows);
  vec2 _pmCell = floor(_pmGridUV);
  vec2 _pmCellFrac = fract(_pmGridUV);

  // Rounded rectangle cell mask
  vec2 _pmDist = abs(_pmCellFrac - 0.5);
  float _pmEdgeH = 0.5 - $cellGap * 0.5;
  float _pmRound = $cellRound * _pmEdgeH;
  vec2 _pmQ = _pmDist - vec2(_pmEdgeH - _pmRound);
  float _pmSdf = length(max(_pmQ, 0.0)) - _pmRound;
  float _pmCellMask = 1.0 - smoothstep(-0.02, 0.02, _pmSdf);

  // Bar intensity
  float _pmNx = _pmCell.x / _pmCols;
  float _pmNy = _pmCell.y / _pmRows;
  float _pmN = noise(vec2(_pmNx * $noiseScale * 4.0, _pmNy * $vertStretch + t * $speed));
  float _pmBar = smoothstep(0.5 - $barWidth * 0.5, 0.5, _pmN)
               * smoothstep(0.5 + $barWidth * 0.5, 0.5, _pmN) * 4.0;
  _pmBar = max(_pmBar, smoothstep(0.3, 0.6, _pmN));

  float _pmLit = _pmCellMask * _pmBar * $brightness;
  color = color * _pmLit + vec3($bgDarkness) * (1.0 - _pmCellMask);
}""",
)


GENERATOR_EFFECTS = [
    gradient,
    noise,
    domain_warp,
    wave,
    glow_waves,
    spiral,
    particles,
    led_bars,
]
