"""
Builtin presets. A preset lists effects by id, overrides for their
parameter values (keyed ``"effectId.paramId"``), and the color slots.
"""

from .utils import ReadOnlyDict, logger
from .effects import EffectInstance


class Preset:
    """A named starting point for a composition.

    Parameters
    ----------
    id : str
        The unique id of the preset.
    name : str
        The human readable name.
    effects : list of str
        The ids of the effects to add, in order.
    overrides : dict
        Parameter values keyed ``"effectId.paramId"``. Parameters without
        an override get their default value.
    colors : list of str
        The hex colors of the color slots.
    description : str
        A short description.
    """

    __slots__ = ["_id", "_name", "_effects", "_overrides", "_colors", "_description"]

    def __init__(self, id, name, effects, overrides, colors, description=""):
        for key in overrides:
            if key.count(".") != 1:
                raise ValueError(f"Preset override key must be 'effectId.paramId', not {key!r}")
        self._id = id
        self._name = name
        self._effects = tuple(effects)
        self._overrides = ReadOnlyDict(overrides)
        self._colors = tuple(colors)
        self._description = description

    def __repr__(self):
        return f"<Preset '{self._id}' with {len(self._effects)} effects>"

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
    def effects(self):
        return self._effects

    @property
    def overrides(self):
        return self._overrides

    @property
    def colors(self):
        return self._colors

    def instantiate(self, registry):
        """Create fresh instances and values for this preset.

        Effects that are not in the registry are skipped. Returns a tuple
        ``(instances, values, colors)``.
        """
        instances = []
        values = {}
        used_ids = set()
        for effect_id in self._effects:
            definition = registry.get(effect_id)
            if definition is None:
                logger.warning(f"Preset '{self._id}' skips unknown effect '{effect_id}'.")
                continue
            instance = EffectInstance(effect_id)
            while instance.instance_id in used_ids:
                instance = EffectInstance(effect_id)
            used_ids.add(instance.instance_id)
            instances.append(instance)
            for param in definition.scoped_params(instance.instance_id):
                key = f"{effect_id}.{param.declaration.id}"
                values[param.id] = self._overrides.get(key, param.default)
        return instances, values, list(self._colors)


PRESETS = [
    Preset("blank", "Blank", [], {}, [], description="Empty canvas"),
    Preset(
        "swirl",
        "Swirl",
        ["domain-warp", "brightness", "vignette", "film-grain"],
        {
            "domain-warp.noiseScale": 0.8,
            "domain-warp.warpIntensity": 4.0,
            "domain-warp.rotation": 40,
            "domain-warp.driftSpeed1": 0.03,
            "domain-warp.driftSpeed2": 0.04,
            "domain-warp.mixLow": 0.25,
            "domain-warp.mixHigh": 0.75,
            "brightness.amount": 0.0,
            "vignette.strength": 0.0,
            "vignette.radius": 0.7,
            "film-grain.intensity": 0.08,
        },
        ["#3c1ea8", "#ff7130"],
        description="Organic domain-warped noise flow",
    ),
    Preset(
        "glow",
        "Glow",
        ["glow-waves", "vignette", "film-grain"],
        {
            "glow-waves.maskStart": 0.45,
            "glow-waves.waveFreq": 5.0,
            "glow-waves.waveSpeed": 0.25,
            "glow-waves.displacement": 0.30,
            "glow-waves.gradLow": 0.6,
            "glow-waves.gradHigh": 0.9,
            "glow-waves.brightness": 0.3,
            "glow-waves.breathColor": "#1a0a00",
            "vignette.strength": 0.0,
            "vignette.radius": 0.7,
            "film-grain.intensity": 0.04,
        },
        ["#432cdc", "#ff7130"],
        description="Sine-wave displacement with warm glow",
    ),
    Preset(
        "retro",
        "Retro",
        ["domain-warp", "crt-scanlines", "chromatic-aberration", "film-grain", "vignette"],
        {
            "domain-warp.noiseScale": 1.2,
            "domain-warp.warpIntensity": 3.0,
            "domain-warp.rotation": 20,
            "domain-warp.driftSpeed1": 0.02,
            "domain-warp.driftSpeed2": 0.03,
            "domain-warp.mixLow": 0.2,
            "domain-warp.mixHigh": 0.8,
            "crt-scanlines.lineWidth": 500,
            "crt-scanlines.intensity": 0.25,
            "crt-scanlines.flicker": 0.04,
            "chromatic-aberration.amount": 0.012,
            "film-grain.intensity": 0.06,
            "vignette.strength": 0.7,
            "vignette.radius": 0.55,
        },
        ["#0a1a0a", "#33ff66"],
        description="CRT terminal with warped noise",
    ),
    Preset(
        "cosmic",
        "Cosmic",
        ["spiral", "particles", "brightness", "vignette", "film-grain"],
        {
            "spiral.arms": 3,
            "spiral.tightness": 12,
            "spiral.speed": 0.2,
            "spiral.thickness": 0.6,
            "particles.density": 12,
            "particles.size": 0.08,
            "particles.speed": 0.15,
            "particles.drift": 0.3,
            "brightness.amount": 0.1,
            "vignette.strength": 0.4,
            "vignette.radius": 0.8,
            "film-grain.intensity": 0.05,
        },
        ["#0a0020", "#6a3de8", "#ff6b9d"],
        description="Spiral galaxy with particles",
    ),
    Preset(
        "ocean",
        "Ocean",
        ["wave", "diffuse-blur", "vignette", "film-grain"],
        {
            "wave.frequency": 6.0,
            "wave.amplitude": 0.4,
            "wave.speed": 0.3,
            "wave.angle": 10,
            "diffuse-blur.amount": 0.03,
            "diffuse-blur.scale": 30,
            "diffuse-blur.speed": 0.2,
            "vignette.strength": 0.3,
            "vignette.radius": 0.8,
            "film-grain.intensity": 0.03,
        },
        ["#001f3f", "#0074d9", "#7fdbff"],
        description="Layered waves with soft blur",
    ),
    Preset(
        "halftone",
        "Halftone",
        ["gradient", "dot-grid", "brightness"],
        {
            "gradient.angle": 135,
            "gradient.softness": 0.8,
            "dot-grid.gridSize": 16,
            "dot-grid.dotScale": 0.45,
            "brightness.amount": 0.05,
        },
        ["#ff4136", "#ffdc00"],
        description="Gradient through a dot-grid filter",
    ),
    Preset(
        "led-bars",
        "LED Bars",
        ["led-bars", "vignette"],
        {
            "led-bars.columns": 48,
            "led-bars.rows": 30,
            "led-bars.cellGap": 0.25,
            "led-bars.cellRound": 0.3,
            "led-bars.noiseScale": 1.5,
            "led-bars.vertStretch": 3.0,
            "led-bars.barWidth": 0.5,
            "led-bars.speed": 0.15,
            "led-bars.brightness": 0.9,
            "led-bars.bgDarkness": 0.06,
            "vignette.strength": 0.3,
            "vignette.radius": 0.85,
        },
        ["#1a3a8a", "#ff6a20"],
        description="Noise-driven bars on an LED pixel grid",
    ),
    Preset(
        "plasma",
        "Plasma",
        ["polar", "domain-warp", "film-grain", "vignette"],
        {
            "polar.scale": 2.5,
            "polar.rotation": 0,
            "domain-warp.noiseScale": 0.6,
            "domain-warp.warpIntensity": 5.0,
            "domain-warp.rotation": 60,
            "domain-warp.driftSpeed1": 0.04,
            "domain-warp.driftSpeed2": 0.05,
            "domain-warp.mixLow": 0.15,
            "domain-warp.mixHigh": 0.85,
            "film-grain.intensity": 0.03,
            "vignette.strength": 0.4,
            "vignette.radius": 0.75,
        },
        ["#ff00cc", "#00ffcc", "#4400ff"],
        description="Polar-warped noise with vivid neon colors",
    ),
]

presets = ReadOnlyDict((preset.id, preset) for preset in PRESETS)


def get_preset(preset_id):
    """Get a builtin preset by id. Raises KeyError if there is no such preset."""
    try:
        return presets[preset_id]
    except KeyError:
        raise KeyError(f"Unknown preset '{preset_id}'.") from None
