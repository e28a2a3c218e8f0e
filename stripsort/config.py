"""
Configuration: defaults < JSON file < command line.

The config is a plain dict. Anything read from disk or the command line goes
through ``sanitize`` so a stale or hand-edited file can never break startup;
bad fields are dropped one by one and logged.
"""
import argparse
import json
import logging
import math
import os
import sys

from .algorithms import AlgorithmId, UnknownAlgorithmError, get_algorithm

logger = logging.getLogger(__name__)

if sys.platform == "win32":
    APPDATA = os.getenv("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
    CONFIG_DIR = os.path.join(APPDATA, "StripSort")
else:
    CONFIG_DIR = os.path.expanduser("~/.stripsort")

CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

MIN_SLICES = 2
MAX_SLICES = 512
MIN_SPEED  = 0.25
MAX_SPEED  = 8.0

COMPLETION_MODES = ("full", "chopped")
PITCH_MODES      = ("value", "position")

DEFAULT_CONFIG = dict(
    slice_count=128,
    volume=1.0,
    muted=False,
    speed=1.0,
    algorithm=AlgorithmId.MERGE.value,
    completion_audio_mode="full",
    octave_shift=0.0,
    pitch_mode="value",
    replay=False,
)


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def _is_number(v):
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or (isinstance(v, float) and math.isfinite(v))


def sanitize(raw: dict) -> dict:
    """Return only the valid, normalised fields of ``raw``."""
    out = {}
    for key, value in raw.items():
        if key not in DEFAULT_CONFIG:
            logger.debug("ignoring unknown config key %r", key)
            continue
        if key == "slice_count" and _is_number(value):
            out[key] = _clamp(int(value), MIN_SLICES, MAX_SLICES)
        elif key == "volume" and _is_number(value):
            out[key] = _clamp(float(value), 0.0, 1.0)
        elif key == "speed" and _is_number(value):
            out[key] = _clamp(float(value), MIN_SPEED, MAX_SPEED)
        elif key == "octave_shift" and _is_number(value):
            out[key] = float(value)
        elif key in ("muted", "replay") and isinstance(value, bool):
            out[key] = value
        elif key == "completion_audio_mode" and value in COMPLETION_MODES:
            out[key] = value
        elif key == "pitch_mode" and value in PITCH_MODES:
            out[key] = value
        elif key == "algorithm" and isinstance(value, str):
            try:
                out[key] = get_algorithm(value).id.value
            except UnknownAlgorithmError:
                logger.warning("unknown algorithm %r in config, using default", value)
        else:
            logger.warning("ignoring invalid config value %s=%r", key, value)
    return out


def read_config_file(path=CONFIG_PATH) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("could not read config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("config %s is not a JSON object, ignoring", path)
        return {}
    return data


def save_config(cfg: dict, path=CONFIG_PATH) -> bool:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({k: cfg[k] for k in DEFAULT_CONFIG if k in cfg}, f, indent=2)
    except OSError as e:
        logger.warning("could not save config %s: %s", path, e)
        return False
    return True


def load_config(path=CONFIG_PATH, overrides=None) -> dict:
    cfg = dict(DEFAULT_CONFIG)
    cfg.update(sanitize(read_config_file(path)))
    if overrides:
        cfg.update(sanitize(overrides))
    return cfg


def effective_slice_count(cfg: dict) -> int:
    """Strip count scaled down for slow algorithms."""
    mult = get_algorithm(cfg["algorithm"]).complexity_multiplier
    return max(MIN_SLICES, int(cfg["slice_count"] * mult))


# ============================================================
# ====================== COMMAND LINE ========================
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stripsort",
        description="Slice an image into strips, shuffle them and watch them get sorted.",
        argument_default=argparse.SUPPRESS,
    )
    p.add_argument("--algorithm", choices=[a.value for a in AlgorithmId])
    p.add_argument("--slices", dest="slice_count", type=int)
    p.add_argument("--speed", type=float)
    p.add_argument("--volume", type=float)
    p.add_argument("--muted", action=argparse.BooleanOptionalAction)
    p.add_argument("--completion-audio", dest="completion_audio_mode", choices=COMPLETION_MODES)
    p.add_argument("--octave-shift", dest="octave_shift", type=float)
    p.add_argument("--pitch-mode", dest="pitch_mode", choices=PITCH_MODES)
    p.add_argument("--replay", action=argparse.BooleanOptionalAction)
    p.add_argument("--image", default=None, help="picture to slice (a generated one if omitted)")
    p.add_argument("--audio", default=None, help="sound to granulate (a synthesised pad if omitted)")
    p.add_argument("--config", default=CONFIG_PATH, help="JSON config file")
    p.add_argument("--log-level", default="WARNING")
    return p


def parse_args(argv=None):
    """Return ``(cfg, args)``: the merged config and the raw namespace."""
    args = build_parser().parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if k in DEFAULT_CONFIG}
    return load_config(args.config, overrides), args
