"""
Granular sonification of sort steps.

HOW THE GRAIN ENGINE WORKS
==========================

A source buffer (a loaded sound file, or a synthesised pad) is held as a mono
float64 array. Every step plays one short grain cut from a random spot of
that buffer:

  START    uniformly inside [10%, 90%) of the buffer, so grains avoid the
           silent head and tail most recordings have.
  RATE     playback speed. Reading ``GRAIN_SECONDS * rate`` seconds of source
           and squeezing them into ``GRAIN_SECONDS`` of output shifts pitch
           by ``rate``. Resampling is linear interpolation (np.interp).
  ENVELOPE raised-cosine (Hann) fade in/out of FADE_SECONDS each:
           env[t] = 0.5 * (1 - cos(pi * t / F))
           so grains start and stop without clicks.

Pitch mapping (value -> rate):
  rate = min_rate + value / max_value * (max_rate - min_rate)
  rate *= 2 ** (octave_shift - 0.5)

Only one grain sounds at a time; a new grain cuts the previous one.
"""
import logging
import math
import random
import time

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE   = 44100
CHUNK_SIZE    = 512
GRAIN_SECONDS = 0.1
FADE_SECONDS  = 0.01
TRIGGER_MIN_INTERVAL = 0.02

# rate ranges per event kind
PITCHED_RANGE = (0.5, 2.5)
SUBTLE_RANGE  = (0.9, 1.1)

# Synthesised fallback source: sine + a touch of 2nd harmonic, the same
# warm tone as the old oscillator voices.
PAD_FREQ       = 220.0
PAD_SECONDS    = 2.0
HARMONIC_BLEND = 0.08

TWO_PI = 2.0 * math.pi


# ============================================================
# ========================== DSP =============================
# ============================================================

def synth_pad(seconds=PAD_SECONDS, freq=PAD_FREQ, sample_rate=SAMPLE_RATE) -> np.ndarray:
    t = np.arange(int(seconds * sample_rate), dtype=np.float64) / sample_rate
    wave = np.sin(TWO_PI * freq * t) + HARMONIC_BLEND * np.sin(TWO_PI * 2.0 * freq * t)
    return wave / (1.0 + HARMONIC_BLEND)


def octave_factor(octave_shift) -> float:
    return 2.0 ** (octave_shift - 0.5)


def grain_rate(value, max_value, min_rate, max_rate, octave_shift=0.0,
               position=None, pitch_mode="value") -> float:
    """
    Playback rate for a strip ``value`` (or its ``position`` in position mode).

    Values past ``max_value`` (bitonic pad slots) play at ``max_rate``.
    """
    pitch = position if pitch_mode == "position" and position is not None else value
    ratio = min(1.0, max(0.0, pitch / max_value)) if max_value else 0.0
    return (min_rate + ratio * (max_rate - min_rate)) * octave_factor(octave_shift)


def fade_envelope(length, fade) -> np.ndarray:
    env = np.ones(length, dtype=np.float64)
    fade = min(fade, length // 2)
    if fade > 0:
        ramp = 0.5 * (1.0 - np.cos(math.pi * np.arange(fade) / fade))
        env[:fade] = ramp
        env[length - fade:] = ramp[::-1]
    return env


def grain_start(n_samples, sample_rate, rng=None) -> int:
    """Random start sample inside the middle 80% of the buffer."""
    rng = rng or random
    grain = GRAIN_SECONDS * sample_rate
    span = max(0.0, n_samples * 0.8 - grain)
    return int(n_samples * 0.1 + rng.random() * span)


def cut_grain(buffer: np.ndarray, sample_rate, rate, start) -> np.ndarray:
    """
    Cut one enveloped grain of GRAIN_SECONDS starting at sample ``start``,
    played at ``rate``. Reads past the end of the buffer are silent.
    """
    out_len = int(GRAIN_SECONDS * sample_rate)
    src = start + np.arange(out_len, dtype=np.float64) * rate
    grain = np.interp(src, np.arange(len(buffer)), buffer, right=0.0)
    return grain * fade_envelope(out_len, int(FADE_SECONDS * sample_rate))


def to_pcm(mono: np.ndarray) -> np.ndarray:
    """float [-1, 1] mono -> int16 stereo at 85% of full scale."""
    pcm = (np.clip(mono, -1.0, 1.0) * 32767 * 0.85).astype(np.int16)
    return np.ascontiguousarray(np.column_stack((pcm, pcm)))


def load_buffer(path) -> np.ndarray:
    """Decode a sound file through the (initialised) mixer into mono float64."""
    snd = pygame.mixer.Sound(path)
    data = pygame.sndarray.array(snd).astype(np.float64) / 32768.0
    if data.ndim == 2:
        data = data.mean(axis=1)
    return data


# ============================================================
# ======================= PLAYBACK ===========================
# ============================================================

class AudioEngine:
    """
    Plays grains for steps on a single pygame mixer channel.

    ``start()`` must be called before anything is heard; until then (or when
    the mixer cannot be opened) every play call is a silent no-op.
    """

    def __init__(self, path=None, volume=1.0, muted=False, octave_shift=0.0,
                 pitch_mode="value", rng=None):
        self.path         = path
        self.sample_rate  = SAMPLE_RATE
        self.buffer       = None
        self.octave_shift = octave_shift
        self.pitch_mode   = pitch_mode
        self._volume      = volume
        self._muted       = muted
        self._channel     = None
        self._rng         = rng or random.Random()
        self._last        = 0.0

    def start(self) -> bool:
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, CHUNK_SIZE)
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            return False
        self.sample_rate = pygame.mixer.get_init()[0]
        if self.path:
            try:
                self.buffer = load_buffer(self.path)
            except (pygame.error, FileNotFoundError) as e:
                logger.warning("could not load %s (%s), using synthesised pad", self.path, e)
        if self.buffer is None or len(self.buffer) == 0:
            self.buffer = synth_pad(sample_rate=self.sample_rate)
        self._channel = pygame.mixer.Channel(1)
        self._apply_volume()
        return True

    def stop(self):
        if self._channel:
            self._channel.stop()
            self._channel = None

    @property
    def volume(self):
        return self._volume

    @volume.setter
    def volume(self, value):
        self._volume = max(0.0, min(1.0, value))
        self._apply_volume()

    @property
    def muted(self):
        return self._muted

    @muted.setter
    def muted(self, value):
        self._muted = bool(value)
        self._apply_volume()

    def _apply_volume(self):
        if self._channel:
            self._channel.set_volume(0.0 if self._muted else self._volume)

    @property
    def duration(self) -> float:
        return 0.0 if self.buffer is None else len(self.buffer) / self.sample_rate

    def play_grain(self, rate, speed=1.0):
        if not self._channel or self._muted:
            return
        now = time.monotonic()
        if now - self._last < TRIGGER_MIN_INTERVAL:
            return
        self._last = now
        start = grain_start(len(self.buffer), self.sample_rate, self._rng)
        grain = cut_grain(self.buffer, self.sample_rate, rate * speed, start)
        self._channel.play(pygame.mixer.Sound(buffer=to_pcm(grain).tobytes()))

    def play_value(self, value, max_value, rate_range=PITCHED_RANGE, speed=1.0, position=None):
        lo, hi = rate_range
        self.play_grain(grain_rate(value, max_value, lo, hi, self.octave_shift,
                                   position, self.pitch_mode), speed)

    def play_step(self, step, max_value, speed=1.0):
        """
        comparison pair -> pitched grain keyed on the first compared strip
        single read     -> subtle grain
        write           -> unpitched grain
        """
        if step.comparing:
            i = step.comparing[0]
            rng = PITCHED_RANGE if len(step.comparing) > 1 else SUBTLE_RANGE
            self.play_value(step.array[i], max_value, rng, speed, position=i)
        elif step.swapping:
            self.play_grain(octave_factor(self.octave_shift), speed)

    def play_full(self) -> float:
        """Play the whole source buffer once; returns its length in seconds."""
        if not self._channel:
            return 0.0
        self._channel.play(pygame.mixer.Sound(buffer=to_pcm(self.buffer).tobytes()))
        return self.duration
