"""
pygame front-end: draws each step as a row of image strips and sonifies it.

Keys while sorting:
  LEFT / RIGHT  previous / next algorithm (restarts)
  UP / DOWN     faster / slower
  R             reshuffle and restart
  M             mute toggle
  ESC           quit
"""
import logging
import random
import sys

import pygame

from . import config as config_mod
from .algorithms import ALGORITHMS, get_algorithm
from .audio import AudioEngine
from .engine import Outcome, SortRun
from .player import Player, Sweep, shuffled_indices

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 1100
WINDOW_HEIGHT = 680
FPS           = 60

BACKGROUND_COLOR = (5, 5, 10)
TEXT_COLOR       = (215, 215, 228)

# overlay colours (RGBA)
CORRECT_OVERLAY = (0, 255, 0, 128)
WRONG_OVERLAY   = (255, 0, 0, 128)
READ_OVERLAY    = (0, 0, 0, 77)
WRITE_OVERLAY   = (255, 255, 255, 153)
SWEEP_OVERLAY   = (255, 255, 255, 51)

SWEEP_SECONDS = 1.5
END_PAUSE_MS  = 1200

PLACEHOLDER_SIZE    = (1920, 1080)
PLACEHOLDER_STRIPES = 128


# ============================================================
# ======================= IMAGE ==============================
# ============================================================

def make_placeholder_image(size=PLACEHOLDER_SIZE, stripes=PLACEHOLDER_STRIPES) -> pygame.Surface:
    """Hue-gradient stripes with a caption, used when no image is given."""
    w, h = size
    surf = pygame.Surface(size)
    for i in range(stripes):
        x0 = int(i * w / stripes)
        x1 = int((i + 1) * w / stripes)
        c = pygame.Color(0)
        c.hsla = (i / stripes * 360, 70, 60, 100)
        surf.fill(c, pygame.Rect(x0, 0, x1 - x0, h))
    if pygame.font.get_init():
        font = pygame.font.SysFont("arial", h // 12, bold=True)
        text = font.render("STRIPSORT", True, (255, 255, 255))
        surf.blit(text, text.get_rect(center=(w // 2, h // 2)))
    return surf


def load_image(path) -> pygame.Surface:
    if path:
        try:
            return pygame.image.load(path)
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("could not load image %s (%s), using placeholder", path, e)
    return make_placeholder_image()


def slot_bounds(i, n, width):
    """Pixel ``(x, w)`` of slot ``i`` of ``n``; slots tile ``width`` with no gaps."""
    x0 = int(i * width / n)
    x1 = int((i + 1) * width / n)
    return x0, x1 - x0


_overlays = {}


def _overlay(w, h, rgba):
    key = (w, h, rgba)
    if key not in _overlays:
        s = pygame.Surface((w, h), pygame.SRCALPHA)
        s.fill(rgba)
        _overlays[key] = s
    return _overlays[key]


def draw_strips(screen, picture, array, n, overlay_for=None):
    """
    Draw slot ``i`` as strip ``array[i]`` of ``picture`` (already scaled to
    the screen). Only the first ``n`` slots are drawn; values >= n (bitonic
    padding) are left blank.
    """
    screen.fill(BACKGROUND_COLOR)
    width, height = screen.get_size()
    for i in range(n):
        x, w = slot_bounds(i, n, width)
        v = array[i]
        if v < n:
            sx, _ = slot_bounds(v, n, width)
            screen.blit(picture, (x, 0), pygame.Rect(sx, 0, w, height))
        rgba = overlay_for(i) if overlay_for else None
        if rgba and w > 0:
            screen.blit(_overlay(w, height, rgba), (x, 0))


def step_overlay(step):
    correct, wrong = set(step.correct_order), set(step.wrong_order)

    def overlay_for(i):
        if i in correct:
            return CORRECT_OVERLAY
        if i in wrong:
            return WRONG_OVERLAY
        if i in step.comparing:
            return READ_OVERLAY
        if i in step.swapping:
            return WRITE_OVERLAY
        return None
    return overlay_for


def draw_step(screen, picture, step, label="", font=None):
    draw_strips(screen, picture, step.array, step.public_length, step_overlay(step))
    if font:
        text = (f"{label}   comparisons {step.comparisons}   "
                f"accesses {step.array_accesses}   swaps {step.swaps}")
        screen.blit(font.render(text, True, TEXT_COLOR), (12, 10))


def draw_sweep(screen, picture, array, index):
    draw_strips(screen, picture, array, len(array),
                lambda i: SWEEP_OVERLAY if i <= index else None)


# ============================================================
# ========================= LOOP =============================
# ============================================================

def _quit():
    # main's finally block saves the config and shuts pygame down
    sys.exit()


def run_sort(screen, font, cfg, picture, audio, rng=None):
    """
    One shuffled sort of the configured algorithm, then the completion sweep.

    Returns a key action ("next", "prev", "restart") or None when the run
    ended by itself.
    """
    algo = get_algorithm(cfg["algorithm"])
    n = config_mod.effective_slice_count(cfg)
    arr = shuffled_indices(n, rng)
    run = SortRun(algo.id, arr)
    player = Player(run, cfg["speed"])
    clock = pygame.time.Clock()
    label = f"{algo.name} ({algo.name_ko}) {algo.time_complexity}"
    step = run.state

    while not player.done:
        dt = clock.tick(FPS) / 1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                _quit()
            if ev.type == pygame.KEYDOWN:
                action = _handle_key(ev.key, cfg, player, audio)
                if action:
                    run.close()
                    return action
        steps = player.tick(dt)
        if steps:
            step = steps[-1]
            audio.play_step(step, n, cfg["speed"])
        draw_step(screen, picture, step, label, font)
        pygame.display.flip()

    if run.outcome is Outcome.GAVE_UP:
        draw_step(screen, picture, run.state, label + "  [GAVE UP]", font)
        pygame.display.flip()
        pygame.time.wait(END_PAUSE_MS)
        return None

    if cfg["completion_audio_mode"] == "full":
        audio.play_full()
    sweep = Sweep(n, n / SWEEP_SECONDS)
    while not sweep.done:
        dt = clock.tick(FPS) / 1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                _quit()
        for i in sweep.tick(dt):
            if cfg["completion_audio_mode"] == "chopped":
                audio.play_value(arr[i], n, speed=cfg["speed"], position=i)
        draw_sweep(screen, picture, arr, sweep.index)
        pygame.display.flip()
    pygame.time.wait(END_PAUSE_MS)
    return None


def _handle_key(key, cfg, player, audio):
    if key == pygame.K_ESCAPE:
        _quit()
    if key in (pygame.K_UP, pygame.K_DOWN):
        factor = 2.0 if key == pygame.K_UP else 0.5
        cfg["speed"] = max(config_mod.MIN_SPEED, min(config_mod.MAX_SPEED, cfg["speed"] * factor))
        player.speed = cfg["speed"]
    elif key == pygame.K_m:
        cfg["muted"] = audio.muted = not audio.muted
    elif key == pygame.K_RIGHT:
        return "next"
    elif key == pygame.K_LEFT:
        return "prev"
    elif key == pygame.K_r:
        return "restart"
    return None


def _cycle_algorithm(cfg, offset):
    ids = [a.id.value for a in ALGORITHMS]
    cfg["algorithm"] = ids[(ids.index(cfg["algorithm"]) + offset) % len(ids)]


def main(argv=None):
    cfg, args = config_mod.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    audio = AudioEngine(args.audio, cfg["volume"], cfg["muted"],
                        cfg["octave_shift"], cfg["pitch_mode"])
    audio.start()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("StripSort")
    font = pygame.font.SysFont("consolas", 16)
    picture = pygame.transform.smoothscale(
        load_image(args.image).convert(), (WINDOW_WIDTH, WINDOW_HEIGHT))
    rng = random.Random()

    try:
        while True:
            action = run_sort(screen, font, cfg, picture, audio, rng)
            if action == "next":
                _cycle_algorithm(cfg, 1)
            elif action == "prev":
                _cycle_algorithm(cfg, -1)
            elif action is None and not cfg["replay"]:
                break
    finally:
        config_mod.save_config(cfg, args.config)
        audio.stop()
        pygame.quit()
