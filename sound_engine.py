"""
sound_engine.py: one-shot sound effects for the minefield
---------------------------------------------------------
Handles:
 • play_sfx(name)        → play a one-shot effect from audio/sfx
 • play_explosion() etc. → the three game sounds at their mix levels
 • set_volume / set_muted
The mixer is opened on first use so importing this never touches the audio device.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pygame

log = logging.getLogger("Sound")

# --- directories (PyInstaller unpacks to sys._MEIPASS) ---
ROOT = Path(getattr(sys, "_MEIPASS", None) or Path(__file__).resolve().parent)
SFX_PATH = ROOT / "audio" / "sfx"

# --- settings ---
SFX_VOL = 0.8
MUTED = False

EXPLOSION_SFX = ("explosion.ogg", 0.3)
WIN_SFX = ("congrats.ogg", 1.0)
FLAG_SFX = ("flag.ogg", 1.0)

_mixer_ok = None
_cache = {}
_warned = set()


def _warn_once(key, msg, *args):
    if key in _warned:
        return
    _warned.add(key)
    log.warning(msg, *args)


def _ensure_mixer() -> bool:
    global _mixer_ok
    if _mixer_ok is None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.pre_init(44100, -16, 2, 1024)
                pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
            _mixer_ok = True
        except pygame.error as e:
            log.warning("Audio disabled: %s", e)
            _mixer_ok = False
    return _mixer_ok


def set_volume(volume: float):
    global SFX_VOL
    SFX_VOL = max(0.0, min(1.0, float(volume)))


def set_muted(muted: bool):
    global MUTED
    MUTED = bool(muted)


def _load(name):
    if name in _cache:
        return _cache[name]
    path = SFX_PATH / name
    if not path.exists():
        _warn_once(name, "Missing SFX: %s", name)
        _cache[name] = None
        return None
    try:
        snd = pygame.mixer.Sound(str(path))
    except pygame.error as e:
        _warn_once(name, "Could not load %s: %s", name, e)
        snd = None
    _cache[name] = snd
    return snd


def play_sfx(name: str, volume: float = 1.0) -> bool:
    """Play a one-shot effect. Returns False when nothing was played."""
    if MUTED or not _ensure_mixer():
        return False
    snd = _load(name)
    if snd is None:
        return False
    snd.set_volume(SFX_VOL * volume)
    channel = pygame.mixer.find_channel(True)
    if channel is None:
        return False
    channel.play(snd)
    return True


def play_explosion() -> bool:
    return play_sfx(*EXPLOSION_SFX)


def play_win() -> bool:
    return play_sfx(*WIN_SFX)


def play_flag() -> bool:
    return play_sfx(*FLAG_SFX)
