"""
Conicalbore Audio - hear a tone hole's estimated pitch.

Synthesis needs numpy; playback additionally needs sounddevice (PortAudio),
which is only imported when a tone is actually played.
"""

from .tone import (
    synthesize_tone,
    to_pcm16,
    write_wav,
    SoundDeviceTonePlayer,
)

__all__ = [
    "synthesize_tone",
    "to_pcm16",
    "write_wav",
    "SoundDeviceTonePlayer",
]
