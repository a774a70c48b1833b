"""
Tone synthesis and playback for tone-hole preview.

A hole's estimated frequency is rendered as a plain sine with a short
linear fade at each end (avoids clicks), then played through sounddevice or
written to a 16-bit mono WAV file.
"""

import logging
import wave
from pathlib import Path
from typing import Union

import numpy as np

from ..calculator.constants import (
    TONE_DURATION_S,
    TONE_SAMPLE_RATE_HZ,
    TONE_AMPLITUDE,
    TONE_FADE_S,
)

logger = logging.getLogger(__name__)


def synthesize_tone(
    frequency_hz: float,
    duration_s: float = TONE_DURATION_S,
    sample_rate: int = TONE_SAMPLE_RATE_HZ,
    amplitude: float = TONE_AMPLITUDE,
    fade_s: float = TONE_FADE_S,
) -> np.ndarray:
    """
    Render a sine tone.

    Args:
        frequency_hz: Tone frequency (Hz)
        duration_s: Length of the tone (s)
        sample_rate: Samples per second
        amplitude: Peak level, 0-1
        fade_s: Linear fade in/out length (s), clipped to half the tone

    Returns:
        float32 array of duration_s * sample_rate samples in [-amplitude, amplitude]

    Raises:
        ValueError: If frequency, duration or sample rate is not positive
    """
    if not frequency_hz > 0:
        raise ValueError(f"Frequency must be positive, got {frequency_hz}")
    if not duration_s > 0:
        raise ValueError(f"Duration must be positive, got {duration_s}")
    if sample_rate <= 0:
        raise ValueError(f"Sample rate must be positive, got {sample_rate}")

    num_samples = int(round(duration_s * sample_rate))
    t = np.arange(num_samples) / sample_rate
    samples = amplitude * np.sin(2 * np.pi * frequency_hz * t)

    fade_samples = min(int(fade_s * sample_rate), num_samples // 2)
    if fade_samples > 0:
        ramp = np.linspace(0.0, 1.0, fade_samples)
        samples[:fade_samples] *= ramp
        samples[-fade_samples:] *= ramp[::-1]

    return samples.astype(np.float32)


def to_pcm16(samples: np.ndarray) -> bytes:
    """Convert float samples in [-1, 1] to little-endian 16-bit PCM."""
    clipped = np.clip(samples, -1.0, 1.0)
    return (clipped * 32767).astype('<i2').tobytes()


def write_wav(
    filepath: Union[str, Path],
    frequency_hz: float,
    duration_s: float = TONE_DURATION_S,
    sample_rate: int = TONE_SAMPLE_RATE_HZ,
    amplitude: float = TONE_AMPLITUDE,
) -> Path:
    """Render a tone to a 16-bit mono WAV file and return its path."""
    filepath = Path(filepath)
    samples = synthesize_tone(frequency_hz, duration_s, sample_rate, amplitude)

    with wave.open(str(filepath), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)  # 16-bit
        wf.setframerate(sample_rate)
        wf.writeframes(to_pcm16(samples))

    logger.info(f"Wrote {frequency_hz:.2f} Hz tone to {filepath}")
    return filepath


class SoundDeviceTonePlayer:
    """
    Plays tones on the default output device.

    Playback is non-blocking and a new tone replaces the one still sounding.
    sounddevice is imported on first use, so constructing a player never
    touches the audio system.
    """

    def __init__(
        self,
        duration_s: float = TONE_DURATION_S,
        sample_rate: int = TONE_SAMPLE_RATE_HZ,
        amplitude: float = TONE_AMPLITUDE,
    ):
        self.duration_s = duration_s
        self.sample_rate = sample_rate
        self.amplitude = amplitude
        self._sd = None

    def _device(self):
        if self._sd is None:
            import sounddevice
            self._sd = sounddevice
        return self._sd

    def play(self, frequency_hz: float) -> None:
        """Start playing a tone and return immediately."""
        samples = synthesize_tone(
            frequency_hz, self.duration_s, self.sample_rate, self.amplitude
        )
        sd = self._device()
        sd.stop()
        sd.play(samples, samplerate=self.sample_rate, blocking=False)
        logger.info(f"Playing {frequency_hz:.2f} Hz")

    def wait(self) -> None:
        """Block until the current tone has finished."""
        if self._sd is not None:
            self._sd.wait()

    def stop(self) -> None:
        """Silence any tone still playing."""
        if self._sd is not None:
            self._sd.stop()
