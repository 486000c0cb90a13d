"""Sample-buffer rendering for the guitar backends.

All buffers are mono float32 numpy arrays in the range [-1, 1].
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import soundfile as sf

from ..logger import get_logger
from ..note_types import AbsolutePitch
from ..note_utils import format_pitch, parse_pitch

logger = get_logger(__name__)

# Open-string recordings, low E to high E
DEFAULT_SAMPLE_PITCHES: Tuple[str, ...] = ("E2", "A2", "D3", "G3", "B3", "E4")
SAMPLE_FILE_PATTERN = "guitar_{pitch}_very-long_forte_normal"
SAMPLE_EXTENSIONS: Tuple[str, ...] = (".wav", ".flac", ".ogg", ".mp3")

# Fallback synth voice
ATTACK_SECONDS = 0.005
DECAY_SECONDS = 0.1
SUSTAIN_LEVEL = 0.3
RELEASE_SECONDS = 1.2
LOWPASS_HZ = 2000.0
DISTORTION_AMOUNT = 0.3
DISTORTION_WET = 0.1


def db_to_gain(db: float) -> float:
    """Convert a level in decibels to a linear amplitude factor."""
    return float(10.0 ** (db / 20.0))


def resample(buffer: np.ndarray, ratio: float) -> np.ndarray:
    """Read a buffer ``ratio`` times faster using linear interpolation."""
    if ratio <= 0:
        raise ValueError(f"Resample ratio must be positive, got {ratio}")
    positions = np.arange(0, len(buffer) - 1, ratio)
    return np.interp(positions, np.arange(len(buffer)), buffer).astype(np.float32)


def pitch_shift(buffer: np.ndarray, semitones: float) -> np.ndarray:
    """Repitch a sample by resampling; the result gets shorter as pitch rises."""
    if semitones == 0:
        return buffer.astype(np.float32, copy=True)
    return resample(buffer, 2.0 ** (semitones / 12.0))


def adsr_envelope(
    hold_seconds: float,
    sample_rate: int,
    attack: float = ATTACK_SECONDS,
    decay: float = DECAY_SECONDS,
    sustain: float = SUSTAIN_LEVEL,
    release: float = RELEASE_SECONDS,
) -> np.ndarray:
    """Attack/decay/sustain for ``hold_seconds``, then a release tail."""
    hold = max(int(hold_seconds * sample_rate), 1)
    attack_n = max(int(attack * sample_rate), 1)
    decay_n = max(int(decay * sample_rate), 1)
    release_n = max(int(release * sample_rate), 1)

    env = np.full(hold, sustain, dtype=np.float32)
    attack_part = np.linspace(0.0, 1.0, attack_n, endpoint=False)
    decay_part = np.linspace(1.0, sustain, decay_n, endpoint=False)
    head = np.concatenate([attack_part, decay_part])[:hold]
    env[: len(head)] = head

    release_part = np.linspace(env[-1], 0.0, release_n).astype(np.float32)
    return np.concatenate([env, release_part])


def one_pole_lowpass(buffer: np.ndarray, cutoff_hz: float, sample_rate: int) -> np.ndarray:
    """Low-pass filter via the truncated impulse response of a one-pole IIR."""
    alpha = 1.0 - np.exp(-2.0 * np.pi * cutoff_hz / sample_rate)
    taps = int(np.ceil(np.log(1e-4) / np.log(1.0 - alpha))) if alpha < 1.0 else 1
    kernel = alpha * (1.0 - alpha) ** np.arange(max(taps, 1))
    return np.convolve(buffer, kernel)[: len(buffer)].astype(np.float32)


def soft_clip(buffer: np.ndarray, amount: float, wet: float) -> np.ndarray:
    drive = 1.0 + amount * 10.0
    distorted = np.tanh(buffer * drive) / np.tanh(drive)
    return ((1.0 - wet) * buffer + wet * distorted).astype(np.float32)


def render_synth_voice(
    frequency: float,
    duration_seconds: float,
    velocity: float,
    sample_rate: int,
    volume_db: float = 0.0,
) -> np.ndarray:
    """Render a plucked-ish triangle voice for the fallback instrument.

    Args:
        frequency: Pitch in Hz
        duration_seconds: Time the note is held before its release tail
        velocity: Loudness from 0 to 1
        sample_rate: Output sample rate in Hz
        volume_db: Output level in decibels

    Returns:
        Mono float32 buffer including the release tail
    """
    envelope = adsr_envelope(duration_seconds, sample_rate)
    t = np.arange(len(envelope)) / sample_rate
    phase = t * frequency
    triangle = 2.0 * np.abs(2.0 * (phase - np.floor(phase + 0.5))) - 1.0
    voice = one_pole_lowpass(triangle * envelope, LOWPASS_HZ, sample_rate)
    voice = soft_clip(voice, DISTORTION_AMOUNT, DISTORTION_WET)
    gain = np.clip(velocity, 0.0, 1.0) * db_to_gain(volume_db)
    return (voice * gain).astype(np.float32)


def shape_sample_voice(
    sample: np.ndarray,
    semitones: float,
    duration_seconds: float,
    velocity: float,
    sample_rate: int,
    volume_db: float = 0.0,
    release_seconds: float = RELEASE_SECONDS,
) -> np.ndarray:
    """Repitch a recorded note, cut it to length and fade it out."""
    voice = pitch_shift(sample, semitones)
    hold_n = int(duration_seconds * sample_rate)
    release_n = int(release_seconds * sample_rate)
    voice = voice[: hold_n + release_n].copy()
    if len(voice) > hold_n:
        tail = len(voice) - hold_n
        voice[hold_n:] *= np.linspace(1.0, 0.0, tail, dtype=np.float32)
    gain = np.clip(velocity, 0.0, 1.0) * db_to_gain(volume_db)
    return (voice * gain).astype(np.float32)


def _find_sample_file(sample_dir: Path, pitch: str) -> Optional[Path]:
    stem = SAMPLE_FILE_PATTERN.format(pitch=pitch)
    for ext in SAMPLE_EXTENSIONS:
        candidate = sample_dir / f"{stem}{ext}"
        if candidate.exists():
            return candidate
    return None


def load_samples(
    sample_dir: str,
    sample_rate: int,
    pitches: Iterable[str] = DEFAULT_SAMPLE_PITCHES,
) -> Dict[AbsolutePitch, np.ndarray]:
    """Load the recorded guitar notes, mixed to mono at the output rate.

    Raises:
        FileNotFoundError: If the directory or any of the samples is missing
        soundfile.LibsndfileError: If a file exists but cannot be decoded
    """
    directory = Path(sample_dir)
    if not directory.is_dir():
        raise FileNotFoundError(f"Sample directory not found: {directory}")

    samples: Dict[AbsolutePitch, np.ndarray] = {}
    missing = []
    for name in pitches:
        path = _find_sample_file(directory, name)
        if path is None:
            missing.append(name)
            continue
        data, file_rate = sf.read(str(path), dtype="float32", always_2d=True)
        mono = data.mean(axis=1).astype(np.float32)
        if file_rate != sample_rate:
            mono = resample(mono, file_rate / sample_rate)
        samples[parse_pitch(name)] = mono
        logger.debug(f"Loaded sample {path.name} ({len(mono)} frames)")

    if missing:
        raise FileNotFoundError(
            f"Missing guitar samples in {directory}: {', '.join(missing)}"
        )
    logger.info(f"Loaded {len(samples)} guitar samples from {directory}")
    return samples


def nearest_sample(
    samples: Dict[AbsolutePitch, np.ndarray], pitch: AbsolutePitch
) -> Tuple[AbsolutePitch, int]:
    """Pick the recorded pitch closest to the target.

    Returns:
        The sample's pitch and the semitone shift needed to reach the target
    """
    if not samples:
        raise ValueError("No samples loaded")
    source = min(samples, key=lambda p: (abs(p.midi_number - pitch.midi_number), p.midi_number))
    shift = pitch.midi_number - source.midi_number
    logger.debug(
        f"Using sample {format_pitch(source.pitch_class, source.octave)} "
        f"shifted {shift:+d} semitones for {pitch}"
    )
    return source, shift
