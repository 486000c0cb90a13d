"""Audio rendering and output for Scale Explorer.

The sounddevice-backed output lives in ``scale_explorer.audio.output`` and is
imported only when a real device is needed.
"""

from .backends import SampledGuitarBackend, SynthGuitarBackend
from .mixer import VoiceMixer

__all__ = ["SampledGuitarBackend", "SynthGuitarBackend", "VoiceMixer"]
