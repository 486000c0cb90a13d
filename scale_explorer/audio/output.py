"""Audio output through the system sound device."""

from __future__ import annotations
from typing import Optional

import numpy as np
import sounddevice as sd

from ..core.interfaces import IAudioOutput
from ..logger import get_logger
from .mixer import VoiceMixer

logger = get_logger(__name__)


class SoundDeviceOutput(IAudioOutput):
    """Plays scheduled buffers on an output device using sounddevice."""

    def __init__(
        self,
        sample_rate: int = 44100,
        blocksize: int = 512,
        device: Optional[int] = None,
    ) -> None:
        """Open and start the output stream.

        Args:
            sample_rate: Sample rate in Hz
            blocksize: Frames per device callback
            device: Output device ID, or None for the default device
        """
        self._sample_rate = sample_rate
        self._mixer = VoiceMixer()
        self._stream: Optional[sd.OutputStream] = sd.OutputStream(
            samplerate=sample_rate,
            blocksize=blocksize,
            device=device,
            channels=1,
            dtype="float32",
            callback=self._audio_callback,
        )
        self._stream.start()
        logger.info(f"Audio output started: device={device}, rate={sample_rate}Hz")

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def _audio_callback(
        self,
        outdata: np.ndarray,
        frames: int,
        _time_info,
        status: sd.CallbackFlags,
    ) -> None:
        """Fill the device buffer from the mixer.

        Note:
            This runs on the audio thread and must not block.
        """
        if status:
            logger.warning(f"Audio callback status: {status}")
        outdata[:, 0] = self._mixer.render(frames)

    def schedule(self, buffer: np.ndarray, start_offset_seconds: float = 0.0) -> None:
        self._mixer.add(buffer, int(start_offset_seconds * self._sample_rate))

    def close(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.stop()
            self._stream.close()
            logger.info("Audio output stopped")
        except sd.PortAudioError as e:
            logger.error(f"Error stopping audio output: {e}")
        finally:
            self._stream = None
            self._mixer.clear()
