"""Factory for creating Scale Explorer components."""

from typing import Optional, Dict, Type

from ..audio.backends import SampledGuitarBackend, SynthGuitarBackend
from ..logger import get_logger
from ..mock_audio_backend import RecordingAudioBackend
from ..note_types import Direction
from ..player import ScalePlayer
from ..scales import major_scale
from ..sequencer import PlaybackSequencer
from .config import ConfigManager
from .interfaces import IAudioBackend, IAudioOutput

logger = get_logger(__name__)

AUTO_BACKEND = "auto"


class ComponentFactory:
    """Factory for creating Scale Explorer components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        # Register default component implementations
        self.audio_backend_classes: Dict[str, Type[IAudioBackend]] = {
            "sampled": SampledGuitarBackend,
            "synth": SynthGuitarBackend,
            "none": RecordingAudioBackend,
        }

    def create_output(self, **kwargs) -> IAudioOutput:
        """Open the default sound device output.

        Args:
            **kwargs: Overrides for sample_rate, blocksize and device

        Raises:
            RuntimeError: If PortAudio cannot open an output stream
        """
        # sounddevice loads PortAudio at import time
        from ..audio.output import SoundDeviceOutput, sd

        config = self.config_manager.get_config("audio")
        params = {
            "sample_rate": config["sample_rate"],
            "blocksize": config["blocksize"],
        }
        params.update(kwargs)
        try:
            return SoundDeviceOutput(**params)
        except sd.PortAudioError as e:
            raise RuntimeError(f"Could not open audio output: {e}") from e

    def create_audio_backend(
        self,
        implementation: Optional[str] = None,
        output: Optional[IAudioOutput] = None,
        **kwargs,
    ) -> IAudioBackend:
        """Create the instrument that sounds notes.

        With "auto", the sampled guitar is tried first and the synthesized
        guitar is used if its samples cannot be loaded. The choice is made
        once, here.

        Args:
            implementation: "auto", "sampled", "synth" or "none"; None uses the configured backend
            output: Audio output to render into, or None to open the sound device
            **kwargs: Overrides for volume_db and sample_dir

        Returns:
            Audio backend instance

        Raises:
            ValueError: If the implementation is not registered
            FileNotFoundError: If "sampled" is requested and the samples are missing
        """
        config = self.config_manager.get_config("audio")
        config.update(kwargs)
        implementation = implementation or config["backend"]

        if implementation != AUTO_BACKEND and implementation not in self.audio_backend_classes:
            raise ValueError(f"Unknown audio backend implementation: {implementation}")

        if implementation == "none":
            logger.info("Created audio backend: none (silent)")
            return self.audio_backend_classes["none"]()

        if output is None:
            output = self.create_output()

        if implementation in (AUTO_BACKEND, "sampled"):
            try:
                backend = self.audio_backend_classes["sampled"](
                    output, config["sample_dir"], volume_db=config["volume_db"]
                )
                logger.info("Created audio backend: sampled")
                return backend
            except (FileNotFoundError, RuntimeError) as e:
                if implementation == "sampled":
                    output.close()
                    raise
                logger.warning(f"Could not load guitar samples ({e}), using synth fallback")

        backend = self.audio_backend_classes["synth"](output, volume_db=config["volume_db"])
        logger.info("Created audio backend: synth")
        return backend

    def create_sequencer(self, root: Optional[str] = None, **kwargs) -> PlaybackSequencer:
        """Create a sequencer over the major scale of the given root.

        Args:
            root: Root note, or None for the configured root
            **kwargs: Overrides for loop and direction

        Raises:
            InvalidNoteError: If the root is not a recognized spelling
        """
        config = self.config_manager.get_config("playback")
        config.update(kwargs)
        direction = config["direction"]
        if not isinstance(direction, Direction):
            direction = Direction(direction)
        return PlaybackSequencer(
            major_scale(root or config["root"]),
            loop=bool(config["loop"]),
            direction=direction,
        )

    def create_player(
        self,
        sequencer: PlaybackSequencer,
        backend: IAudioBackend,
        **kwargs,
    ) -> ScalePlayer:
        """Create a player driving the sequencer at the configured interval.

        Args:
            sequencer: Sequencer to tick
            backend: Instrument to trigger
            **kwargs: Overrides for interval_seconds and octave
        """
        config = self.config_manager.get_config("playback")
        config.update(kwargs)
        return ScalePlayer(
            sequencer,
            backend,
            interval_seconds=config["interval_seconds"],
            octave=config["octave"],
        )
