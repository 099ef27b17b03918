from ..logging import get_logger
from .pcm import DEFAULT_SAMPLE_RATE, AudioBuffer, allocate_buffer


class SoundDeviceAudioContext:
    """Audio output on the default device.

    ``sounddevice`` is imported on first playback: importing it needs the
    PortAudio runtime, which decoding and tests do not.
    """

    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE) -> None:
        self.logger = get_logger("shuddho.audio.output")
        self.sample_rate = sample_rate
        self.logger.debug("Created audio output context at %d Hz", sample_rate)

    def create_buffer(self, number_of_channels: int, length: int, sample_rate: int) -> AudioBuffer:
        return allocate_buffer(number_of_channels, length, sample_rate)

    def play(self, buffer: AudioBuffer) -> None:
        import sounddevice as sd

        self.logger.debug(
            "Playing %.2f s of audio, %d channel(s) at %d Hz",
            buffer.duration, buffer.number_of_channels, buffer.sample_rate,
        )
        # sounddevice expects (frames, channels)
        sd.play(buffer.data.T, samplerate=buffer.sample_rate, blocking=False)

    def wait(self) -> None:
        import sounddevice as sd

        sd.wait()
