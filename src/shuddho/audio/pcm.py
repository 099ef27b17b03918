from dataclasses import dataclass
from typing import Protocol

import numpy as np


DEFAULT_SAMPLE_RATE = 24000
INT16_MAX_ABS_VALUE = 32768.0


@dataclass
class AudioBuffer:
    """Planar float32 samples, shape ``(channels, frames)``."""

    data: np.ndarray
    sample_rate: int

    @property
    def number_of_channels(self) -> int:
        return self.data.shape[0]

    @property
    def length(self) -> int:
        return self.data.shape[1]

    @property
    def duration(self) -> float:
        return self.length / self.sample_rate

    def get_channel_data(self, channel: int) -> np.ndarray:
        """Writable view of one channel."""
        return self.data[channel]


class AudioContext(Protocol):
    sample_rate: int

    def create_buffer(self, number_of_channels: int, length: int, sample_rate: int) -> AudioBuffer: ...

    def play(self, buffer: AudioBuffer) -> None: ...


def allocate_buffer(number_of_channels: int, length: int, sample_rate: int) -> AudioBuffer:
    return AudioBuffer(
        data=np.zeros((number_of_channels, length), dtype=np.float32),
        sample_rate=sample_rate,
    )


def decode_audio_data(
    data: bytes,
    ctx: AudioContext,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    num_channels: int = 1,
) -> AudioBuffer:
    """Decode interleaved little-endian int16 PCM into a float buffer in [-1.0, 1.0).

    Sample ``i * num_channels + channel`` becomes frame ``i`` of ``channel``.
    Trailing samples that do not fill a whole frame are dropped.
    """
    if num_channels < 1:
        raise ValueError(f"num_channels must be positive, got {num_channels}")
    if len(data) % 2:
        raise ValueError(f"PCM data must hold whole 16-bit samples, got {len(data)} bytes")

    samples = np.frombuffer(data, dtype="<i2")
    frame_count = samples.size // num_channels
    buffer = ctx.create_buffer(num_channels, frame_count, sample_rate)

    for channel in range(num_channels):
        channel_data = buffer.get_channel_data(channel)
        channel_data[:] = samples[channel : frame_count * num_channels : num_channels] / INT16_MAX_ABS_VALUE
    return buffer
