"""Predicts which channel will be tuned next after a zap up or down."""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_ID_NONE = 0xFFFFFFFF
"""Returned when no channel could be predicted."""


@dataclass(frozen=True, order=True)
class ChannelNumber:
    """A channel number with its subchannel, ordered numerically."""

    number: int = 0
    subchannel: int = 0


@dataclass(frozen=True)
class Channel:
    """The parts of a channel needed for predictive tuning."""

    id: int
    number: int
    subchannel: int = 0

    @property
    def channel_number(self) -> ChannelNumber:
        return ChannelNumber(self.number, self.subchannel)


class ChannelTuningPredictor:
    """Keeps channels sorted by number so neighbours can be found for a zap."""

    def __init__(self) -> None:
        # (channel number, channel id), kept sorted and unique.
        self._channels: list[tuple[ChannelNumber, int]] = []

    def __len__(self) -> int:
        return len(self._channels)

    @staticmethod
    def _entry(channel: Channel) -> tuple[ChannelNumber, int]:
        return (channel.channel_number, channel.id)

    def _insert(self, entry: tuple[ChannelNumber, int]) -> None:
        if entry not in self._channels:
            self._channels.append(entry)
            self._channels.sort()

    def _index_of(self, channel_id: int) -> int | None:
        return next(
            (i for i, (_, cid) in enumerate(self._channels) if cid == channel_id), None
        )

    def add_channel(self, channel: Channel) -> None:
        """Add ``channel``; adding an identical channel twice has no effect."""
        self._insert(self._entry(channel))

    def update_channel(self, old_channel: Channel, new_channel: Channel) -> None:
        """Replace ``old_channel`` with ``new_channel``."""
        old = self._entry(old_channel)
        if old in self._channels:
            self._channels.remove(old)
        self._insert(self._entry(new_channel))

    def remove_channel(self, channel_id: int) -> None:
        """Remove the channel with ``channel_id``, if present."""
        index = self._index_of(channel_id)
        if index is not None:
            del self._channels[index]

    def predict_next_channel_id(self, tuning_from: int, tuning_to: int) -> int:
        """Return the id of the channel likely to be tuned after ``tuning_to``.

        Returns :data:`CHANNEL_ID_NONE` when nothing can be predicted.
        """
        to_index = self._index_of(tuning_to)
        if to_index is None:
            return CHANNEL_ID_NONE

        from_index = self._index_of(tuning_from)
        first_number = self._channels[0][0]

        if (
            from_index is None
            or from_index + 1 == to_index
            or self._channels[to_index][0] == first_number
        ):
            predicted = to_index + 1  # tuning up, or onto the first channel
        elif from_index - 1 == to_index:
            predicted = to_index - 1  # tuning down
        else:
            return CHANNEL_ID_NONE

        if 0 <= predicted < len(self._channels):
            return self._channels[predicted][1]
        return CHANNEL_ID_NONE