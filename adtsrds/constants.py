"""AAC audio object profiles and ADTS sample frequency indices."""

from __future__ import annotations

from enum import IntEnum


class Profile(IntEnum):
    """AAC audio object type."""

    UNKNOWN = 0
    AAC_MAIN = 1
    AAC_LC = 2
    AAC_SSR = 3
    AAC_LTP = 4
    AAC_SBR = 5
    AAC_SCALABLE = 6
    TWIN_VQ = 7
    AAC_LD = 11
    ER_AAC_LC = 17
    ER_AAC_SSR = 18
    ER_AAC_LTP = 19
    ER_AAC_SCALABLE = 20
    ER_TWIN_VQ = 21
    ER_BSAC = 22
    ER_AAC_LD = 23


class SampleFrequency(IntEnum):
    """ADTS sample frequency index."""

    NONE = -1
    HZ_96000 = 0
    HZ_88200 = 1
    HZ_64000 = 2
    HZ_48000 = 3
    HZ_44100 = 4
    HZ_32000 = 5
    HZ_24000 = 6
    HZ_22050 = 7
    HZ_16000 = 8
    HZ_12000 = 9
    HZ_11025 = 10
    HZ_8000 = 11

    @property
    def hz(self) -> int | None:
        """The frequency in hertz, or None for ``NONE``."""
        if self is SampleFrequency.NONE:
            return None
        return int(self.name[3:])