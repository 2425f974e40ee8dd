# adtsrds

A small library with no dependencies. It walks AAC frames that are wrapped
in ADTS headers and pulls out RDS (Radio Data System) payloads, which
broadcasters carry in the frames' data stream elements. Each syntax element
is parsed only as far as needed to skip over it correctly.

The package also contains a channel tuning predictor. It guesses which
channel a viewer will zap to next, so that channel can be tuned in advance.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Extracting RDS data

An RDS payload can be spread over several frames. An `RDSCollector`
(`adtsrds.elements`) holds the partial data between frames. Keep one
collector for each stream and pass it to every call:

```python
from adtsrds.decoder import decode_rds
from adtsrds.elements import RDSCollector

collector = RDSCollector()
for frame in adts_frames:          # each item is one complete ADTS frame (bytes)
    payload = decode_rds(frame, collector)
    if payload:
        handle_rds(payload)        # starts with 0xFE and ends with 0xFF
```

`decode_rds` returns the bytes of a completed RDS package. It returns `b""`
if the frame did not complete one. If you leave out the collector, a fresh
one is used for that frame alone. `RDSCollector.reset()` drops any partial
package.

The call raises an exception in these cases:

- `ValueError` for an invalid ADTS syncword.
- `ValueError` for a frame length that does not match the data.
- `ValueError` for an invalid sample frequency, profile or codebook.
- `EOFError` when the frame ends too early.

`Decoder(data, rds_collector).decode_rds()` does the same job in object
form. `ElementType` lists the raw data block element identifiers.

## Lower-level pieces

- `adtsrds.bitstream.BitStream`: a big-endian bit reader. It provides
  `read_bit`, `read_bits` (up to 32 bits), `read_bool`, `skip_bit`,
  `skip_bits`, `byte_align`, `bits_left` and `len()`.
- `adtsrds.huffman`: `decode_scale_factor(stream)` and
  `decode_spectral_data(stream, cb)`. `decode_spectral_data` returns four
  values for codebooks 1 to 4 and two values for codebooks 5 to 11.
- `adtsrds.codebooks_quad` and `adtsrds.codebooks_pair`: the spectral
  Huffman tables as `CodebookEntry` tuples. `spectral_codebook(cb)` returns
  one table.
- `adtsrds.ics_info`: `ICSInfo` and `WindowSequence`.
- `adtsrds.ics`: `ICS`, which parses an individual channel stream.
- `adtsrds.elements`: `decode_sce`, `decode_lfe`, `decode_cpe`,
  `decode_cce`, `decode_dse`, `decode_fil` and `ProgramConfig.decode`.
- `adtsrds.constants`: the `Profile` and `SampleFrequency` enums.
  `SampleFrequency.hz` gives the frequency in hertz.

## Channel tuning prediction

```python
from adtsrds.tuning import CHANNEL_ID_NONE, Channel, ChannelTuningPredictor

predictor = ChannelTuningPredictor()
for channel_id, number in [(10, 1), (20, 2), (30, 3)]:
    predictor.add_channel(Channel(id=channel_id, number=number))

predictor.predict_next_channel_id(10, 20)   # zapping up: predicts 30
predictor.predict_next_channel_id(30, 20)   # zapping down: predicts 10
```

Channels are ordered by `number`, then by `subchannel`, then by id. Use
`update_channel(old, new)` and `remove_channel(channel_id)` to keep the set
current.

`predict_next_channel_id(tuning_from, tuning_to)` works as follows:

- Tuning one step up, tuning to the first channel, or tuning from an unknown
  channel predicts the channel after the target.
- Tuning one step down predicts the channel before the target.
- Any other case returns `CHANNEL_ID_NONE`. This includes an unknown target
  and a target with no neighbour in that direction.

## What the package does not do

It does not decode audio to samples, and it does not split a byte stream
into ADTS frames. You pass it one whole frame at a time. It has no
command-line tool.