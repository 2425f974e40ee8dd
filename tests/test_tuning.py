import pytest

from adtsrds.tuning import (
    CHANNEL_ID_NONE,
    Channel,
    ChannelNumber,
    ChannelTuningPredictor,
)


@pytest.fixture
def predictor() -> ChannelTuningPredictor:
    p = ChannelTuningPredictor()
    for n in range(1, 6):
        p.add_channel(Channel(100 + n, n))
    return p


def test_channel_number_ordering():
    assert ChannelNumber(5, 0) < ChannelNumber(5, 1) < ChannelNumber(6, 0)
    assert ChannelNumber(2, 3) == ChannelNumber(2, 3)


def test_tuning_up(predictor):
    assert predictor.predict_next_channel_id(102, 103) == 104


def test_tuning_down(predictor):
    assert predictor.predict_next_channel_id(103, 102) == 101


def test_jump_predicts_nothing(predictor):
    assert predictor.predict_next_channel_id(101, 104) == CHANNEL_ID_NONE


def test_unknown_origin_predicts_next(predictor):
    assert predictor.predict_next_channel_id(999, 102) == 103


def test_tuning_first_channel_predicts_second(predictor):
    assert predictor.predict_next_channel_id(105, 101) == 102


def test_tuning_up_at_end(predictor):
    assert predictor.predict_next_channel_id(104, 105) == CHANNEL_ID_NONE


def test_unknown_target(predictor):
    assert predictor.predict_next_channel_id(101, 999) == CHANNEL_ID_NONE


def test_empty_predictor():
    assert ChannelTuningPredictor().predict_next_channel_id(1, 2) == CHANNEL_ID_NONE


def test_remove_channel(predictor):
    predictor.remove_channel(103)
    assert len(predictor) == 4
    assert predictor.predict_next_channel_id(101, 102) == 104


def test_remove_unknown_channel(predictor):
    predictor.remove_channel(999)
    assert len(predictor) == 5


def test_update_channel_moves_it(predictor):
    predictor.update_channel(Channel(103, 3), Channel(103, 10))
    assert len(predictor) == 5
    assert predictor.predict_next_channel_id(104, 105) == 103


def test_duplicate_add_is_ignored(predictor):
    predictor.add_channel(Channel(101, 1))
    assert len(predictor) == 5


def test_subchannels_sorted_after_main():
    p = ChannelTuningPredictor()
    p.add_channel(Channel(1, 5, 1))
    p.add_channel(Channel(2, 5, 0))
    p.add_channel(Channel(3, 6, 0))
    assert p.predict_next_channel_id(2, 1) == 3


def test_equal_numbers_ordered_by_id():
    p = ChannelTuningPredictor()
    p.add_channel(Channel(20, 7))
    p.add_channel(Channel(10, 7))
    p.add_channel(Channel(30, 8))
    assert p.predict_next_channel_id(0, 10) == 20
    assert p.predict_next_channel_id(10, 20) == 30