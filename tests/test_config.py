import pytest

from logspectrum.config import PipelineConfig, is_power_of_two


def test_defaults():
    config = PipelineConfig()
    assert config.fft_size == 8192
    assert config.bucket_step == 1.06
    assert config.smooth_rate == 8.0
    assert config.smear_rate == 3.0


@pytest.mark.parametrize("n,expected", [(1, True), (2, True), (8192, True),
                                        (0, False), (3, False), (1000, False)])
def test_is_power_of_two(n, expected):
    assert is_power_of_two(n) is expected


@pytest.mark.parametrize("kwargs", [
    {"fft_size": 1000},
    {"fft_size": 1},
    {"fft_size": 0},
    {"fft_size": 512.0},
    {"bucket_step": 1.0},
    {"smooth_rate": 0.0},
    {"smear_rate": -3.0},
])
def test_rejects_invalid_options(kwargs):
    with pytest.raises(ValueError):
        PipelineConfig(**kwargs)


def test_is_immutable():
    config = PipelineConfig()
    with pytest.raises(AttributeError):
        config.fft_size = 1024
