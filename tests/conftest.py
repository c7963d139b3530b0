import importlib
import sys
import types

import numpy as np
import pytest

DEVICES = [
    {"name": "Built-in Microphone", "max_input_channels": 1, "max_output_channels": 0},
    {"name": "Built-in Output", "max_input_channels": 0, "max_output_channels": 2},
    {"name": "BlackHole 2ch", "max_input_channels": 2, "max_output_channels": 2},
]


class FakeStream:
    """Records how a stream was opened and what happened to it."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.closed = False

    def start(self):
        self.started = True

    def stop(self):
        self.started = False
        finished = self.kwargs.get("finished_callback")
        if finished is not None:
            finished()

    def close(self):
        self.closed = True


class FakeCallbackStop(Exception):
    pass


def _make_fake_sounddevice(devices):
    sd = types.ModuleType("sounddevice")
    sd.devices = devices
    sd.streams = []
    sd.CallbackStop = FakeCallbackStop

    def query_devices(device=None, kind=None):
        if device is None and kind is None:
            return list(sd.devices)
        if device is None:
            device = 0
        if isinstance(device, str):
            device = next(i for i, d in enumerate(sd.devices) if d["name"] == device)
        return sd.devices[device]

    def _stream(**kwargs):
        stream = FakeStream(**kwargs)
        sd.streams.append(stream)
        return stream

    sd.query_devices = query_devices
    sd.InputStream = _stream
    sd.OutputStream = _stream
    return sd


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fake_sd(monkeypatch):
    """A sounddevice stand-in so stream code runs without PortAudio."""
    sd = _make_fake_sounddevice([dict(d) for d in DEVICES])
    monkeypatch.setitem(sys.modules, "sounddevice", sd)
    return sd


@pytest.fixture
def load_with_fake_sd(fake_sd, monkeypatch):
    """Import a logspectrum module bound to the fake sounddevice."""
    def load(name):
        monkeypatch.delitem(sys.modules, name, raising=False)
        return importlib.import_module(name)
    return load
