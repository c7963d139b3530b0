import signal

import pytest

from logspectrum.main import build_parser, run


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.file is None
    assert args.fft_size == 8192
    assert args.step == 1.06
    assert args.smooth_rate == 8.0
    assert args.smear_rate == 3.0
    assert args.fps == 60
    assert args.udp is False


def test_device_accepts_index_or_name():
    parser = build_parser()
    assert parser.parse_args(["--device", "3"]).device == 3
    assert parser.parse_args(["--device", "BlackHole 2ch"]).device == "BlackHole 2ch"


def test_invalid_fft_size_exits_before_opening_audio():
    args = build_parser().parse_args(["--fft-size", "1000"])
    assert run(args) == 2


def test_invalid_fps_exits_before_opening_audio():
    args = build_parser().parse_args(["--fps", "0"])
    assert run(args) == 2


class _OneShotSource:
    finished = True

    def __init__(self):
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True


def test_run_renders_and_restores_signal_handlers(monkeypatch, capsys):
    source = _OneShotSource()
    monkeypatch.setattr("logspectrum.main._open_source", lambda args, pipeline: source)
    before_int = signal.getsignal(signal.SIGINT)
    before_term = signal.getsignal(signal.SIGTERM)

    args = build_parser().parse_args(["--fft-size", "256"])
    assert run(args) == 0

    assert source.started and source.stopped
    assert signal.getsignal(signal.SIGINT) is before_int
    assert signal.getsignal(signal.SIGTERM) is before_term
    assert "|" in capsys.readouterr().out


def test_run_restores_handlers_when_start_fails(monkeypatch):
    class _Broken(_OneShotSource):
        def start(self):
            raise RuntimeError("no device")

    monkeypatch.setattr("logspectrum.main._open_source", lambda args, pipeline: _Broken())
    before_int = signal.getsignal(signal.SIGINT)

    with pytest.raises(RuntimeError):
        run(build_parser().parse_args(["--fft-size", "256"]))
    assert signal.getsignal(signal.SIGINT) is before_int
