"""logspectrum -- live log-frequency spectrum host.

Captures live audio (or plays a file), runs the spectral pipeline once
per frame, and renders the smoothed curve to the terminal or broadcasts
it over UDP.

Usage:
    python -m logspectrum [--device DEV] [--fps 60]
    python -m logspectrum song.flac --udp [--udp-port 4210]
    python -m logspectrum --list-devices
"""

import argparse
import logging
import signal
import sys
import time

from logspectrum.config import (
    BUCKET_STEP,
    DEFAULT_UDP_PORT,
    FFT_SIZE,
    SMEAR_RATE,
    SMOOTH_RATE,
    TARGET_FPS,
    PipelineConfig,
)
from logspectrum.console import render_console
from logspectrum.pipeline import SpectrumPipeline
from logspectrum.udp_sender import FrameBroadcaster

logger = logging.getLogger("logspectrum")


def _device_arg(value):
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live log-frequency spectrum")
    parser.add_argument("file", nargs="?",
                        help="Audio file to play and analyse (default: live input)")
    parser.add_argument("--device", type=_device_arg,
                        help="Audio device index or name")
    parser.add_argument("--list-devices", action="store_true",
                        help="List input devices and exit")
    parser.add_argument("--channel", type=int, default=0,
                        help="Channel to analyse (default: 0)")
    parser.add_argument("--fft-size", type=int, default=FFT_SIZE,
                        help=f"FFT size, a power of two (default: {FFT_SIZE})")
    parser.add_argument("--step", type=float, default=BUCKET_STEP,
                        help=f"Bucket growth factor (default: {BUCKET_STEP})")
    parser.add_argument("--smooth-rate", type=float, default=SMOOTH_RATE,
                        help=f"Fast track rate per second (default: {SMOOTH_RATE})")
    parser.add_argument("--smear-rate", type=float, default=SMEAR_RATE,
                        help=f"Afterglow track rate per second (default: {SMEAR_RATE})")
    parser.add_argument("--fps", type=int, default=TARGET_FPS,
                        help=f"Frames per second (default: {TARGET_FPS})")
    parser.add_argument("--loop", action="store_true",
                        help="Loop file playback")
    parser.add_argument("--udp", action="store_true",
                        help="Broadcast frames over UDP instead of drawing")
    parser.add_argument("--udp-port", type=int, default=DEFAULT_UDP_PORT,
                        help=f"UDP broadcast port (default: {DEFAULT_UDP_PORT})")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    return parser


def _open_source(args, pipeline):
    # sounddevice needs PortAudio at import time; keep it out of --help
    if args.file:
        from logspectrum.file_player import FilePlayer
        return FilePlayer(args.file, pipeline.on_audio_block,
                          device=args.device, loop=args.loop)
    from logspectrum.audio_capture import AudioCapture
    return AudioCapture(pipeline.on_audio_block, device=args.device)


def _list_devices():
    from logspectrum.audio_capture import list_input_devices
    for index, name, channels in list_input_devices():
        print(f"{index:3d}  {name}  ({channels} in)")


def run(args) -> int:
    if args.list_devices:
        _list_devices()
        return 0

    try:
        config = PipelineConfig(
            fft_size=args.fft_size,
            bucket_step=args.step,
            smooth_rate=args.smooth_rate,
            smear_rate=args.smear_rate,
        )
    except ValueError as e:
        logger.error("%s", e)
        return 2
    if args.fps <= 0:
        logger.error("--fps must be positive")
        return 2

    pipeline = SpectrumPipeline(config, channel=args.channel)
    try:
        source = _open_source(args, pipeline)
    except Exception as e:
        logger.error("Could not open audio: %s", e)
        return 1

    udp = None
    if args.udp:
        udp = FrameBroadcaster(port=args.udp_port)
        udp.open()

    running = True

    def shutdown(sig, frame):
        nonlocal running
        running = False

    previous = {sig: signal.signal(sig, shutdown)
                for sig in (signal.SIGINT, signal.SIGTERM)}

    frame_interval = 1.0 / args.fps
    try:
        source.start()
        logger.info("Running at %d FPS, %d buckets -- press Ctrl+C to quit",
                    args.fps, pipeline.bucket_count)
        last = time.monotonic()
        while running:
            t0 = time.monotonic()
            dt = max(t0 - last, 1e-6)
            last = t0

            smooth, smear, _ = pipeline.tick(dt)

            if udp:
                udp.render(smooth, smear)
            else:
                render_console(smooth, smear)

            if getattr(source, "finished", False):
                break

            # Sleep remainder of frame
            elapsed = time.monotonic() - t0
            if elapsed < frame_interval:
                time.sleep(frame_interval - elapsed)
    finally:
        print()
        logger.info("Shutting down...")
        source.stop()
        if udp:
            udp.close()
        pipeline.shutdown()
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(name)s] %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
