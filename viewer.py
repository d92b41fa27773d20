import os
import sys
import time

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import numpy as np
import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from mandelview import (
    Frame,
    Viewer,
    ViewerConfig,
    ViewerError,
    render_frame,
    render_reference,
)
from mandelview.defaults import MAX_ITERATIONS, PRIMARY_BUTTON, START_SCALE, ZOOM_FACTOR, ZOOM_SENSITIVITY

log("TensorFlow version: %s" % tf.__version__)

# Place the evaluator on the first GPU when one is visible, otherwise on the CPU.
gpus = tf.config.list_physical_devices('GPU')
if gpus:
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
        DEVICE = '/GPU:0'
        log("GPU found, using %s" % gpus[0].name)
    except RuntimeError as e:
        log(e)
        DEVICE = '/CPU:0'
else:
    DEVICE = '/CPU:0'
    log("No GPU found, using CPU")

from argparse import ArgumentParser


def build_parser():
    parser = ArgumentParser(
        description='Headless frame driver: replay pointer and scroll events against the viewer and render the resulting frame.'
    )

    parser.add_argument('--width', type=int,
                        dest='width', help='window width in pixels',
                        metavar='WIDTH', default=800)

    parser.add_argument('--height', type=int,
                        dest='height', help='window height in pixels',
                        metavar='HEIGHT', default=600)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iteration cap for the escape-time evaluator',
                        metavar='MAX_ITERATIONS', default=MAX_ITERATIONS)

    parser.add_argument('--precision', choices=['float64', 'float32'], default='float64',
                        help='floating point precision shared by the render parameters and the evaluator')

    parser.add_argument('--start-scale', type=float,
                        dest='start_scale', help='initial world-space height of the viewport',
                        metavar='START_SCALE', default=START_SCALE)

    parser.add_argument('--zoom-factor', type=float,
                        dest='zoom_factor', help='base of the exponential zoom curve',
                        metavar='ZOOM_FACTOR', default=ZOOM_FACTOR)

    parser.add_argument('--zoom-sensitivity', type=float,
                        dest='zoom_sensitivity', help='exponent applied per scroll line',
                        metavar='ZOOM_SENSITIVITY', default=ZOOM_SENSITIVITY)

    parser.add_argument('--pointer', type=float, nargs=2,
                        dest='pointer', help='initial pointer position in screen pixels (default: window center)',
                        metavar=('X', 'Y'))

    parser.add_argument('--drag', type=float, nargs=2, action='append',
                        dest='drags', help='drag the view by DX DY screen pixels. May be repeated; drags replay before scrolls.',
                        metavar=('DX', 'DY'))

    parser.add_argument('--scroll', type=float, action='append',
                        dest='scrolls', help='scroll by DELTA lines at the pointer (positive zooms in). May be repeated.',
                        metavar='DELTA')

    parser.add_argument('--backend', choices=['tensorflow', 'reference'], default='tensorflow',
                        help='"tensorflow" renders the whole frame at once; "reference" scans pixel by pixel.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def replay_events(viewer: Viewer, opt) -> None:
    """Feed the requested pointer, drag and scroll events to ``viewer``."""

    if opt.pointer is not None:
        pointer = (opt.pointer[0], opt.pointer[1])
    else:
        pointer = (opt.width / 2.0, opt.height / 2.0)
    viewer.pointer_moved(pointer)

    for dx, dy in opt.drags or []:
        viewer.pointer_button(PRIMARY_BUTTON, True)
        pointer = (pointer[0] + dx, pointer[1] + dy)
        viewer.pointer_moved(pointer)
        viewer.pointer_button(PRIMARY_BUTTON, False)
        log("drag ({0:g}, {1:g}) -> center {2}".format(dx, dy, viewer.camera.world_center))

    for delta in opt.scrolls or []:
        viewer.scroll(delta)
        log("scroll {0:g} -> scale {1:.6g}, center {2}".format(delta, viewer.camera.scale, viewer.camera.world_center))


def describe_frame(frame: Frame, elapsed: float) -> None:
    params = frame.params
    iterations = frame.iterations
    inside = iterations >= params.max_iterations
    escaped = iterations[~inside]

    print("scale: {0:.12g}".format(params.scale))
    print("center: ({0:.17g}, {1:.17g})".format(*params.world_center))
    print("window: {0:g}x{1:g}".format(*params.window_size))
    print("uniform ({0}, {1} bytes): {2}".format(params.precision, len(params.to_bytes()), params.to_bytes().hex()))
    print("inside: {0:.2%}".format(float(np.mean(inside)) if inside.size else 0.0))
    if escaped.size:
        print("escape iterations: min {0}, max {1}, mean {2:.2f}".format(int(escaped.min()), int(escaped.max()), float(escaped.mean())))
    print("rendered in {0:.3f}s".format(elapsed))


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    config = ViewerConfig(
        start_scale=opt.start_scale,
        zoom_factor=opt.zoom_factor,
        zoom_sensitivity=opt.zoom_sensitivity,
        max_iterations=opt.max_iterations,
        precision=opt.precision,
    )

    try:
        viewer = Viewer(config)
        viewer.initialize((opt.width, opt.height))
        replay_events(viewer, opt)
    except ViewerError as exc:
        parser.error(str(exc))

    params = viewer.params
    if params is None:
        parser.error("the window has no area; nothing to render")

    log("rendering {0}x{1} with the {2} backend".format(opt.width, opt.height, opt.backend))
    start = time.perf_counter()
    if opt.backend == 'reference':
        frame = render_reference(params)
    else:
        frame = render_frame(params, device=DEVICE)
    elapsed = time.perf_counter() - start

    describe_frame(frame, elapsed)
    return frame


if __name__ == '__main__':
    main()
