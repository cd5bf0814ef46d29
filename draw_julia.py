import os
import sys
import warnings
from argparse import ArgumentParser, ArgumentTypeError

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

# Only the tensor strategy loads TensorFlow; keep its C++ logging quiet unless asked.
if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from juliaset import (
    Bound,
    ColorPolicy,
    Complex,
    ConvergentColor,
    EscapeConfig,
    RenderParameters,
    render_julia,
    write_png,
)
from juliaset.escape import DEFAULT_LIMIT
from juliaset.plane import DEFAULT_RADIUS
from juliaset.renderer import DEFAULT_C, EXECUTORS, STRATEGIES

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def parse_bool(value):
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ArgumentTypeError(f"expected a boolean (true/false), got '{value}'")


def build_parser():
    parser = ArgumentParser(description='Render a Julia set of z -> z^2 + c to a PNG file.')

    parser.add_argument('--width', type=int, required=True,
                        dest='width', help='width of the image in pixels',
                        metavar='WIDTH')

    parser.add_argument('--height', type=int, required=True,
                        dest='height', help='height of the image in pixels',
                        metavar='HEIGHT')

    parser.add_argument('--out-file', type=str, required=True,
                        dest='out_file', help='destination PNG file',
                        metavar='OUT_FILE')

    parser.add_argument('--multi-thread', type=parse_bool, nargs='?', const=True, default=False,
                        dest='multi_thread', metavar='BOOL',
                        help='render rows in parallel. A bare flag means true.')

    parser.add_argument('--strategy', choices=STRATEGIES, default=None,
                        help='execution strategy; overrides --multi-thread when given.')

    parser.add_argument('--executor', choices=EXECUTORS, default='process',
                        help='pool used by the parallel strategy.')

    parser.add_argument('--workers', type=int, default=None,
                        help='number of workers for the parallel strategy (default: pool default).')

    parser.add_argument('--c-re', type=float, dest='c_re', default=DEFAULT_C.re,
                        help='real part of the constant c', metavar='C_RE')

    parser.add_argument('--c-im', type=float, dest='c_im', default=DEFAULT_C.im,
                        help='imaginary part of the constant c', metavar='C_IM')

    parser.add_argument('--north', type=float, default=None, help='maximum imaginary value of the bound.')
    parser.add_argument('--south', type=float, default=None, help='minimum imaginary value of the bound.')
    parser.add_argument('--west', type=float, default=None, help='minimum real value of the bound.')
    parser.add_argument('--east', type=float, default=None, help='maximum real value of the bound.')

    parser.add_argument('--radius', type=float, default=DEFAULT_RADIUS,
                        help='convergence radius; also the default half-width of the bound.')

    parser.add_argument('--limit', type=int, default=DEFAULT_LIMIT,
                        help='iteration limit before a point is declared convergent.')

    parser.add_argument('--convergent', choices=['transparent', 'opaque'], default='transparent',
                        help='color of convergent points: transparent or opaque black.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging.')

    return parser


def resolve_parameters(opt, parser: ArgumentParser) -> RenderParameters:
    try:
        escape = EscapeConfig(radius=opt.radius, limit=opt.limit)
        default_bound = Bound.square(opt.radius)
        bound = Bound(
            north=default_bound.north if opt.north is None else opt.north,
            south=default_bound.south if opt.south is None else opt.south,
            west=default_bound.west if opt.west is None else opt.west,
            east=default_bound.east if opt.east is None else opt.east,
        )
        return RenderParameters(
            width=opt.width,
            height=opt.height,
            bound=bound,
            c=Complex(opt.c_re, opt.c_im),
            escape=escape,
            color=ColorPolicy(ConvergentColor[opt.convergent.upper()]),
        )
    except ValueError as exc:
        parser.error(str(exc))


def resolve_strategy(opt) -> str:
    if opt.strategy is not None:
        return opt.strategy
    return 'parallel' if opt.multi_thread else 'sequential'


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    params = resolve_parameters(opt, parser)
    strategy = resolve_strategy(opt)
    if opt.workers is not None and opt.workers < 1:
        parser.error("--workers must be at least 1.")
    if params.width == 0 or params.height == 0:
        parser.error("--width and --height must be positive to write a PNG.")

    log("Rendering {0}x{1} with c={2} over {3}".format(params.width, params.height, params.c, params.bound))
    log("Strategy: {0} (radius={1}, limit={2})".format(strategy, params.escape.radius, params.escape.limit))

    result = render_julia(params, strategy=strategy, workers=opt.workers, executor=opt.executor)
    write_png(result.buffer, result.width, result.height, opt.out_file)

    print("Wrote {0}x{1} Julia set to {2}".format(result.width, result.height, opt.out_file))
    return 0


if __name__ == '__main__':
    sys.exit(main())
