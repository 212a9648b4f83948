import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import PIL.Image

from fractalinator import (
    DEFAULT_LIMIT,
    DEFAULT_TABLE_SIZE,
    FractalError,
    GradientTable,
    ParseError,
    RenderConfig,
    ValidationError,
    build_gradient,
    render_frame,
    swatch_pixels,
)
from fractalinator.swatch import SWATCH_HEIGHT

VERBOSE = False
DEFAULT_OUTFILE = "unnamed.png"


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


@dataclass
class GradientOptions:
    positions: list[float] | None
    colors: list[tuple[int, int, int]] | None
    table_size: int


def parse_float(text: str, name: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise ParseError(f"{name}: {text!r} is not a valid float") from exc


def parse_uint(text: str, name: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise ParseError(f"{name}: {text!r} is not a valid unsigned integer") from exc
    if value < 0:
        raise ParseError(f"{name}: {text!r} is not a valid unsigned integer")
    return value


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Parse an ``R,G,B`` triple of 8-bit channels."""

    parts = text.split(",")
    if len(parts) != 3:
        raise ParseError(f"color {text!r} must be three comma separated channels (R,G,B)")
    channels = tuple(parse_uint(part.strip(), "color channel") for part in parts)
    for channel in channels:
        if channel > 255:
            raise ValidationError(f"color {text!r} has channel {channel} outside 0..255")
    return channels


def add_gradient_arguments(parser: ArgumentParser, required: bool) -> None:
    parser.add_argument('-c', '--colors', nargs='+', metavar='R,G,B', required=required,
                        help='control point colors, one R,G,B triple per position')
    parser.add_argument('-p', '--positions', nargs='+', metavar='POSITION', required=required,
                        help='ascending control point positions, one per color')
    parser.add_argument('-t', '--table-size', dest='table_size', default=str(DEFAULT_TABLE_SIZE),
                        metavar='N', help='number of entries in the sampled gradient table')


def add_common_arguments(parser: ArgumentParser) -> None:
    parser.add_argument('-o', '--outfile', default=DEFAULT_OUTFILE, metavar='FILE',
                        help='sets the output file; the suffix selects the image format')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print render parameters and progress')


def build_parser():
    parser = ArgumentParser(
        prog='fractalinator',
        description='Render escape-time fractals colored by monotone cubic gradients.',
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    swatch = subparsers.add_parser('swatch', help='create gradient swatch',
                                   formatter_class=ArgumentDefaultsHelpFormatter)
    add_gradient_arguments(swatch, required=True)
    swatch.add_argument('--height', default=str(SWATCH_HEIGHT), metavar='PIXELS',
                        help='height of the swatch image')
    add_common_arguments(swatch)

    generate = subparsers.add_parser('generate', help='generate fractal',
                                     formatter_class=ArgumentDefaultsHelpFormatter)
    generate.add_argument('-d', '--dimensions', nargs=2, required=True, metavar=('WIDTH', 'HEIGHT'),
                          help='image size in pixels')
    generate.add_argument('-C', '--center', nargs=2, required=True, metavar=('X', 'Y'),
                          help='fractal center point')
    generate.add_argument('-z', '--zoom', default='1', metavar='N',
                          help='pixels per unit of the complex plane; 0 means 1')
    generate.add_argument('-l', '--limit', default=str(DEFAULT_LIMIT), metavar='N',
                          help='limit for escape time algorithm')
    generate.add_argument('-j', '--julia', nargs=2, metavar=('RE', 'IM'),
                          help='render the Julia set of this constant instead of the Mandelbrot set')
    generate.add_argument('-b', '--background', metavar='R,G,B',
                          help='color of points that never escape (default: first gradient color)')
    add_gradient_arguments(generate, required=False)
    add_common_arguments(generate)

    return parser


def resolve_gradient_options(opt) -> GradientOptions:
    if (opt.colors is None) != (opt.positions is None):
        raise ValidationError("--colors and --positions must be given together")

    table_size = parse_uint(opt.table_size, "table size")
    if opt.colors is None:
        return GradientOptions(positions=None, colors=None, table_size=table_size)

    colors = [parse_rgb(text) for text in opt.colors]
    positions = [parse_float(text, "position") for text in opt.positions]
    if len(colors) != len(positions):
        raise ValidationError(
            f"got {len(colors)} colors but {len(positions)} positions; they must pair up"
        )
    return GradientOptions(positions=positions, colors=colors, table_size=table_size)


def resolve_gradient(options: GradientOptions) -> GradientTable:
    if options.colors is None:
        log("no colors given, using a white gradient")
        return GradientTable.single()
    log("building a %d entry gradient from %d control points" % (options.table_size, len(options.colors)))
    return build_gradient(options.positions, options.colors, options.table_size)


def resolve_render_config(opt) -> RenderConfig:
    width = parse_uint(opt.dimensions[0], "width")
    height = parse_uint(opt.dimensions[1], "height")
    if width == 0 or height == 0:
        raise ValidationError(f"image dimensions must be positive, got {width}x{height}")

    center = complex(parse_float(opt.center[0], "center x"), parse_float(opt.center[1], "center y"))
    julia = None
    if opt.julia is not None:
        julia = complex(parse_float(opt.julia[0], "julia re"), parse_float(opt.julia[1], "julia im"))
    background = parse_rgb(opt.background) if opt.background is not None else None

    return RenderConfig(
        width=width,
        height=height,
        center=center,
        zoom=parse_uint(opt.zoom, "zoom"),
        limit=parse_uint(opt.limit, "limit"),
        julia=julia,
        background=background,
    )


def resolve_output_path(outfile: str) -> Path:
    output_path = Path(outfile).expanduser()
    if not output_path.suffix:
        output_path = output_path.with_suffix(".png")
    image_format = PIL.Image.registered_extensions().get(output_path.suffix.lower())
    # registered_extensions() also lists formats Pillow can only read
    if image_format is None or image_format not in PIL.Image.SAVE:
        raise ValidationError(f"unsupported image format {output_path.suffix!r} for {outfile!r}")
    return output_path


def write_single_image(pixels: np.ndarray, output_path: Path) -> None:
    """Write an RGB pixel array to ``output_path``."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    PIL.Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(str(output_path))


def handle_swatch(opt) -> None:
    output_path = resolve_output_path(opt.outfile)
    height = parse_uint(opt.height, "height")
    table = resolve_gradient(resolve_gradient_options(opt))

    log("swatch: %d x %d -> %s" % (len(table), height, output_path))
    write_single_image(swatch_pixels(table, height), output_path)


def handle_fractal(opt) -> None:
    output_path = resolve_output_path(opt.outfile)
    config = resolve_render_config(opt)
    table = resolve_gradient(resolve_gradient_options(opt))

    mode = "julia c=%s" % config.julia if config.julia is not None else "mandelbrot"
    log("dimensions: %dx%d" % config.dimensions)
    log("center: %s" % config.center)
    log("zoom: %d" % config.effective_zoom)
    log("limit: %d" % config.limit)
    log("mode: %s" % mode)

    result = render_frame(config, table)
    escaped = int(np.count_nonzero(result.indices >= 0))
    log("%d of %d pixels escaped" % (escaped, result.indices.size))

    write_single_image(result.pixels, output_path)
    log("wrote %s" % output_path)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(getattr(opt, "verbose", False))

    if opt.command is None:
        parser.print_help()
        return 0

    try:
        if opt.command == 'swatch':
            handle_swatch(opt)
        else:
            handle_fractal(opt)
    except (FractalError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
