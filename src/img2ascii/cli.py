import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from img2ascii.converter import DEFAULT_EDGE_THRESHOLD, ConvertOptions, image_to_cells
from img2ascii.errors import ExitCode, InvalidDimensions
from img2ascii.grid import PixelBuffer
from img2ascii.output import OutputFormat, write_output
from img2ascii.render import render_ansi
from img2ascii.terminal import get_terminal_width

logger = logging.getLogger("img2ascii")


def setup_logging(debug: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def _version() -> str:
    try:
        return version("img2ascii")
    except PackageNotFoundError:
        return "unknown"


def _threshold(value: str) -> int:
    threshold = int(value)
    if not 0 <= threshold <= 255:
        raise argparse.ArgumentTypeError(f"threshold must be in 0..255, got {threshold}")
    return threshold


def _positive(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="img2ascii", description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-w", "--width", type=_positive, default=None, help="Output width in characters (default: terminal width or 80)"
    )
    parser.add_argument(
        "-H", "--height", type=_positive, default=None, help="Output height in characters (overrides aspect ratio)"
    )
    parser.add_argument(
        "-c", "--color", "--colour", dest="colour", action="store_true", default=False, help="Enable truecolor output"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=OutputFormat,
        choices=list(OutputFormat),
        metavar="{txt,html,ansi}",
        default=None,
        help="Also save the result as <image stem>.<format> in the current directory",
    )
    parser.add_argument("-e", "--edges", action="store_true", default=False, help="Apply Sobel edge detection")
    parser.add_argument(
        "--edge-threshold",
        type=_threshold,
        default=DEFAULT_EDGE_THRESHOLD,
        help=f"Edge detection threshold, 0-255 (default: {DEFAULT_EDGE_THRESHOLD})",
    )
    parser.add_argument("--debug", action="store_true", default=False, help="Log debug information to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def load_image(image_path: Path) -> PixelBuffer:
    with Image.open(image_path) as image:
        return PixelBuffer.from_image(image)


def run(args: argparse.Namespace) -> int:
    image_path = Path(args.image)
    try:
        pixels = load_image(image_path)
    except FileNotFoundError:
        print(f"Error: File not found: {image_path}", file=sys.stderr)
        return ExitCode.NOT_FOUND
    except UnidentifiedImageError:
        print(f"Error: Unsupported image format: {image_path}", file=sys.stderr)
        return ExitCode.UNSUPPORTED
    except InvalidDimensions as e:
        print(f"Error: Image width or height is zero ({e.width}x{e.height})", file=sys.stderr)
        return ExitCode.ZERO_DIMENSION
    except OSError as e:
        print(f"Failed to open image '{image_path}': {e}", file=sys.stderr)
        return ExitCode.IO_ERROR
    logger.debug("Loaded %s (%dx%d)", image_path, pixels.width, pixels.height)

    width = args.width if args.width is not None else get_terminal_width()
    try:
        options = ConvertOptions(
            width=width,
            height=args.height,
            colour=args.colour,
            edges=args.edges,
            edge_threshold=args.edge_threshold,
        )
        grid = image_to_cells(pixels, options)
    except InvalidDimensions as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ZERO_DIMENSION

    sys.stdout.write(render_ansi(grid, colour=options.colour))

    if args.output is not None:
        try:
            path = write_output(grid, image_path, args.output, colour=options.colour)
        except OSError as e:
            print(f"Error: Could not write output: {e}", file=sys.stderr)
            return ExitCode.IO_ERROR
        print(f"Saved output to {path.name}", file=sys.stderr)

    return ExitCode.OK


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)
    sys.exit(int(run(args)))
