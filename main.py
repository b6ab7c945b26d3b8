"""
FITS Converter - command line entry point
Renders every frame of one or more FITS files with each banding factor x palette
"""
import argparse
import sys

from app_config import APP_DISPLAY_NAME, APP_SUBTITLE, APP_VERSION
from colorize.errors import DecodeError, InvalidArgumentError
from colorize.models import PaletteMode
from services.config import Config
from services.converter import convert_file
from services.logger import app_logger

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_FATAL = 2


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fitsconverter',
        description=f'{APP_DISPLAY_NAME} - {APP_SUBTITLE}',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  fitsconverter image.fits                          # all palettes x stripes 1,2,10,20,50,100
  fitsconverter image.fits --modes roygbiv --stripes 1 10
  fitsconverter image.fits --window 0.0 0.25 --format png --out_dir renders
        """)

    parser.add_argument('inputs', nargs='+', metavar='FITS',
                        help='FITS files to convert')
    parser.add_argument('--out_dir', default=None,
                        help='Output directory (default: config, else next to each input)')
    parser.add_argument('--stripes', type=float, nargs='+', default=None, metavar='N',
                        help='Banding factors to render (default: 1 2 10 20 50 100)')
    parser.add_argument('--modes', nargs='+', default=None, metavar='MODE',
                        help='Palettes to render: ' + ', '.join(m.value for m in PaletteMode))
    parser.add_argument('--window', type=float, nargs=2, default=None, metavar=('START', 'END'),
                        help='Fraction of the data range to map onto the palette (default: 0 1)')
    parser.add_argument('--format', dest='output_format', choices=['bmp', 'png', 'tiff'],
                        default=None, help='Raster format (default: bmp)')
    parser.add_argument('--pattern', default=None,
                        help='Filename pattern, tokens {stem} {frame} {mode} {factor} {ext}')
    parser.add_argument('--workers', type=int, default=None,
                        help='Render worker threads (default: one per banding factor)')
    parser.add_argument('--no_flip', action='store_true',
                        help='Keep FITS row order (row 0 at the top of the raster)')
    parser.add_argument('--config', default=None,
                        help='Config file (default: app data folder)')
    parser.add_argument('--save_config', action='store_true',
                        help='Persist the given options to the config file')
    parser.add_argument('--verbose', action='store_true',
                        help='Echo debug messages to the console')
    parser.add_argument('--version', action='version', version=f'%(prog)s {APP_VERSION}')
    return parser


def apply_args(config, args):
    """Overlay command line options on the loaded config"""
    if args.out_dir is not None:
        config.set('output_directory', args.out_dir)
    if args.stripes is not None:
        config.set('banding_factors', args.stripes)
    if args.modes is not None:
        config.set('palette_modes', [PaletteMode.parse(m).value for m in args.modes])
    if args.window is not None:
        config.set_view_window(*args.window)
    if args.output_format is not None:
        config.set('output_format', args.output_format)
    if args.pattern is not None:
        config.set('filename_pattern', args.pattern)
    if args.workers is not None:
        config.set('max_workers', args.workers)
    if args.no_flip:
        config.set('flip_vertical', False)
    return config


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        app_logger.set_console_level("DEBUG")

    config = Config(args.config)
    try:
        apply_args(config, args)
    except InvalidArgumentError as e:
        app_logger.error(str(e))
        return EXIT_FATAL
    if args.save_config:
        config.save()

    exit_code = EXIT_OK
    for path in args.inputs:
        try:
            report = convert_file(path, config)
        except DecodeError as e:
            app_logger.error(f"✗ {e}")
            return EXIT_FATAL
        except InvalidArgumentError as e:
            app_logger.error(f"✗ Invalid render settings: {e}")
            return EXIT_FATAL

        if not report.ok:
            exit_code = EXIT_WRITE_FAILED

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
