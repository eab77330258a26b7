"""
Command-line interface for coil winding calculations.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .. import __version__
from ..calculator.core import calculate
from ..calculator.errors import ComputationError, ParameterValidationError
from ..calculator.output import to_json, to_markdown, to_summary
from ..calculator.validation import check_result
from ..enums import WindingMode
from ..io.loaders import WindingRequest, load_request_json, save_result_json

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 1
EXIT_FAILURE = 2

# CLI flag -> WindingRequest field
_FLAG_FIELDS = {
    "pipe_diameter": "pipe_diameter_mm",
    "inner_diameter": "inner_diameter_mm",
    "outer_diameter": "outer_diameter_mm",
    "bundle_width": "bundle_width_mm",
    "pipe_length": "pipe_length_m",
    "safety_factor": "safety_factor",
    "pipes_per_layer": "pipes_per_layer",
    "pattern": "pattern",
    "mode": "mode",
}


def get_version_string() -> str:
    """Installed package version, or the source version when not installed."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("coilwind")
    except PackageNotFoundError:
        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coilwind",
        description="Calculate pipe winding on drums: coil length or winding end position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Maximum pipe length for a drum envelope
  coilwind --pipe-diameter 20 --inner-diameter 500 --outer-diameter 800 --bundle-width 2000

  # Same drum, half-pipe offset pattern
  coilwind --pipe-diameter 20 --inner-diameter 500 --outer-diameter 800 --bundle-width 2000 --pattern BB0.5

  # Where does 750 m of pipe end up?
  coilwind --mode end_position --pipe-diameter 20 --inner-diameter 500 --bundle-width 2000 --pipe-length 750

  # Read the request from JSON, override the pattern, save the result
  coilwind request.json --pattern BB1 --save-json result.json

  # Markdown report
  coilwind request.json --format markdown
        """
    )

    parser.add_argument(
        'request_file',
        type=str,
        nargs='?',
        help='JSON request file (flags below override its values)'
    )
    parser.add_argument(
        '--mode',
        type=str,
        choices=[m.value for m in WindingMode],
        default=None,
        help='What to calculate (default: coil_length)'
    )
    parser.add_argument(
        '--pattern',
        type=str,
        default=None,
        help='Winding pattern: uneven_layers (BB1, default) or even_layers_offset (BB0.5)'
    )
    parser.add_argument(
        '--pipe-diameter',
        type=float,
        default=None,
        help='Pipe/profile outer diameter ND in mm'
    )
    parser.add_argument(
        '--inner-diameter',
        type=float,
        default=None,
        help='Drum inner diameter ID in mm'
    )
    parser.add_argument(
        '--outer-diameter',
        type=float,
        default=None,
        help='Drum outer diameter OD in mm (coil_length mode)'
    )
    parser.add_argument(
        '--bundle-width',
        type=float,
        default=None,
        help='Axial bundle width W in mm'
    )
    parser.add_argument(
        '--pipe-length',
        type=float,
        default=None,
        help='Pipe length L in m (end_position mode)'
    )
    parser.add_argument(
        '--safety-factor',
        type=float,
        default=None,
        help='Multiplier G on the pipe length (end_position mode, default: 1.0)'
    )
    parser.add_argument(
        '--pipes-per-layer',
        type=int,
        default=None,
        help='Pipes on a full layer (end_position mode, default: derived from bundle width)'
    )
    parser.add_argument(
        '--format',
        type=str,
        choices=['summary', 'markdown', 'json'],
        default='summary',
        help='Output format (default: summary)'
    )
    parser.add_argument(
        '--save-json',
        type=str,
        default=None,
        metavar='PATH',
        help='Also save request and result as JSON'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log per-layer solver details'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {get_version_string()}'
    )
    return parser


def _build_request(args: argparse.Namespace) -> WindingRequest:
    """Merge the request file (if any) with command-line overrides."""
    data = {}
    if args.request_file:
        data = load_request_json(args.request_file).model_dump(exclude_none=True)

    for flag, field in _FLAG_FIELDS.items():
        value = getattr(args, flag)
        if value is not None:
            data[field] = value

    return WindingRequest.model_validate(data)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        request = _build_request(args)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except json.JSONDecodeError as e:
        print(f"ERROR: Request file is not valid JSON: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ValidationError as e:
        print(f"ERROR: Invalid request:\n{e}", file=sys.stderr)
        return EXIT_FAILURE
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logger.debug(f"Request: {request.model_dump(mode='json', exclude_none=True)}")

    try:
        result = calculate(request)
    except ParameterValidationError as e:
        print(f"Invalid parameters: {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"  Suggestion: {e.suggestion}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ComputationError as e:
        print(f"Calculation failed: {e}", file=sys.stderr)
        print("  This input combination cannot be solved; check for extreme values", file=sys.stderr)
        return EXIT_FAILURE

    messages = check_result(request, result)

    if args.format == 'json':
        print(to_json(result, request=request, messages=messages))
    elif args.format == 'markdown':
        print(to_markdown(result, request=request, messages=messages))
    else:
        print(to_summary(result))
        for msg in messages:
            print(f"  {msg.severity.value.upper()}: {msg.message}")

    if args.save_json:
        output_path = Path(args.save_json)
        save_result_json(result, output_path, request=request)
        print(f"\nSaved result JSON: {output_path}")

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
