"""
Command-line interface for conical bore tone-hole calculation.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ..io.loaders import (
    DesignLoadError,
    InstrumentParameters,
    load_design_json,
    save_design_json,
)
from ..enums import OutputFormat, StlEncoding
from ..calculator.core import calculate_tone_holes
from ..calculator.validation import validate_design
from ..calculator.output import to_json, to_markdown, to_summary

# Option dest -> model attribute
_OVERRIDES = {
    'length': 'length_mm',
    'base_diameter': 'base_diameter_mm',
    'tip_diameter': 'tip_diameter_mm',
    'wall_thickness': 'wall_thickness_mm',
    'tone_holes': 'tone_hole_count',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='conicalbore',
        description="Calculate tone-hole positions for a conical wind instrument",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default instrument (600mm, 20mm -> 5mm bore, 6 holes)
  conicalbore

  # Recalculate a saved design
  conicalbore design.json

  # Override values from the design file
  conicalbore design.json --tone-holes 8 --length 650

  # Markdown or JSON report
  conicalbore --format markdown
  conicalbore --format json > report.json

  # Save the (possibly overridden) design for later
  conicalbore --length 450 --save-json my_design.json

  # Printable body as ASCII STL (add --step for CAD, --binary for smaller STL)
  conicalbore design.json --stl -o output/

  # Hear hole 3, or write its tone to a WAV file
  conicalbore --play 3
  conicalbore --wav hole3.wav --hole 3

  # Fail (exit 1) if the design has validation errors
  conicalbore design.json --validate
        """
    )

    parser.add_argument(
        'design_file',
        type=str,
        nargs='?',
        default=None,
        help='Design JSON saved by the calculator (default: built-in design)'
    )

    parser.add_argument(
        '--length',
        type=float,
        default=None,
        help='Total bore length in mm'
    )

    parser.add_argument(
        '--base-diameter',
        type=float,
        default=None,
        help='Bore diameter at the wide end in mm'
    )

    parser.add_argument(
        '--tip-diameter',
        type=float,
        default=None,
        help='Bore diameter at the narrow end in mm'
    )

    parser.add_argument(
        '--tone-holes',
        type=int,
        default=None,
        help='Number of tone holes'
    )

    parser.add_argument(
        '--wall-thickness',
        type=float,
        default=None,
        help='Wall thickness in mm (geometry only)'
    )

    parser.add_argument(
        '--format',
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.SUMMARY.value,
        help='Report format (default: summary)'
    )

    parser.add_argument(
        '--save-json',
        type=str,
        default=None,
        metavar='PATH',
        help='Save the design to a JSON file'
    )

    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        default='.',
        help='Output directory for exported files (default: current directory)'
    )

    parser.add_argument(
        '--stl',
        action='store_true',
        help='Export the instrument body as STL (with design.json and design.md)'
    )

    parser.add_argument(
        '--step',
        action='store_true',
        help='Also export the instrument body as STEP'
    )

    encoding = parser.add_mutually_exclusive_group()
    encoding.add_argument(
        '--ascii',
        dest='stl_encoding',
        action='store_const',
        const=StlEncoding.ASCII.value,
        help='Write ASCII STL (default)'
    )
    encoding.add_argument(
        '--binary',
        dest='stl_encoding',
        action='store_const',
        const=StlEncoding.BINARY.value,
        help='Write binary STL'
    )
    parser.set_defaults(stl_encoding=StlEncoding.ASCII.value)

    parser.add_argument(
        '--play',
        type=int,
        default=None,
        metavar='N',
        help='Play the estimated tone of hole N (1 = nearest the tip)'
    )

    parser.add_argument(
        '--wav',
        type=str,
        default=None,
        metavar='PATH',
        help='Write the tone of --hole to a WAV file'
    )

    parser.add_argument(
        '--hole',
        type=int,
        default=1,
        metavar='N',
        help='Hole used by --wav (default: 1)'
    )

    parser.add_argument(
        '--validate',
        action='store_true',
        help='Exit with status 1 if the design has validation errors'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show progress logging'
    )

    return parser


def _select_hole(holes, number: int):
    if not 1 <= number <= len(holes):
        raise IndexError(f"Hole {number} out of range (design has {len(holes)} holes)")
    return holes[number - 1]


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    # Load design
    try:
        if args.design_file:
            print(f"Loading design from {args.design_file}...", file=sys.stderr)
            params = load_design_json(args.design_file)
        else:
            params = InstrumentParameters.defaults()
    except (DesignLoadError, OSError) as e:
        print(f"Error loading design: {e}", file=sys.stderr)
        return 1

    # CLI options override the file
    overrides = {
        attribute: getattr(args, dest)
        for dest, attribute in _OVERRIDES.items()
        if getattr(args, dest) is not None
    }
    if overrides:
        try:
            params = InstrumentParameters.model_validate({**params.model_dump(), **overrides})
        except ValidationError as e:
            print(f"Invalid parameters: {e}", file=sys.stderr)
            return 1

    holes = calculate_tone_holes(params)
    validation = validate_design(params, holes)

    if args.format == OutputFormat.JSON.value:
        print(to_json(params, holes, validation))
    elif args.format == OutputFormat.MARKDOWN.value:
        print(to_markdown(params, holes, validation))
    else:
        print(to_summary(params, holes, validation))

    if args.save_json:
        save_design_json(params, args.save_json)
        print(f"Saved design to {args.save_json}", file=sys.stderr)

    if args.stl or args.step:
        from ..io.package import generate_package, save_package_to_dir

        files = generate_package(
            params,
            holes=holes,
            include_stl=args.stl,
            include_step=args.step,
            ascii=args.stl_encoding == StlEncoding.ASCII.value,
            validation=validation,
            log=lambda msg: print(msg, file=sys.stderr),
        )
        for path in save_package_to_dir(files, Path(args.output_dir)):
            print(f"Wrote {path}", file=sys.stderr)

    try:
        if args.wav:
            from ..audio.tone import write_wav

            hole = _select_hole(holes, args.hole)
            write_wav(args.wav, hole.frequency_hz)
            print(f"Wrote hole {hole.index} ({hole.note}, {hole.frequency_hz:.2f} Hz) to {args.wav}",
                  file=sys.stderr)

        if args.play is not None:
            from ..audio.tone import SoundDeviceTonePlayer

            hole = _select_hole(holes, args.play)
            print(f"Playing hole {hole.index}: {hole.note} ({hole.frequency_hz:.2f} Hz)",
                  file=sys.stderr)
            player = SoundDeviceTonePlayer()
            try:
                player.play(hole.frequency_hz)
                player.wait()
            except Exception as e:
                print(f"Could not play tone: {e}", file=sys.stderr)
                return 1
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.validate and not validation.valid:
        for msg in validation.errors:
            print(f"Validation error [{msg.code}]: {msg.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
