"""crownscorch CLI — crown scorch prediction from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from crownscorch._version import __version__
from crownscorch.exceptions import CrownScorchError


def cmd_info(args: argparse.Namespace) -> int:
    """Show info about a tree point cloud file."""
    from crownscorch.core.dimensions import INTENSITY, REFLECTANCE
    from crownscorch.io.registry import read

    path = args.file
    if not Path(path).exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    print(f"File: {path}")
    print(f"Size: {Path(path).stat().st_size / 1024 / 1024:.1f} MB")

    pc = read(path)
    print(f"Points: {pc.num_points:,}")
    print(f"Dimensions: {', '.join(pc.dimensions)}")

    if pc.num_points:
        bounds = pc.bounds
        print(f"Bounds Z: [{bounds.minz:.3f}, {bounds.maxz:.3f}]")
        print(f"Tree height: {bounds.height:.2f}")
        print(f"Crown diameter: {bounds.crown_diameter:.2f}")

    if REFLECTANCE in pc:
        print("Reflectance: present")
    elif INTENSITY in pc:
        print("Reflectance: missing (will be calibrated from Intensity)")
    else:
        print("Reflectance: missing, no Intensity to calibrate from")
    return 0


def cmd_histogram(args: argparse.Namespace) -> int:
    """Print or save the reflectance histogram of a tree."""
    from crownscorch.features.histogram import get_histogram
    from crownscorch.filters.crown import remove_stem
    from crownscorch.filters.reflectance import add_reflectance
    from crownscorch.io.registry import read

    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    pc = read(args.file)
    if not args.crown_only:
        pc = remove_stem(pc)
    hist = get_histogram(add_reflectance(pc))
    frame = hist.to_frame()

    if args.output:
        frame.to_csv(args.output, index=False)
        print(f"Wrote {len(frame)} bins ({hist.total:,} points) to {args.output}")
    else:
        print(frame.to_string(index=False))
    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Predict crown scorch of a single tree."""
    from crownscorch.io.registry import read
    from crownscorch.model.predictor import load_model
    from crownscorch.model.scorch import RESULT_KEY, predict_scorch

    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    model = load_model(args.model) if args.model else None
    pc = read(args.file)
    result = predict_scorch(pc, model=model, plot=args.plot, crown_only=args.crown_only)
    print(f"{Path(args.file).name}: {RESULT_KEY}={result[RESULT_KEY]:.4f}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Predict crown scorch for every tree file in a directory."""
    import pandas as pd

    from crownscorch.batch import predict_directory, tree_files
    from crownscorch.model.predictor import load_model
    from crownscorch.model.scorch import RESULT_KEY

    if not Path(args.directory).is_dir():
        print(f"Error: Directory not found: {args.directory}", file=sys.stderr)
        return 1

    model = load_model(args.model) if args.model else None

    t0 = time.time()
    if args.workers > 1:
        from crownscorch.parallel import parallel_predict

        results = parallel_predict(
            tree_files(args.directory),
            model=model,
            crown_only=args.crown_only,
            num_workers=args.workers,
        )
    else:
        results = predict_directory(args.directory, model=model, crown_only=args.crown_only)
    elapsed = time.time() - t0

    frame = pd.DataFrame(results, columns=["file", RESULT_KEY])
    if args.output:
        frame.to_csv(args.output, index=False)
    else:
        print(frame.to_string(index=False))
    print(f"Predicted {len(results)} trees in {elapsed:.1f}s")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="crownscorch",
        description="crownscorch — crown scorch estimation from terrestrial lidar",
    )
    parser.add_argument(
        "--version", action="version", version=f"crownscorch {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info
    info_parser = subparsers.add_parser("info", help="Show tree point cloud info")
    info_parser.add_argument("file", help="Point cloud file path")

    # histogram
    hist_parser = subparsers.add_parser("histogram", help="Reflectance histogram")
    hist_parser.add_argument("file", help="Point cloud file path")
    hist_parser.add_argument("-o", "--output", help="Write histogram CSV here")
    hist_parser.add_argument("--crown-only", action="store_true",
                             help="Input is already a crown; skip stem removal")
    hist_parser.add_argument("-v", "--verbose", action="store_true")

    # predict
    pred_parser = subparsers.add_parser("predict", help="Predict scorch of one tree")
    pred_parser.add_argument("file", help="Point cloud file path")
    pred_parser.add_argument("-m", "--model", help="joblib model file")
    pred_parser.add_argument("--crown-only", action="store_true",
                             help="Input is already a crown; skip stem removal")
    pred_parser.add_argument("--plot", action="store_true",
                             help="Show the reflectance histogram")
    pred_parser.add_argument("-v", "--verbose", action="store_true")

    # batch
    batch_parser = subparsers.add_parser("batch", help="Predict scorch for a directory")
    batch_parser.add_argument("directory", help="Directory of per-tree files")
    batch_parser.add_argument("-m", "--model", help="joblib model file")
    batch_parser.add_argument("-o", "--output", help="Write results CSV here")
    batch_parser.add_argument("-w", "--workers", type=int, default=1,
                              help="Parallel workers (needs dask)")
    batch_parser.add_argument("--crown-only", action="store_true",
                              help="Inputs are already crowns; skip stem removal")
    batch_parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    commands = {
        "info": cmd_info,
        "histogram": cmd_histogram,
        "predict": cmd_predict,
        "batch": cmd_batch,
    }

    try:
        return commands[args.command](args)
    except CrownScorchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
