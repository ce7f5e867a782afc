"""Play skii.

Usage:
    python -m skii
    python -m skii --preset gentle --seed 42
    python -m skii --resources path/to/resources --textures
"""

import argparse
import dataclasses
import random
import sys

from .config import CONFIGS
from .loader import load_catalog


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Endless downhill skiing")
    parser.add_argument("--preset", choices=sorted(CONFIGS), default="default",
                        help="Named game configuration")
    parser.add_argument("--width", type=int, default=None, help="Course width in cells")
    parser.add_argument("--height", type=int, default=None, help="Visible rows")
    parser.add_argument("--resources", type=str, default=None,
                        help="Resource directory with config/ and textures/")
    parser.add_argument("--textures", action="store_true",
                        help="Load texture images from <resources>/textures instead of "
                             "flat colors. Requires --resources: the packaged set "
                             "ships colors only")
    parser.add_argument("--seed", type=int, default=None, help="Course seed")
    args = parser.parse_args(argv)
    if args.textures and args.resources is None:
        parser.error("--textures requires --resources")

    config = CONFIGS[args.preset]
    overrides = {}
    if args.width is not None:
        overrides["grid_width"] = args.width
    if args.height is not None:
        overrides["grid_height"] = args.height
    try:
        if overrides:
            config = dataclasses.replace(config, **overrides)
        catalog = load_catalog(args.resources, load_textures=args.textures)
    except ValueError as e:
        # ResourceError is a ValueError too
        print(f"Error loading game: {e}")
        return 1

    # Imported late so --help works without opening a window
    from .engine import SkiEngine

    engine = SkiEngine(config, catalog=catalog, rng=random.Random(args.seed))
    engine.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
