import argparse
import sys
import os
import logging
import random
import time

# Ensure project root is in path so we can import 'mazes' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazes.algo.base import Algorithm
from mazes.core.errors import MazeError

logger = logging.getLogger("mazes")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    algos = [algo.value for algo in Algorithm]

    parser = argparse.ArgumentParser(description="Mazes: grid maze generator and analyser")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--rows", type=int, default=20, help="Maze rows")
    gen_parser.add_argument("--cols", type=int, default=20, help="Maze columns")
    gen_parser.add_argument("--rings", type=int, default=None, help="Build a polar maze with this many rings instead")
    gen_parser.add_argument("--mask", type=str, default=None, help="Mask file: .txt ('X' = off) or a grayscale image (dark = off)")
    gen_parser.add_argument("--algo", type=str, default="recursive_backtracker", choices=algos, help="Generation Algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--step-limit", type=int, default=None, help="Walk step cap for aldous_broder/wilson")
    gen_parser.add_argument("--braid", type=float, default=0.0, help="Braid Factor (0.0 - 1.0)")
    gen_parser.add_argument("--show", type=str, default="none", choices=["none", "distances", "path"], help="Text rendering overlay")
    gen_parser.add_argument("--text", action="store_true", help="Print a text rendering")
    gen_parser.add_argument("--text-out", type=str, help="Write the text rendering to a file")
    gen_parser.add_argument("--out", type=str, help="Output .maze file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the .maze output")
    gen_parser.add_argument("--seed-only", action="store_true", help="Store only algorithm and seed in the .maze output")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Analyse an existing maze")
    solve_parser.add_argument("input_file", help="Path to maze file")
    solve_parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Path start (default: longest path start)")
    solve_parser.add_argument("--end", type=int, nargs=2, metavar=("ROW", "COL"), help="Path end (default: farthest cell from start)")
    solve_parser.add_argument("--text", action="store_true", help="Print a text rendering of the path")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time every generator and the pathing passes")
    bench_parser.add_argument("--size", type=int, default=100, help="Benchmark grid side")
    bench_parser.add_argument("--seed", type=int, default=42, help="Random Seed")

    return parser


def load_mask(path: str):
    from mazes.core.mask import Mask

    if path.lower().endswith(".txt"):
        with open(path, "r") as f:
            return Mask.from_text(f.read())
    return Mask.from_image(path)


def emit_text(text: str, out_path: str = None):
    if out_path:
        with open(out_path, "w") as f:
            f.write(text)
        logger.info(f"Wrote text rendering to {out_path}")
    else:
        print(text)


def cmd_generate(args) -> int:
    from mazes.algo.generators import generate
    from mazes.algo.distances import Distances, longest_path
    from mazes.core.complexity import MazePostProcessor
    from mazes.core.grid import Grid
    from mazes.core.polar import PolarGrid

    # Create Grid
    if args.rings:
        grid = PolarGrid(args.rings)
        logger.info(f"Generating polar maze with {args.rings} rings using {args.algo.upper()}...")
    else:
        mask = None
        if args.mask:
            mask = load_mask(args.mask)
            logger.info(f"Loaded {mask.rows}x{mask.cols} mask ({mask.count_enabled()} cells enabled)")
            args.rows, args.cols = mask.rows, mask.cols
        grid = Grid(args.rows, args.cols, mask=mask)
        logger.info(f"Generating {args.rows}x{args.cols} maze with {args.algo.upper()}...")

    if args.seed_only and args.seed is None:
        # A seed-only file must regenerate the same maze
        args.seed = random.randrange(2 ** 32)
        logger.info(f"No seed given; using {args.seed}")

    t0 = time.time()
    generate(args.algo, grid, seed=args.seed, step_limit=args.step_limit)
    logger.info(f"Generation complete in {time.time() - t0:.4f}s ({grid.link_count()} passages)")

    # Post-Processing (Braid)
    if args.braid > 0.0:
        logger.info(f"Braiding maze (factor={args.braid})...")
        removed = MazePostProcessor.braid(grid, factor=args.braid, seed=args.seed)
        logger.info(f"Removed {removed} dead ends.")

    stats = MazePostProcessor.calculate_stats(grid)
    logger.info(f"Stats: {stats}")

    if args.text or args.text_out:
        from mazes.viz.text import render_text, distance_body, path_body

        body = None
        if args.show != "none":
            path = longest_path(grid)
            distances = Distances(grid, path[0])
            logger.info(f"Longest path: {len(path) - 1} steps")
            body = distance_body(distances) if args.show == "distances" else path_body(path, distances)
        emit_text(render_text(grid, body), args.text_out)

    # Save output if requested
    if args.out:
        from mazes.io.serializer import MazeSerializer
        logger.info(f"Saving maze to {args.out}...")
        meta = {"algo": args.algo, "seed": args.seed, "step_limit": args.step_limit}
        if args.braid > 0.0 and args.seed_only:
            logger.warning("Braided mazes cannot be stored seed-only; saving full passages")
            args.seed_only = False
        MazeSerializer.save(grid, args.out, meta=meta, seed_only=args.seed_only, compress=args.compress)
        logger.info("Save complete.")
    return 0


def cmd_solve(args) -> int:
    from mazes.algo.distances import Distances, diameter
    from mazes.io.serializer import MazeSerializer

    logger.info(f"Loading {args.input_file}...")
    try:
        grid, meta = MazeSerializer.load(args.input_file, regenerate=True)
    except ValueError as e:
        logger.error(f"Cannot read {args.input_file}: {e}")
        return 1
    logger.info(f"Loaded {grid!r}. Meta: {meta}")

    if args.start:
        start = grid.to_id(*args.start)
    else:
        start, _, _ = diameter(grid)
    distances = Distances(grid, start)

    if args.end:
        end = grid.to_id(*args.end)
    else:
        end, _ = distances.farthest()

    path = distances.path_to(end)
    logger.info(f"Path {grid.to_coordinate(start)} -> {grid.to_coordinate(end)}: {len(path) - 1} steps")
    print(f"Done. Path Length: {len(path)}")

    if args.text:
        from mazes.viz.text import render_text, path_body
        emit_text(render_text(grid, path_body(path)))
    return 0


def cmd_benchmark(args) -> int:
    from mazes.algo.generators import generate
    from mazes.algo.distances import diameter
    from mazes.core.grid import Grid

    print(f"\n{'ALGORITHM':<24} | {'GEN (s)':<10} | {'DIAM (s)':<10} | {'DIAMETER':<10}")
    print("-" * 64)

    for algo in Algorithm:
        grid = Grid(args.size, args.size)
        t0 = time.time()
        generate(algo, grid, seed=args.seed)
        gen_time = time.time() - t0

        t1 = time.time()
        _, _, distance = diameter(grid)
        diam_time = time.time() - t1

        print(f"{algo.value:<24} | {gen_time:<10.4f} | {diam_time:<10.4f} | {distance:<10}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "benchmark": cmd_benchmark,
    }
    try:
        return commands[args.command](args)
    except MazeError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
