"""
sim2d Viewer - Entry Point

Usage:
    python -m sim2d [mode] [--size N] [--window WxH] [--palette NAME]
    python -m sim2d [mode] --snap STEPS [--out PATH]

Examples:
    python -m sim2d
    python -m sim2d wave
    python -m sim2d life --size 128 --window 768x768
    python -m sim2d heat --snap 500 --out heat.png

Modes:
    heat   - Explicit heat diffusion
    wave   - Leapfrog wave propagation
    life   - Conway's Game of Life

Without a mode the viewer opens on the menu.
"""

import sys

from .colormaps import COLORMAP_ORDER
from .presets import GRID_SIZE, MODE_ORDER, list_presets


def snap(mode, sim_size, steps, palette="fire", path="frame.png"):
    """Headless mode: run N frames, save a PNG, exit."""
    from PIL import Image
    from .simulator import Simulator

    sim = Simulator(mode=mode, nx=sim_size, ny=sim_size, palette=palette)

    # Start the PDE fields from a pulse in the center
    if mode != "life":
        c = sim_size // 2
        sim.paint(c, c, radius=max(2, sim_size // 16), amp=1.0)

    print(f"  {mode}: running {steps} frames...", end="", flush=True)
    for _ in range(steps):
        sim.frame()

    img = Image.fromarray(sim.pixels())
    img.save(path)
    print(f" saved: {path}")


def main(argv=None):
    mode = None
    sim_size = GRID_SIZE
    window = None
    palette = "fire"
    snap_steps = 0
    out_path = "frame.png"

    args = sys.argv[1:] if argv is None else argv
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            sim_size = int(args[i + 1])
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            parts = args[i + 1].split("x")
            window = (int(parts[0]), int(parts[1]))
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_steps = int(args[i + 1])
            i += 2
        elif arg == "--out" and i + 1 < len(args):
            out_path = args[i + 1]
            i += 2
        elif arg == "--palette" and i + 1 < len(args):
            palette = args[i + 1]
            i += 2
        elif arg == "--list":
            print("\nAvailable modes:")
            for key, name, desc in list_presets():
                print(f"    {key:8s} {name:16s} {desc}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in MODE_ORDER:
            mode = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print(f"Use --help to see usage")
            return

    if palette not in COLORMAP_ORDER:
        print(f"Unknown palette: {palette} (choose from {', '.join(COLORMAP_ORDER)})")
        return
    if sim_size < 2:
        print(f"Grid size must be at least 2, got {sim_size}")
        return

    if snap_steps > 0:
        mode = mode or MODE_ORDER[0]
        print(f"Headless snap mode: {mode} @ {sim_size}x{sim_size}, {snap_steps} frames")
        snap(mode, sim_size, snap_steps, palette=palette, path=out_path)
        return

    # pygame is only needed for the interactive viewer
    from .viewer import MENU, Viewer

    width, height = window if window else (None, None)
    print(f"Starting sim2d viewer")
    print(f"  Mode: {mode or 'menu'}")
    print(f"  Sim size: {sim_size}x{sim_size}")
    print()

    viewer = Viewer(
        width=width,
        height=height,
        sim_size=sim_size,
        start_mode=mode or MENU,
        palette=palette,
    )
    viewer.run()


if __name__ == "__main__":
    main()
