#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

import tempfile
from pathlib import Path

from lifegrid import World, codec, zoo


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Create a world and drop a glider near the top-left corner
    world = World(12, 12)
    world.state.merge(zoo.glider(), 1, 1)

    print("Initial state:")
    print(world)
    print(f"Population: {world.alive_count()}")
    print()

    # Run simulation for 8 generations on a torus
    for _ in range(8):
        world.step(toroidal=True)
        print(f"Generation {world.generation}:")
        print(world)
        print(f"Population: {world.alive_count()}")
        print()

    # Save the final state in both formats and read it back
    with tempfile.TemporaryDirectory() as tmp:
        for name in ("final.gol", "final.bgol"):
            path = Path(tmp) / name
            codec.save(path, world.state)
            loaded = codec.load(path)
            print(f"{name}: {path.stat().st_size} bytes, round trip ok: {loaded == world.state}")


if __name__ == "__main__":
    main()
