import struct
import json
import zlib
from typing import Optional, Dict, Any, Tuple
from array import array

import numpy as np

from mazes.core.grid import Grid
from mazes.core.mask import Mask
from mazes.core.polar import PolarGrid


class MazeSerializer:
    MAGIC = b"MAZE"
    VERSION = 2

    # Flags
    FLAG_COMPRESSED = 1
    FLAG_SEED_ONLY = 2
    FLAG_MASKED = 4

    # Grid kinds
    KIND_RECT = 0
    KIND_POLAR = 1

    @staticmethod
    def save(grid: Grid, filepath: str, meta: Dict[str, Any] = None, seed_only=False, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - KIND (1 byte, 0 = rectangular, 1 = polar)
        - ROWS (4 bytes, rings for polar)
        - COLS (4 bytes, 0 for polar)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - MASK_LEN (4 bytes, 0 if unmasked)
        - MASK (packed bits, row-major)
        - DATA_LEN (4 bytes, 0 if seed_only)
        - DATA (per-cell passage bitmasks, compressed or raw)
        """
        if meta is None:
            meta = {}
        if seed_only:
            # Without both, regenerating would not reproduce this maze
            if "algo" not in meta:
                raise ValueError("Seed-only files need an 'algo' entry in meta")
            if meta.get("seed") is None:
                raise ValueError("Seed-only files need a concrete 'seed' in meta")

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED
        if seed_only:
            flags |= MazeSerializer.FLAG_SEED_ONLY
        if grid.mask is not None:
            flags |= MazeSerializer.FLAG_MASKED

        if isinstance(grid, PolarGrid):
            kind, rows, cols = MazeSerializer.KIND_POLAR, grid.rings, 0
        else:
            kind, rows, cols = MazeSerializer.KIND_RECT, grid.rows, grid.cols

        meta_bytes = json.dumps(meta).encode('utf-8')
        mask_bytes = np.packbits(grid.mask.bits).tobytes() if grid.mask is not None else b""

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("BBB", MazeSerializer.VERSION, flags, kind))
            f.write(struct.pack("II", rows, cols))
            f.write(struct.pack("H", len(meta_bytes)))
            f.write(meta_bytes)
            f.write(struct.pack("I", len(mask_bytes)))
            f.write(mask_bytes)

            if seed_only:
                f.write(struct.pack("I", 0)) # No data length
            else:
                data = grid.links.tobytes()
                if compress:
                    data = zlib.compress(data)

                f.write(struct.pack("I", len(data)))
                f.write(data)

    @staticmethod
    def _read(f, size: int) -> bytes:
        chunk = f.read(size)
        if len(chunk) != size:
            raise ValueError("Truncated maze file")
        return chunk

    @staticmethod
    def _unpack(f, fmt: str) -> tuple:
        return struct.unpack(fmt, MazeSerializer._read(f, struct.calcsize(fmt)))

    @staticmethod
    def load(filepath: str, regenerate: bool = False) -> Tuple[Grid, Dict[str, Any]]:
        """
        Reads a .maze file. Malformed, truncated or inconsistent files raise
        ValueError.
        """
        read, unpack = MazeSerializer._read, MazeSerializer._unpack

        with open(filepath, "rb") as f:
            magic = f.read(4)
            if magic != MazeSerializer.MAGIC:
                raise ValueError("Invalid file format")

            version, flags, kind = unpack(f, "BBB")
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported maze file version {version}")
            rows, cols = unpack(f, "II")
            meta_len = unpack(f, "H")[0]
            meta = json.loads(read(f, meta_len).decode('utf-8'))

            mask_len = unpack(f, "I")[0]
            mask_bytes = read(f, mask_len)
            mask: Optional[Mask] = None
            if flags & MazeSerializer.FLAG_MASKED:
                if kind != MazeSerializer.KIND_RECT or mask_len != (rows * cols + 7) // 8:
                    raise ValueError(f"Mask of {mask_len} bytes does not fit a {rows}x{cols} grid")
                packed = np.frombuffer(mask_bytes, dtype=np.uint8)
                bits = np.unpackbits(packed, count=rows * cols).astype(bool)
                mask = Mask.from_array(bits.reshape(rows, cols))

            if kind == MazeSerializer.KIND_POLAR:
                grid = PolarGrid(rows)
            elif kind == MazeSerializer.KIND_RECT:
                grid = Grid(rows, cols, mask=mask)
            else:
                raise ValueError(f"Unknown grid kind {kind}")

            data_len = unpack(f, "I")[0]

            if flags & MazeSerializer.FLAG_SEED_ONLY:
                # Caller may re-run generation based on meta['seed'] and meta['algo']
                if regenerate:
                    from mazes.algo.generators import generate
                    generate(meta["algo"], grid, seed=meta.get("seed"), step_limit=meta.get("step_limit"))
            elif data_len > 0:
                data = read(f, data_len)
                if flags & MazeSerializer.FLAG_COMPRESSED:
                    try:
                        data = zlib.decompress(data)
                    except zlib.error as e:
                        raise ValueError(f"Corrupt passage data: {e}") from e
                expected = grid.links.itemsize * grid.size
                if len(data) != expected:
                    raise ValueError(f"Passage data has {len(data)} bytes, expected {expected}")

                links = array('I')
                links.frombytes(data)
                grid.load_links(links)

            return grid, meta
