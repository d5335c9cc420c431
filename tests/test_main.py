import unittest
import sys
import os
import io
import shutil
import tempfile
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazes.io.serializer import MazeSerializer
from mazes.main import main


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.out = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.out, ignore_errors=True)

    def run_cli(self, *argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(list(argv))
        return code, buf.getvalue()

    def test_no_command_prints_help(self):
        code, out = self.run_cli()
        self.assertEqual(code, 0)
        self.assertIn("generate", out)

    def test_generate_then_solve(self):
        path = os.path.join(self.out, "m.maze")
        code, out = self.run_cli("generate", "--rows", "6", "--cols", "7", "--algo", "wilson",
                                 "--seed", "3", "--text", "--show", "path", "--out", path)
        self.assertEqual(code, 0)
        self.assertIn(" S ", out)
        self.assertTrue(os.path.exists(path))

        code, out = self.run_cli("solve", path, "--start", "0", "0", "--end", "5", "6")
        self.assertEqual(code, 0)
        self.assertIn("Path Length:", out)

    def test_seed_only_solve_regenerates(self):
        path = os.path.join(self.out, "s.maze")
        code, _ = self.run_cli("generate", "--rows", "5", "--cols", "5", "--seed", "8", "--seed-only", "--out", path)
        self.assertEqual(code, 0)
        code, out = self.run_cli("solve", path)
        self.assertEqual(code, 0)
        self.assertIn("Path Length:", out)

    def test_seed_only_without_seed_is_reproducible(self):
        path = os.path.join(self.out, "noseed.maze")
        code, _ = self.run_cli("generate", "--rows", "8", "--cols", "8", "--seed-only", "--out", path)
        self.assertEqual(code, 0)

        first, meta = MazeSerializer.load(path, regenerate=True)
        second, _ = MazeSerializer.load(path, regenerate=True)
        self.assertIsInstance(meta["seed"], int)
        self.assertEqual(first.link_set(), second.link_set())

    def test_solve_truncated_file(self):
        path = os.path.join(self.out, "cut.maze")
        with open(path, "wb") as f:
            f.write(b"MAZE\x02")
        code, _ = self.run_cli("solve", path)
        self.assertEqual(code, 1)

    def test_text_mask(self):
        mask_path = os.path.join(self.out, "mask.txt")
        with open(mask_path, "w") as f:
            f.write("....\n.XX.\n....\n")
        code, out = self.run_cli("generate", "--mask", mask_path, "--algo", "prim", "--seed", "1", "--text")
        self.assertEqual(code, 0)
        self.assertIn("###", out)

    def test_polar_text_is_an_error(self):
        code, _ = self.run_cli("generate", "--rings", "3", "--text")
        self.assertEqual(code, 1)

if __name__ == '__main__':
    unittest.main()
