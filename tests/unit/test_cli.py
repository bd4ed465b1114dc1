import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "github"))
sys.path.insert(0, str(ROOT / "apps" / "action"))

from setup_phpstan_action.cli import build_parser


class CliTests(unittest.TestCase):
    def test_flags_default_to_none(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.version)
        self.assertIsNone(args.install_path)
        self.assertIsNone(args.path)
        self.assertIsNone(args.cache_dir)

    def test_flags(self):
        args = build_parser().parse_args(
            ["--version", "1.10.0", "--install-path", "/opt/phpstan", "--path", "/usr/bin/phpstan"]
        )
        self.assertEqual(args.version, "1.10.0")
        self.assertEqual(args.install_path, "/opt/phpstan")
        self.assertEqual(args.path, "/usr/bin/phpstan")


if __name__ == "__main__":
    unittest.main()
