"""Tests for the run_interface command-line entry point."""

from __future__ import annotations

import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import run_interface
from interface.access import AccessLevel

FIXTURE = Path(__file__).parent / "fixtures" / "mini_docs.json"


class _Result:
    def __init__(self, stdout: str) -> None:
        self.stdout = stdout
        self.stderr = ""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.output_folder = os.path.join(self._tmp.name, "Documentation")
        patcher = patch("run_interface.configure_structured_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, *argv: str) -> tuple[int, str]:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = run_interface.main(list(argv))
        return code, buffer.getvalue()

    def test_version(self) -> None:
        code, out = self._main("version")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "ModuleInterface v0.0.3")

    def test_no_command_prints_help(self) -> None:
        code, out = self._main()
        self.assertEqual(code, 0)
        self.assertIn("generate", out)
        self.assertIn("clean", out)

    def test_generate_from_json(self) -> None:
        code, _ = self._main(
            "generate",
            "--input-json", str(FIXTURE),
            "--module-name", "Mini",
            "--output-folder", self.output_folder,
            "--no-format",
        )
        self.assertEqual(code, 0)
        text = Path(self.output_folder, "Mini.swift").read_text(encoding="utf-8")
        self.assertTrue(text.startswith("import Mini\n\n"))
        self.assertIn("public final class Dispatcher {", text)
        self.assertNotIn("ActionTag", text)

    def test_generate_accepts_verbose_flag(self) -> None:
        code, _ = self._main(
            "generate", "-v",
            "--input-json", str(FIXTURE),
            "--module-name", "Mini",
            "--output-folder", self.output_folder,
            "--no-format",
        )
        self.assertEqual(code, 0)
        self.assertTrue(Path(self.output_folder, "Mini.swift").exists())
        self.configure_logging.assert_called_once_with(level=logging.DEBUG)

    def test_top_level_verbose_survives_subcommand(self) -> None:
        code, _ = self._main("-v", "clean", "--output-folder", self.output_folder, "Yams")
        self.assertEqual(code, 0)
        self.configure_logging.assert_called_once_with(level=logging.DEBUG)

    def test_clean_accepts_verbose_flag(self) -> None:
        code, _ = self._main("clean", "--verbose", "--output-folder", self.output_folder, "Yams")
        self.assertEqual(code, 0)
        self.configure_logging.assert_called_once_with(level=logging.DEBUG)

    def test_default_log_level_is_info(self) -> None:
        code, _ = self._main("clean", "--output-folder", self.output_folder, "Yams")
        self.assertEqual(code, 0)
        self.configure_logging.assert_called_once_with(level=logging.INFO)

    def test_generate_min_acl(self) -> None:
        code, _ = self._main(
            "generate",
            "--input-json", str(FIXTURE),
            "--module-name", "Mini",
            "--output-folder", self.output_folder,
            "--min-acl", "internal",
            "--no-format",
        )
        self.assertEqual(code, 0)
        text = Path(self.output_folder, "Mini.swift").read_text(encoding="utf-8")
        self.assertIn("struct ActionTag {", text)

    def test_generate_passes_xcodebuild_arguments(self) -> None:
        calls: list[list[str]] = []
        output = FIXTURE.read_text(encoding="utf-8")

        def _fake_run(cmd, **kwargs):  # noqa: ANN001
            calls.append(cmd)
            return _Result(output)

        with patch("subprocess.run", side_effect=_fake_run):
            code, _ = self._main(
                "generate",
                "--module-name", "Mini",
                "--input-folder", self._tmp.name,
                "--output-folder", self.output_folder,
                "--no-format",
                "--",
                "-workspace", "Mini.xcworkspace",
                "-scheme", "Mini",
            )
        self.assertEqual(code, 0)
        self.assertEqual(
            calls[0],
            [
                "sourcekitten", "doc", "--module-name", "Mini", "--",
                "-workspace", "Mini.xcworkspace", "-scheme", "Mini",
            ],
        )

    def test_generate_with_config_file(self) -> None:
        config = Path(self._tmp.name, "moduleinterface.yml")
        config.write_text(
            f"output_folder: {self.output_folder}\nmin_acl: internal\n",
            encoding="utf-8",
        )
        with patch("run_interface.generate_interface") as generate:
            generate.return_value.output_path = "x"
            generate.return_value.block_count = 0
            code, _ = self._main(
                "generate", "--config", str(config), "--spm-module", "Yams", "--no-format"
            )
        self.assertEqual(code, 0)
        options = generate.call_args.args[0]
        self.assertEqual(options.output_folder, self.output_folder)
        self.assertEqual(options.minimum_access_level, AccessLevel.INTERNAL)
        self.assertEqual(options.spm_module, "Yams")

    def test_generate_missing_json_fails(self) -> None:
        code, _ = self._main(
            "generate",
            "--input-json", os.path.join(self._tmp.name, "missing.json"),
            "--output-folder", self.output_folder,
            "--no-format",
        )
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(self.output_folder))

    def test_invalid_config_fails(self) -> None:
        config = Path(self._tmp.name, "bad.yml")
        config.write_text("colour: red\n", encoding="utf-8")
        code, _ = self._main("clean", "--config", str(config), "Yams")
        self.assertEqual(code, 1)

    def test_clean_missing_succeeds(self) -> None:
        code, _ = self._main("clean", "--output-folder", self.output_folder, "Yams")
        self.assertEqual(code, 0)

    def test_clean_removes_file(self) -> None:
        os.makedirs(self.output_folder)
        target = Path(self.output_folder, "Yams.swift")
        target.write_text("import Yams\n\n", encoding="utf-8")
        code, _ = self._main("clean", "--output-folder", self.output_folder, "Yams")
        self.assertEqual(code, 0)
        self.assertFalse(target.exists())


if __name__ == "__main__":
    unittest.main()
