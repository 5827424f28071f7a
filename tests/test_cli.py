import io
import os
import subprocess
import sys
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch
from pathlib import Path
from tempfile import TemporaryDirectory

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

try:
    from xorfile.main import xorfile, cli, main
except ModuleNotFoundError as exc:  # pragma: no cover - dependency missing
    xorfile = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None

_STYLE_VARS = (
    "XORFILE_CLI_PLAIN",
    "XORFILE_CLI_STYLE",
    "XORFILE_CLI_CONFIG",
    "NO_COLOR",
    "XDG_CONFIG_HOME",
    "APPDATA",
)


@unittest.skipIf(xorfile is None, f"dependency unavailable: {_IMPORT_ERROR}")
class XorFileCliTests(unittest.TestCase):
    """Command line: subcommands, caller-side checks, interactive menu."""

    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.tmp_path = Path(self.tmpdir.name)
        self.repo_root = REPO_ROOT
        self._env = patch.dict(os.environ, {"XORFILE_CLI_PLAIN": "1"})
        self._env.start()
        os.environ.pop("XORFILE_NONINTERACTIVE", None)

    def tearDown(self) -> None:
        self._env.stop()
        self.tmpdir.cleanup()

    def _cli(self, *args: str) -> "tuple[int, str]":
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = cli(list(args))
        return code, buffer.getvalue()

    def _run_cli(self, *args: str) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(self.repo_root), env.get("PYTHONPATH")])
        )
        return subprocess.run(
            [sys.executable, "-m", "xorfile", *args],
            cwd=self.repo_root,
            capture_output=True,
            text=True,
            env=env,
        )

    def test_encrypt_decrypt_roundtrip(self):
        src = self.tmp_path / "notes.txt"
        src.write_text("meet at dawn\n" * 500, encoding="utf-8")
        enc = self.tmp_path / "notes.xor"
        dec = self.tmp_path / "notes.out"
        code, out = self._cli("encrypt", str(src), str(enc), "-k", "s3cret")
        self.assertEqual(code, 0, msg=out)
        self.assertIn("File encrypted successfully!", out)
        self.assertIn(f"Output: {enc}", out)
        code, out = self._cli("decrypt", str(enc), str(dec), "-k", "s3cret", "-q")
        self.assertEqual(code, 0, msg=out)
        self.assertIn("File decrypted successfully!", out)
        self.assertEqual(dec.read_bytes(), src.read_bytes())

    def test_missing_input(self):
        code, out = self._cli("encrypt", str(self.tmp_path / "nope.bin"), str(self.tmp_path / "o"), "-k", "abcd")
        self.assertEqual(code, 1)
        self.assertIn("does not exist", out)

    def test_same_path_rejected(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        alias = self.tmp_path / "." / "data.bin"
        code, out = self._cli("encrypt", str(src), str(alias), "-k", "abcd", "-y")
        self.assertEqual(code, 1)
        self.assertIn("cannot be the same", out)
        self.assertEqual(src.read_bytes(), b"payload")

    def test_short_key_rejected(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        dst = self.tmp_path / "data.xor"
        code, out = self._cli("encrypt", str(src), str(dst), "-k", "abc")
        self.assertEqual(code, 1)
        self.assertIn("at least 4", out)
        self.assertFalse(dst.exists())

    def test_empty_input_warns(self):
        src = self.tmp_path / "empty.bin"
        src.write_bytes(b"")
        dst = self.tmp_path / "empty.xor"
        code, out = self._cli("encrypt", str(src), str(dst), "-k", "abcd")
        self.assertEqual(code, 1)
        self.assertIn("is empty", out)
        self.assertFalse(dst.exists())

    def test_existing_output_noninteractive_refuses(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        dst = self.tmp_path / "data.xor"
        dst.write_bytes(b"keep me")
        with patch.dict(os.environ, {"XORFILE_NONINTERACTIVE": "1"}):
            code, out = self._cli("encrypt", str(src), str(dst), "-k", "abcd")
        self.assertEqual(code, 1)
        self.assertIn("already exists", out)
        self.assertEqual(dst.read_bytes(), b"keep me")

    def test_existing_output_prompt(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        dst = self.tmp_path / "data.xor"
        dst.write_bytes(b"keep me")
        with patch("builtins.input", return_value="n"):
            code, out = self._cli("encrypt", str(src), str(dst), "-k", "abcd")
        self.assertEqual(code, 1)
        self.assertIn("Operation cancelled.", out)
        self.assertEqual(dst.read_bytes(), b"keep me")
        with patch("builtins.input", return_value="y"):
            code, out = self._cli("encrypt", str(src), str(dst), "-k", "abcd")
        self.assertEqual(code, 0, msg=out)
        self.assertEqual(dst.read_bytes(), xorfile.xor_bytes(b"payload", b"abcd"))

    def test_key_file_strips_trailing_newline(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(os.urandom(300))
        key_path = self.tmp_path / "key.txt"
        key_path.write_bytes(b"\x00binary-key\xff\n")
        dst = self.tmp_path / "data.xor"
        code, out = self._cli("encrypt", str(src), str(dst), "--key-file", str(key_path), "-q")
        self.assertEqual(code, 0, msg=out)
        self.assertEqual(dst.read_bytes(), xorfile.xor_bytes(src.read_bytes(), b"\x00binary-key\xff"))

    def test_missing_key_file(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        code, out = self._cli(
            "encrypt", str(src), str(self.tmp_path / "o"), "--key-file", str(self.tmp_path / "nokey")
        )
        self.assertEqual(code, 1)
        self.assertIn("Cannot read key file", out)

    def test_key_prompt_and_fingerprint(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        dst = self.tmp_path / "data.xor"
        with patch("getpass.getpass", return_value="prompted") as prompt:
            code, out = self._cli("encrypt", str(src), str(dst), "--show-fingerprint", "-q")
        self.assertEqual(code, 0, msg=out)
        prompt.assert_called_once()
        self.assertIn(xorfile.key_fingerprint(b"prompted"), out)
        self.assertEqual(dst.read_bytes(), xorfile.xor_bytes(b"payload", b"prompted"))

    def test_menu_encrypts_then_exits(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"menu payload")
        dst = self.tmp_path / "data.xor"
        answers = ["abc", "7", "1", str(src), str(dst), "3"]
        with patch("builtins.input", side_effect=answers), \
                patch("getpass.getpass", return_value="menu-key"):
            code, out = self._cli("menu")
        self.assertEqual(code, 0)
        self.assertIn("Invalid input. Please enter a number.", out)
        self.assertIn("Invalid choice. Please enter 1, 2, or 3.", out)
        self.assertIn("File encrypted successfully!", out)
        self.assertIn("Goodbye!", out)
        self.assertEqual(dst.read_bytes(), xorfile.xor_bytes(b"menu payload", b"menu-key"))

    def test_menu_is_default_and_handles_eof(self):
        with patch("builtins.input", side_effect=EOFError):
            code, out = self._cli()
        self.assertEqual(code, 0)
        self.assertIn("FILE ENCRYPTION & DECRYPTION SYSTEM", out)

    def test_menu_missing_file_reprompts(self):
        answers = ["2", str(self.tmp_path / "ghost.bin"), "3"]
        with patch("builtins.input", side_effect=answers):
            code, out = self._cli("menu")
        self.assertEqual(code, 0)
        self.assertIn("does not exist", out)

    def test_key_argument_keeps_raw_bytes(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"raw key payload")
        dst = self.tmp_path / "data.xor"
        key_arg = os.fsdecode(b"ab\xffcd")
        code, out = self._cli("encrypt", str(src), str(dst), "-k", key_arg, "-q")
        self.assertEqual(code, 0, msg=out)
        self.assertEqual(dst.read_bytes(), xorfile.xor_bytes(b"raw key payload", os.fsencode(key_arg)))
        self.assertEqual(os.fsencode(key_arg), b"ab\xffcd")

    def test_closed_stdin_at_key_prompt(self):
        src = self.tmp_path / "data.bin"
        src.write_bytes(b"payload")
        dst = self.tmp_path / "data.xor"
        with patch("getpass.getpass", side_effect=EOFError):
            code, out = self._cli("encrypt", str(src), str(dst))
        self.assertEqual(code, 1)
        self.assertIn("No key entered.", out)
        self.assertFalse(dst.exists())

    def _style_env(self, **values):
        env = {name: value for name, value in os.environ.items() if name not in _STYLE_VARS}
        env.update(values)
        return patch.dict(os.environ, env, clear=True)

    def _encrypt_once(self) -> str:
        src = self.tmp_path / "styled.bin"
        src.write_bytes(b"payload")
        code, out = self._cli("encrypt", str(src), str(self.tmp_path / "styled.xor"), "-k", "abcd", "-q", "-y")
        self.assertEqual(code, 0, msg=out)
        return out

    def test_style_color_emits_ansi_and_emoji(self):
        with self._style_env(XORFILE_CLI_STYLE="color"):
            out = self._encrypt_once()
        self.assertIn("\x1b[", out)
        self.assertIn("\u2713", out)

    def test_no_color_forces_plain(self):
        with self._style_env(NO_COLOR="1", XORFILE_CLI_CONFIG=str(self.tmp_path / "none.conf")):
            out = self._encrypt_once()
        self.assertNotIn("\x1b[", out)

    def test_config_file_plain(self):
        cfg = self.tmp_path / "cli.conf"
        cfg.write_text("# xorfile\nplain = 1\n", encoding="utf-8")
        with self._style_env(XORFILE_CLI_CONFIG=str(cfg)):
            out = self._encrypt_once()
        self.assertNotIn("\x1b[", out)
        self.assertIn("File encrypted successfully!", out)

    def test_config_file_default_location(self):
        cfg_dir = self.tmp_path / "xdg" / "xorfile"
        cfg_dir.mkdir(parents=True)
        (cfg_dir / "cli.conf").write_text("style=plain\n", encoding="utf-8")
        with self._style_env(XDG_CONFIG_HOME=str(self.tmp_path / "xdg")):
            out = self._encrypt_once()
        self.assertNotIn("\x1b[", out)

    def test_config_file_without_plain_keeps_color(self):
        cfg = self.tmp_path / "cli.conf"
        cfg.write_text("style=color\n", encoding="utf-8")
        with self._style_env(XORFILE_CLI_CONFIG=str(cfg)):
            out = self._encrypt_once()
        self.assertIn("\x1b[", out)

    def test_main_handles_keyboard_interrupt(self):
        buffer = io.StringIO()
        with patch("xorfile.engine.cli", side_effect=KeyboardInterrupt), redirect_stdout(buffer):
            code = main([])
        self.assertEqual(code, 130)
        self.assertIn("Exiting...", buffer.getvalue())

    def test_cli_module_entrypoint(self):
        src = self.tmp_path / "cli.txt"
        src.write_text("cli-power", encoding="utf-8")
        enc = self.tmp_path / "cli.xor"
        dec = self.tmp_path / "cli.out"
        result = self._run_cli("encrypt", str(src), str(enc), "-k", "pw-pw", "-q")
        self.assertEqual(result.returncode, 0, msg=result.stderr + result.stdout)
        result = self._run_cli("decrypt", str(enc), str(dec), "-k", "pw-pw", "-q")
        self.assertEqual(result.returncode, 0, msg=result.stderr + result.stdout)
        self.assertEqual(dec.read_text(encoding="utf-8"), "cli-power")


if __name__ == "__main__":
    unittest.main()
