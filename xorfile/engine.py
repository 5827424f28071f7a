# XORFILE STREAM TRANSFORM ENGINE ->

import os as _os_module
import warnings as _warnings_module


class xorfile:
    import enum
    import sys
    import pathlib
    import typing
    import numpy as np
    import colorama
    from cryptography.hazmat.primitives import hashes

    MIN_KEY_LENGTH = 4
    MAX_KEY_LENGTH = 128
    # One slot stays reserved, so the largest accepted key is 126 bytes.
    KEY_LENGTH_LIMIT = MAX_KEY_LENGTH - 1
    BUFFER_SIZE = 4096
    PROGRESS_BAR_WIDTH = 50
    FINGERPRINT_HEX_LEN = 16
    ENGINE_VERSION = "1.2.0"

    class Status(enum.Enum):
        SUCCESS = "success"
        KEY_TOO_SHORT = "key too short"
        KEY_TOO_LONG = "key too long"
        CANNOT_OPEN_INPUT = "cannot open input"
        CANNOT_DETERMINE_SIZE = "cannot determine size"
        EMPTY_INPUT = "empty input"
        CANNOT_OPEN_OUTPUT = "cannot open output"
        READ_FAILED = "read failed"
        WRITE_FAILED = "write failed"
        OUTPUT_CLOSE_FAILED = "output close failed"

    class TransformOutcome:
        """Terminal result of one transform call."""

        def __init__(
            self,
            status: "xorfile.Status",
            path: "xorfile.typing.Optional[str]" = None,
            error: "xorfile.typing.Optional[BaseException]" = None,
            *,
            processed: int = 0,
            total: int = 0
        ):
            self.status = status
            self.path = path
            self.error = error
            self.processed = processed
            self.total = total

        @property
        def ok(self) -> bool:
            return self.status is xorfile.Status.SUCCESS

        def __bool__(self) -> bool:
            return self.ok

        def __repr__(self) -> str:
            return (
                f"TransformOutcome(status={self.status.name}, path={self.path!r}, "
                f"processed={self.processed}, total={self.total})"
            )

        def _reason(self) -> str:
            if self.error is None:
                return ""
            reason = getattr(self.error, "strerror", None) or str(self.error)
            return f": {reason}" if reason else ""

        def message(self) -> str:
            S = xorfile.Status
            status = self.status
            if status is S.SUCCESS:
                return f"Processed {self.processed} of {self.total} bytes"
            if status in (S.KEY_TOO_SHORT, S.KEY_TOO_LONG):
                return xorfile.key_error_message(status)
            if status is S.CANNOT_OPEN_INPUT:
                return f"Cannot open input file '{self.path}'{self._reason()}"
            if status is S.CANNOT_DETERMINE_SIZE:
                return f"Cannot determine file size of '{self.path}'{self._reason()}"
            if status is S.EMPTY_INPUT:
                return f"Input file '{self.path}' is empty"
            if status is S.CANNOT_OPEN_OUTPUT:
                return f"Cannot create output file '{self.path}'{self._reason()}"
            if status is S.READ_FAILED:
                return (
                    f"Read operation failed on '{self.path}' after "
                    f"{self.processed} of {self.total} bytes{self._reason()}"
                )
            if status is S.WRITE_FAILED:
                return (
                    f"Write operation failed on '{self.path}' after "
                    f"{self.processed} of {self.total} bytes{self._reason()}"
                )
            return f"Error closing output file '{self.path}'{self._reason()}"

    @staticmethod
    def _coerce_key_bytes(
        key: "xorfile.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if isinstance(key, str):
            return key.encode("utf-8")
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key)
        raise TypeError(f"Unsupported key type: {type(key)!r}")

    @staticmethod
    def validate_key(
        key: "xorfile.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> "xorfile.Status":
        length = len(xorfile._coerce_key_bytes(key))
        if length < xorfile.MIN_KEY_LENGTH:
            return xorfile.Status.KEY_TOO_SHORT
        if length >= xorfile.KEY_LENGTH_LIMIT:
            return xorfile.Status.KEY_TOO_LONG
        return xorfile.Status.SUCCESS

    @staticmethod
    def key_error_message(status: "xorfile.Status") -> str:
        if status is xorfile.Status.KEY_TOO_SHORT:
            return f"Key must be at least {xorfile.MIN_KEY_LENGTH} bytes long."
        if status is xorfile.Status.KEY_TOO_LONG:
            return f"Key is too long (max {xorfile.KEY_LENGTH_LIMIT - 1} bytes)."
        return ""

    @staticmethod
    def key_fingerprint(
        key: "xorfile.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> str:
        """
        Short SHA-256 digest of the key.

        Output files carry no key marker; the fingerprint identifies the key
        used without revealing it.
        """
        digest = xorfile.hashes.Hash(xorfile.hashes.SHA256())
        digest.update(xorfile._coerce_key_bytes(key))
        return digest.finalize().hex()[:xorfile.FINGERPRINT_HEX_LEN]

    @staticmethod
    def _key_mask(key: bytes, chunk_size: int) -> "xorfile.np.ndarray":
        key_arr = xorfile.np.frombuffer(key, dtype=xorfile.np.uint8)
        return xorfile.np.resize(key_arr, chunk_size)

    @staticmethod
    def _xor_chunk_inplace(buf: bytearray, length: int, mask: "xorfile.np.ndarray") -> None:
        # The key phase restarts at key[0] on every chunk.
        if not length:
            return
        arr = xorfile.np.frombuffer(memoryview(buf)[:length], dtype=xorfile.np.uint8)
        xorfile.np.bitwise_xor(arr, mask[:length], out=arr)

    @staticmethod
    def xor_bytes(
        data: "xorfile.typing.Union[bytes, bytearray, memoryview]",
        key: "xorfile.typing.Union[str, bytes, bytearray, memoryview]",
        *,
        chunk_size: int | None = None
    ) -> bytes:
        """In-memory equivalent of ``transform`` with the same chunk-local key phase."""
        key_bytes = xorfile._coerce_key_bytes(key)
        if not key_bytes:
            raise ValueError("Key must not be empty")
        chunk = xorfile.BUFFER_SIZE if chunk_size is None else int(chunk_size)
        if chunk <= 0:
            raise ValueError("chunk_size must be positive")
        out = bytearray(data)
        mask = xorfile._key_mask(key_bytes, chunk)
        view = memoryview(out)
        for offset in range(0, len(out), chunk):
            block = view[offset:offset + chunk]
            arr = xorfile.np.frombuffer(block, dtype=xorfile.np.uint8)
            xorfile.np.bitwise_xor(arr, mask[:len(block)], out=arr)
        return bytes(out)

    @staticmethod
    def _open_input(path: str):
        return open(path, "rb")

    @staticmethod
    def _open_output(path: str):
        return open(path, "wb")

    @staticmethod
    def _measure_size(handle) -> int:
        handle.seek(0, _os_module.SEEK_END)
        size = handle.tell()
        handle.seek(0, _os_module.SEEK_SET)
        return size

    @staticmethod
    def transform(
        input_path: "xorfile.typing.Union[str, xorfile.pathlib.Path]",
        output_path: "xorfile.typing.Union[str, xorfile.pathlib.Path]",
        key: "xorfile.typing.Union[str, bytes, bytearray, memoryview]",
        *,
        chunk_size: int | None = None,
        progress_cb: "xorfile.typing.Optional[xorfile.typing.Callable[[int, int], None]]" = None
    ) -> "xorfile.TransformOutcome":
        """
        Stream ``input_path`` through the repeating-key XOR into ``output_path``.

        The caller is expected to have checked that the input exists and that
        both paths differ. I/O failures are reported through the returned
        outcome, never raised.
        """
        S = xorfile.Status
        Outcome = xorfile.TransformOutcome
        key_bytes = xorfile._coerce_key_bytes(key)
        key_status = xorfile.validate_key(key_bytes)
        if key_status is not S.SUCCESS:
            return Outcome(key_status)
        chunk = xorfile.BUFFER_SIZE if chunk_size is None else int(chunk_size)
        if chunk <= 0:
            raise ValueError("chunk_size must be positive")
        src_name = _os_module.fspath(input_path)
        dst_name = _os_module.fspath(output_path)

        try:
            src = xorfile._open_input(src_name)
        except OSError as exc:
            return Outcome(S.CANNOT_OPEN_INPUT, src_name, exc)

        dst = None
        outcome = None
        total = 0
        processed = 0
        try:
            try:
                total = xorfile._measure_size(src)
            except OSError as exc:
                outcome = Outcome(S.CANNOT_DETERMINE_SIZE, src_name, exc)
                return outcome
            if total == 0:
                outcome = Outcome(S.EMPTY_INPUT, src_name)
                return outcome
            try:
                dst = xorfile._open_output(dst_name)
            except OSError as exc:
                outcome = Outcome(S.CANNOT_OPEN_OUTPUT, dst_name, exc, total=total)
                return outcome

            mask = xorfile._key_mask(key_bytes, chunk)
            buf = bytearray(chunk)
            view = memoryview(buf)
            while True:
                try:
                    read = src.readinto(buf)
                except OSError as exc:
                    outcome = Outcome(
                        S.READ_FAILED, src_name, exc, processed=processed, total=total
                    )
                    break
                if not read:
                    break
                xorfile._xor_chunk_inplace(buf, read, mask)
                try:
                    written = dst.write(view[:read])
                except OSError as exc:
                    outcome = Outcome(
                        S.WRITE_FAILED, dst_name, exc, processed=processed, total=total
                    )
                    break
                if written is not None and written < read:
                    outcome = Outcome(
                        S.WRITE_FAILED, dst_name, processed=processed, total=total
                    )
                    break
                processed += read
                if progress_cb:
                    progress_cb(processed, total)
        finally:
            try:
                src.close()
            except OSError as exc:
                _warnings_module.warn(
                    f"Error closing input file '{src_name}': {exc}",
                    RuntimeWarning,
                    stacklevel=2
                )
            if dst is not None:
                try:
                    dst.close()
                except OSError as exc:
                    if outcome is None:
                        outcome = Outcome(
                            S.OUTPUT_CLOSE_FAILED, dst_name, exc, processed=processed, total=total
                        )

        if outcome is not None:
            return outcome
        return Outcome(S.SUCCESS, dst_name, processed=processed, total=total)

    @staticmethod
    def encrypt_file(input_path, output_path, key, **kwargs) -> "xorfile.TransformOutcome":
        return xorfile.transform(input_path, output_path, key, **kwargs)

    @staticmethod
    def decrypt_file(input_path, output_path, key, **kwargs) -> "xorfile.TransformOutcome":
        # XOR is its own inverse.
        return xorfile.transform(input_path, output_path, key, **kwargs)

    class _ProgressReporter:
        """Single-line textual progress bar, refreshed after every chunk."""

        def __init__(self, stream=None, width: int | None = None, plain: bool = False):
            self.stream = stream or xorfile.sys.stdout
            self.width = width or xorfile.PROGRESS_BAR_WIDTH
            self.plain = plain
            self._is_tty = bool(getattr(self.stream, "isatty", lambda: False)())
            self._printed = False
            self._last_fraction = 0.0
            if not plain:
                xorfile.colorama.just_fix_windows_console()
            self._green = "" if plain else xorfile.colorama.Fore.GREEN
            self._reset = "" if plain else xorfile.colorama.Style.RESET_ALL

        def _render_bar(self, fraction: float) -> str:
            fraction = max(0.0, min(1.0, fraction))
            pos = int(self.width * fraction)
            cells = []
            for i in range(self.width):
                if i < pos:
                    cells.append("=")
                elif i == pos:
                    cells.append(">")
                else:
                    cells.append(" ")
            bar = "".join(cells)
            if fraction >= 1.0 and self._green:
                bar = f"{self._green}{bar}{self._reset}"
            return f"[{bar}] {fraction * 100:.1f}%"

        def update(self, processed: int, total: int) -> None:
            fraction = processed / total if total > 0 else 1.0
            # never draw the bar moving backwards
            fraction = max(self._last_fraction, min(1.0, fraction))
            self._last_fraction = fraction
            if not self._is_tty and fraction < 1.0:
                return
            self.stream.write("\r" + self._render_bar(fraction))
            self.stream.flush()
            self._printed = True

        def __call__(self, processed: int, total: int) -> None:
            self.update(processed, total)

        def finish(self) -> None:
            if self._printed:
                self.stream.write("\n")
                self.stream.flush()
            self._printed = False
            self._last_fraction = 0.0


def cli(argv=None) -> int:
    import argparse
    import getpass

    def _cli_config_path() -> "xorfile.pathlib.Path":
        cfg = _os_module.getenv("XORFILE_CLI_CONFIG")
        if cfg:
            return xorfile.pathlib.Path(cfg).expanduser()
        xdg = _os_module.getenv("XDG_CONFIG_HOME")
        if xdg:
            return xorfile.pathlib.Path(xdg) / "xorfile" / "cli.conf"
        appdata = _os_module.getenv("APPDATA")
        if appdata:
            return xorfile.pathlib.Path(appdata) / "xorfile" / "cli.conf"
        return xorfile.pathlib.Path("~/.config/xorfile/cli.conf").expanduser()

    def _read_cli_config() -> "dict[str, str]":
        settings: "dict[str, str]" = {}
        try:
            text = _cli_config_path().read_text(encoding="utf-8")
        except OSError:
            return settings
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if "=" not in line:
                continue
            name, value = line.split("=", 1)
            settings[name.strip().lower()] = value.strip().lower()
        return settings

    def _cli_plain_mode() -> bool:
        if _os_module.getenv("XORFILE_CLI_PLAIN") or _os_module.getenv("NO_COLOR"):
            return True
        style = (_os_module.getenv("XORFILE_CLI_STYLE") or "").strip().lower()
        if style in {"plain", "0", "false", "off"}:
            return True
        if style in {"color", "on"}:
            return False
        settings = _read_cli_config()
        return settings.get("plain") in {"1", "true"} or settings.get("style") == "plain"
        cfg_path = _cli_config_path()
        try:
            if cfg_path.exists():
                data = cfg_path.read_text(encoding="utf-8").lower()
                if "plain=1" in data or "plain=true" in data:
                    return True
                if "style=plain" in data or "mode=plain" in data:
                    return True
        except OSError:
            pass
        return False

    class _CliTheme:
        def __init__(self, plain: bool):
            self.plain = plain
            self.reset = "" if plain else xorfile.colorama.Style.RESET_ALL
            self.bold = "" if plain else xorfile.colorama.Style.BRIGHT
            self.red = "" if plain else xorfile.colorama.Fore.RED
            self.green = "" if plain else xorfile.colorama.Fore.GREEN
            self.yellow = "" if plain else xorfile.colorama.Fore.YELLOW
            self.cyan = "" if plain else xorfile.colorama.Fore.CYAN

        def _wrap(self, msg: str, color: str, emoji: str | None = None) -> str:
            if self.plain:
                return msg
            prefix = f"{emoji} " if emoji else ""
            return f"{self.bold}{color}{prefix}{msg}{self.reset}"

        def ok(self, msg: str) -> str:
            return self._wrap(msg, self.green, "✓")

        def warn(self, msg: str) -> str:
            return self._wrap(msg, self.yellow, "⚠️")

        def err(self, msg: str) -> str:
            return self._wrap(msg, self.red, "❌")

        def info(self, msg: str) -> str:
            return self._wrap(msg, self.cyan)

    parser = argparse.ArgumentParser(
        prog="xorfile",
        description="Encrypt or decrypt files with a repeating-key XOR"
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors and emoji in output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {xorfile.ENGINE_VERSION}"
    )
    subparsers = parser.add_subparsers(dest="command")
    for name, verb in (("encrypt", "Encrypt"), ("decrypt", "Decrypt")):
        sub = subparsers.add_parser(name, help=f"{verb} a file")
        sub.add_argument("input", help="Input file path")
        sub.add_argument("output", help="Output file path")
        key_group = sub.add_mutually_exclusive_group()
        key_group.add_argument(
            "-k", "--key",
            default=None,
            help="Key text (prompted without echo when omitted)"
        )
        key_group.add_argument(
            "--key-file",
            default=None,
            help="Read the raw key bytes from a file"
        )
        sub.add_argument(
            "-y", "--yes",
            action="store_true",
            help="Overwrite an existing output file without asking"
        )
        sub.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Do not draw the progress bar"
        )
        sub.add_argument(
            "--show-fingerprint",
            action="store_true",
            help="Print a short SHA-256 fingerprint of the key after success"
        )
    subparsers.add_parser("menu", help="Interactive menu (default)")

    args = parser.parse_args(argv)
    theme = _CliTheme(args.plain or _cli_plain_mode())
    if not theme.plain:
        xorfile.colorama.just_fix_windows_console()
    noninteractive = _os_module.getenv("XORFILE_NONINTERACTIVE") == "1"

    def _paths_equal(a: str, b: str) -> bool:
        try:
            return xorfile.pathlib.Path(a).resolve() == xorfile.pathlib.Path(b).resolve()
        except OSError:
            return xorfile.pathlib.Path(a).absolute() == xorfile.pathlib.Path(b).absolute()

    def _read_key_file(path: str) -> bytes:
        data = xorfile.pathlib.Path(path).expanduser().read_bytes()
        if data.endswith(b"\r\n"):
            return data[:-2]
        if data.endswith(b"\n"):
            return data[:-1]
        return data

    def _prompt_key() -> bytes:
        text = getpass.getpass(
            f"Enter encryption key (min {xorfile.MIN_KEY_LENGTH} chars): "
        )
        return _os_module.fsencode(text)

    def _confirm_overwrite(path: str, assume_yes: bool) -> bool:
        if assume_yes:
            return True
        if noninteractive:
            print(theme.err(f"File '{path}' already exists (use --yes to overwrite)."))
            return False
        answer = input(f"WARNING: File '{path}' already exists. Overwrite? (y/n): ")
        if answer.strip().lower()[:1] != "y":
            print("Operation cancelled.")
            return False
        return True

    def _check_paths(src: str, dst: str, assume_yes: bool) -> bool:
        if not _os_module.path.exists(src):
            print(theme.err(f"File '{src}' does not exist!"))
            return False
        if _paths_equal(src, dst):
            print(theme.err("Output file cannot be the same as input file!"))
            return False
        if _os_module.path.exists(dst):
            return _confirm_overwrite(dst, assume_yes)
        return True

    def _run(mode: str, src: str, dst: str, key: bytes, *, quiet: bool, fingerprint: bool) -> int:
        key_status = xorfile.validate_key(key)
        if key_status is not xorfile.Status.SUCCESS:
            print(theme.err(xorfile.key_error_message(key_status)))
            return 1
        print("\nProcessing...")
        reporter = None if quiet else xorfile._ProgressReporter(plain=theme.plain)
        try:
            if mode == "encrypt":
                outcome = xorfile.encrypt_file(src, dst, key, progress_cb=reporter)
            else:
                outcome = xorfile.decrypt_file(src, dst, key, progress_cb=reporter)
        finally:
            if reporter is not None:
                reporter.finish()
        if outcome.status is xorfile.Status.EMPTY_INPUT:
            print(theme.warn(outcome.message()))
            return 1
        if not outcome.ok:
            print(theme.err(outcome.message()))
            return 1
        print(theme.ok(f"File {mode}ed successfully!"))
        print(f"  Input:  {src}")
        print(f"  Output: {dst}")
        if fingerprint:
            print(theme.info(f"  Key fingerprint: {xorfile.key_fingerprint(key)}"))
        return 0

    def _menu() -> int:
        print("========================================")
        print("  FILE ENCRYPTION & DECRYPTION SYSTEM  ")
        print("========================================\n")
        while True:
            print("----------------------------------------")
            print("1. Encrypt a file")
            print("2. Decrypt a file")
            print("3. Exit")
            print("----------------------------------------")
            try:
                raw = input("Enter your choice (1-3): ")
            except EOFError:
                print("\nExiting program. Goodbye!")
                return 0
            try:
                choice = int(raw.strip())
            except ValueError:
                print(theme.err("Invalid input. Please enter a number."))
                continue
            if choice == 3:
                print("\nExiting program. Goodbye!")
                return 0
            if choice not in (1, 2):
                print(theme.err("Invalid choice. Please enter 1, 2, or 3."))
                continue
            try:
                src = input("Enter input filename: ").strip()
                if not src:
                    print(theme.err("Filename cannot be empty."))
                    continue
                if not _os_module.path.exists(src):
                    print(theme.err(f"File '{src}' does not exist!"))
                    continue
                dst = input("Enter output filename: ").strip()
                if not dst:
                    print(theme.err("Filename cannot be empty."))
                    continue
                if not _check_paths(src, dst, False):
                    continue
                key = _prompt_key()
            except EOFError:
                print("\nExiting program. Goodbye!")
                return 0
            mode = "encrypt" if choice == 1 else "decrypt"
            _run(mode, src, dst, key, quiet=False, fingerprint=False)
            print()

    if args.command in (None, "menu"):
        return _menu()

    if not _check_paths(args.input, args.output, args.yes):
        return 1
    if args.key_file:
        try:
            key = _read_key_file(args.key_file)
        except OSError as exc:
            print(theme.err(f"Cannot read key file '{args.key_file}': {exc.strerror or exc}"))
            return 1
    elif args.key is not None:
        key = _os_module.fsencode(args.key)
    else:
        try:
            key = _prompt_key()
        except EOFError:
            print(theme.err("No key entered."))
            return 1
    return _run(
        args.command,
        args.input,
        args.output,
        key,
        quiet=args.quiet,
        fingerprint=args.show_fingerprint
    )


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
