"""
Subprocess session for the Singular computer algebra system.

The curve algorithms never hold implicit engine state: every call builds
a complete script, runs it in a fresh Singular process owned by the
session passed in by the caller, and parses the marked output blocks.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .conversion import parse_blocks

_logger = logging.getLogger(__name__)

DEFAULT_ARGS = ("-q", "-t", "--no-rc")


class SingularError(RuntimeError):
    """Raised when Singular reports an error or can not be run."""


class SingularNotFoundError(SingularError):
    pass


@dataclass(frozen=True)
class SingularConfig:
    executable: str = "Singular"
    timeout: Optional[float] = 120.0
    extra_args: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> "SingularConfig":
        executable = os.environ.get("HYPERCHAIN_SINGULAR", "Singular")
        timeout_text = os.environ.get("HYPERCHAIN_SINGULAR_TIMEOUT")
        if timeout_text is None:
            return cls(executable=executable)
        try:
            timeout = float(timeout_text)
        except ValueError as exc:
            raise ValueError("HYPERCHAIN_SINGULAR_TIMEOUT must be a number") from exc
        return cls(executable=executable, timeout=timeout if timeout > 0 else None)


class SingularSession:
    def __init__(self, config: Optional[SingularConfig] = None, library: str = "paraplanecurves.lib"):
        self.config = config or SingularConfig.from_env()
        self.library = library

    def available(self) -> bool:
        return shutil.which(self.config.executable) is not None

    def run(self, script: str) -> str:
        """
        Runs ``script`` on the standard input of a quiet Singular process.
        Returns standard output.
        """
        cmd = [self.config.executable, *DEFAULT_ARGS, *self.config.extra_args]
        _logger.debug("Singular script:\n%s", script)
        try:
            proc = subprocess.run(
                cmd,
                input=script,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as exc:
            raise SingularNotFoundError(
                f"Singular executable not found: {self.config.executable}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise SingularError(f"Singular timed out after {self.config.timeout}s") from exc

        _check_output(proc.stdout + proc.stderr)
        if proc.returncode != 0:
            raise SingularError(
                f"Singular exited with status {proc.returncode}: {proc.stderr.strip()}"
            )
        return proc.stdout

    def script(self, body: Sequence[str]) -> str:
        lines = [f'LIB "{self.library}";', "int @k;", *body, "quit;"]
        return "\n".join(lines) + "\n"

    def call(self, procedure: str, body: Sequence[str]) -> Dict[str, List[str]]:
        """
        Runs ``body`` after loading the library and returns the printed blocks.
        ``procedure`` names the library procedure for logging.
        """
        start = time.perf_counter()
        output = self.run(self.script(body))
        try:
            blocks = parse_blocks(output)
        except ValueError as exc:
            raise SingularError(f"{procedure}: malformed engine output") from exc
        _logger.info("Singular %s finished in %.3fs", procedure, time.perf_counter() - start)
        return blocks


def _check_output(output: str) -> None:
    errors = []
    for line in output.splitlines():
        text = line.strip()
        if text.startswith("? "):
            errors.append(text[2:])
        elif text.startswith("// **"):
            _logger.warning("Singular: %s", text[5:].strip())
    if errors:
        raise SingularError("; ".join(errors))
