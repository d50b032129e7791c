"""
Code Runner - compile/run short practice programs for the DSA module.

Supported languages: python, c, cpp, java.

Each run:
1. Gets its own work directory <temp_dir>/<job_id> (8 hex chars)
2. Writes the source file (Main.java for java)
3. Compiles when the language needs it
4. Runs the program with the request input on stdin
5. Removes the work directory, whatever happened

One wall-clock budget covers compile + run. This is NOT a sandbox:
programs run as the server user with no resource limits besides time.
Commands are argument lists and never go through a shell.
"""
import logging
import os
import secrets
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import List, Optional

from careerconnect.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("python", "c", "cpp", "java")
TIME_LIMIT_MESSAGE = "Time Limit Exceeded"


class UnsupportedLanguageError(ValueError):
    pass


@dataclass
class RunResult:
    output: str
    error: bool

    def to_dict(self) -> dict:
        return {"output": self.output, "error": self.error}


class _TimeLimitExceeded(Exception):
    pass


class CodeRunner:
    """
    Runs code with per-language toolchain commands from settings.
    """

    def __init__(
        self,
        temp_dir: str = None,
        timeout: float = None,
        max_output_bytes: int = None,
        python_command: str = None,
        gcc_command: str = None,
        gpp_command: str = None,
        javac_command: str = None,
        java_command: str = None,
    ):
        self.temp_dir = temp_dir or settings.code_run_temp_dir
        self.timeout = timeout if timeout is not None else settings.code_run_timeout_seconds
        self.max_output_bytes = max_output_bytes or settings.code_run_max_output_bytes
        self.python_command = python_command or settings.python_command
        self.gcc_command = gcc_command or settings.gcc_command
        self.gpp_command = gpp_command or settings.gpp_command
        self.javac_command = javac_command or settings.javac_command
        self.java_command = java_command or settings.java_command

    def _plan(self, language: str, job_dir: str, code: str):
        """
        Write the source and return (compile_cmd or None, run_cmd).
        """
        if language == "python":
            source = os.path.join(job_dir, os.path.basename(job_dir) + ".py")
            compile_cmd = None
            run_cmd = [self.python_command, source]
        elif language in ("c", "cpp"):
            ext = ".c" if language == "c" else ".cpp"
            compiler = self.gcc_command if language == "c" else self.gpp_command
            source = os.path.join(job_dir, "main" + ext)
            binary = os.path.join(job_dir, "main.out")
            compile_cmd = [compiler, source, "-o", binary]
            run_cmd = [binary]
        elif language == "java":
            # public class must match the file name
            source = os.path.join(job_dir, "Main.java")
            compile_cmd = [self.javac_command, source]
            run_cmd = [self.java_command, "-cp", job_dir, "Main"]
        else:
            raise UnsupportedLanguageError(language)

        with open(source, "w", encoding="utf-8") as f:
            f.write(code)
        return compile_cmd, run_cmd

    def _truncate(self, text: str) -> str:
        data = text.encode("utf-8", errors="replace")
        if len(data) <= self.max_output_bytes:
            return text
        return data[:self.max_output_bytes].decode("utf-8", errors="ignore")

    def _exec(self, cmd: List[str], stdin: Optional[str], deadline: float, cwd: str):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise _TimeLimitExceeded()
        try:
            return subprocess.run(
                cmd,
                input=stdin if stdin is not None else "",
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=remaining,
                cwd=cwd,
            )
        except subprocess.TimeoutExpired:
            raise _TimeLimitExceeded()

    def run(self, language: str, code: str, stdin: Optional[str] = None) -> RunResult:
        """
        Compile (if needed) and run code.

        Raises:
            UnsupportedLanguageError for languages outside SUPPORTED_LANGUAGES
            OSError when the toolchain binary is missing
        """
        if language not in SUPPORTED_LANGUAGES:
            raise UnsupportedLanguageError(language)

        job_id = secrets.token_hex(4)
        job_dir = os.path.abspath(os.path.join(self.temp_dir, job_id))
        os.makedirs(job_dir)
        deadline = time.monotonic() + self.timeout

        try:
            compile_cmd, run_cmd = self._plan(language, job_dir, code)

            if compile_cmd:
                compiled = self._exec(compile_cmd, None, deadline, job_dir)
                if compiled.returncode != 0:
                    message = compiled.stderr or f"Compilation failed with exit code {compiled.returncode}"
                    return RunResult(self._truncate(message), True)

            completed = self._exec(run_cmd, stdin, deadline, job_dir)
            if completed.returncode != 0:
                message = completed.stderr or f"Process exited with code {completed.returncode}"
                return RunResult(self._truncate(message), True)
            return RunResult(self._truncate(completed.stdout), False)

        except _TimeLimitExceeded:
            logger.info("Code run timed out", extra={"job_id": job_id, "language": language})
            return RunResult(TIME_LIMIT_MESSAGE, True)
        finally:
            try:
                shutil.rmtree(job_dir, ignore_errors=False)
            except OSError as e:
                logger.error("Cleanup error for %s: %s", job_dir, e)


# Singleton instance
_code_runner: CodeRunner = None


def get_code_runner() -> CodeRunner:
    """Get or create the runner. Also used as a FastAPI dependency."""
    global _code_runner
    if _code_runner is None:
        _code_runner = CodeRunner()
    return _code_runner
