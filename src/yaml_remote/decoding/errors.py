"""Error formatter with dual-mode output (rich human and CI concise).

Produces Rust/Elm-style annotated error messages in human mode and
concise source:line:col -- message format in CI mode, for both
transport and decode failures.
"""

from __future__ import annotations

import os

from yaml_remote.models.result import DecodeError, TransportError

# Error codes per failure family
ERROR_CODES: dict[str, str] = {
    "transport_error": "E100",
    "http_status": "E101",
    "decode_error": "E200",
}

# Human-readable descriptions for error codes
ERROR_DESCRIPTIONS: dict[str, str] = {
    "E100": "transport error",
    "E101": "unexpected HTTP status",
    "E200": "YAML decode error",
}


def _summarize(detail: str) -> str:
    """Reduce a multi-line PyYAML message to its last problem line.

    Mark lines (`in "<unicode string>", line 1, column 8`) are skipped.
    """
    lines = [
        line.strip()
        for line in detail.splitlines()
        if line.strip() and not line.strip().startswith("in ")
    ]
    return lines[-1] if lines else detail.strip()


class ErrorFormatter:
    """Formats load errors for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        if ci_mode is None:
            self.ci_mode = os.environ.get("CI", "").lower() in ("true", "1", "yes")
        else:
            self.ci_mode = ci_mode

    def _get_error_code(self, error: TransportError | DecodeError) -> str:
        if isinstance(error, DecodeError):
            return ERROR_CODES["decode_error"]
        if error.status_code is not None:
            return ERROR_CODES["http_status"]
        return ERROR_CODES["transport_error"]

    def format_error(
        self,
        error: TransportError | DecodeError,
        source: str | None,
        source_name: str,
    ) -> str:
        """Format a single error for display.

        Args:
            error: The failed load result.
            source: Response text the decoder saw, or None for
                transport errors.
            source_name: URL or file name to show in the location.

        Returns:
            Formatted error string.
        """
        if self.ci_mode:
            return self._format_ci(error, source_name)
        return self._format_rich(error, source, source_name)

    def _format_ci(self, error: TransportError | DecodeError, source_name: str) -> str:
        """Format: source:line:col -- code: message"""
        code = self._get_error_code(error)
        if isinstance(error, DecodeError):
            line = error.line if error.line is not None else 0
            col = error.column if error.column is not None else 0
            return f"{source_name}:{line}:{col} -- {code}: {_summarize(error.detail)}"
        status = f" (status {error.status_code})" if error.status_code is not None else ""
        return f"{source_name}:0:0 -- {code}: {error.detail}{status}"

    def _format_rich(
        self,
        error: TransportError | DecodeError,
        source: str | None,
        source_name: str,
    ) -> str:
        """Format error in Rust/Elm-style rich format.

        Produces output like:
            error[E200]: YAML decode error
              --> https://example.com/a.yaml:2:9
               |
             2 | items: [1, 2
               |         ^ expected ',' or ']', but got '<stream end>'
               |
        """
        code = self._get_error_code(error)
        description = ERROR_DESCRIPTIONS.get(code, "load error")

        lines = [f"error[{code}]: {description}"]

        if isinstance(error, DecodeError) and error.line is not None:
            col = error.column if error.column is not None else 1
            lines.append(f"  --> {source_name}:{error.line}:{col}")
            lines.append("   |")

            source_lines = source.splitlines() if source else []
            line_idx = error.line - 1
            message = _summarize(error.detail)
            if 0 <= line_idx < len(source_lines):
                src_line = source_lines[line_idx].rstrip()
                line_num_str = str(error.line)
                padding = " " * len(line_num_str)
                lines.append(f" {line_num_str} | {src_line}")
                arrow_padding = " " * (col - 1)
                lines.append(f" {padding} | {arrow_padding}^ {message}")
            else:
                lines.append(f"   | {message}")
            lines.append("   |")
        else:
            lines.append(f"  --> {source_name}")
            lines.append("   |")
            lines.append(f"   | {_summarize(error.detail)}")
            lines.append("   |")

        if isinstance(error, TransportError):
            if error.status_code is not None:
                lines.append(f"   = note: server answered HTTP {error.status_code}")
            lines.append("   = help: transport errors may succeed on retry")
        else:
            lines.append("   = help: fix the remote document or change the trust mode")

        return "\n".join(lines)
