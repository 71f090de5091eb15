"""Error handling and diagnostics for the robolang checker.

Provide error codes, diagnostic messages, and rustc-style error formatting
for reporting validation failures with source context.
"""

from robolang.errors.codes import ErrorCode
from robolang.errors.diagnostics import Diagnostic, Severity
from robolang.errors.reporter import DiagnosticReporter

__all__ = [
    "Diagnostic",
    "DiagnosticReporter",
    "ErrorCode",
    "Severity",
]
