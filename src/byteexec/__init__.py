"""byteexec.

Runs executables supplied as bytes (for example a helper binary bundled into
an application) by materializing them on disk first.

Example::

    materializer = Materializer()
    exe = materializer.new(program_bytes, "helper")
    exe.command("arg1", "arg2").run(check=True)
"""

from byteexec.errors import (
    ByteExecError,
    DigestMismatchOverwriteFailure,
    DirectoryUnavailable,
    DisposalFailure,
    UnexpectedFilesystemError,
    WriteFailure,
)
from byteexec.handle import ByteExec, Command, TemporaryByteExec
from byteexec.materializer import Materializer, Outcome

__all__: list[str] = [
    "ByteExec",
    "ByteExecError",
    "Command",
    "DigestMismatchOverwriteFailure",
    "DirectoryUnavailable",
    "DisposalFailure",
    "Materializer",
    "Outcome",
    "TemporaryByteExec",
    "UnexpectedFilesystemError",
    "WriteFailure",
    "__version__",
]

__version__: str = "0.1.0"
