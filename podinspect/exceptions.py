"""Exceptions raised while inspecting a CocoaPods project."""

from __future__ import annotations


class InspectError(Exception):
    """Base exception for all inspection errors."""

    status_code: int = 500


class UsageError(InspectError):
    """The inspection was invoked with arguments the plugin cannot honour."""

    status_code = 400


class UnrecognizedHintError(UsageError):
    """Raised when the target file is neither a lockfile nor a known manifest."""

    def __init__(self, hint: str):
        self.hint = hint
        super().__init__("Unexpected name for target file!")


class NotFoundError(InspectError):
    """A required file does not exist (-> 404)."""

    status_code = 404


class LockfileNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            'Could not find lockfile "Podfile.lock"! '
            "This might be resolved by running `pod install`."
        )


class HintNotFoundError(NotFoundError):
    def __init__(self, hint: str):
        self.hint = hint
        super().__init__(f'Given target file ("{hint}") doesn\'t exist!')


class StrictCheckPreconditionError(InspectError):
    """The strict out-of-sync check was requested but cannot be performed."""

    status_code = 400


class NoManifestForStrictCheckError(StrictCheckPreconditionError):
    def __init__(self) -> None:
        super().__init__(
            "Option `--strict-out-of-sync=true` given, but no manifest file could be found!"
        )


class NoChecksumRecordedError(StrictCheckPreconditionError):
    def __init__(self) -> None:
        super().__init__(
            "Option `--strict-out-of-sync=true` given, but lockfile doesn't encode "
            "checksum of Podfile! Try to update the CocoaPods integration via "
            '"pod install" or omit the option.'
        )


class OutOfSyncError(InspectError):
    """The manifest changed since the lockfile was generated (-> 422)."""

    status_code = 422

    def __init__(self, manifest_file: str, lockfile: str):
        self.manifest_file = manifest_file
        self.lockfile = lockfile
        super().__init__(
            f'Your Podfile ("{manifest_file}") is not in sync '
            f'with your lockfile ("{lockfile}"). '
            'Please run "pod install" and try again.'
        )

    @property
    def code(self) -> int:
        return self.status_code


class ParseError(InspectError):
    """Raised when the lockfile cannot be turned into a dependency graph."""

    status_code = 422

    def __init__(self, lockfile_name: str, cause: BaseException):
        self.lockfile_name = lockfile_name
        super().__init__(f"Error while parsing {lockfile_name}:\n{cause}")


class ExecutionError(InspectError):
    """An external command could not be spawned or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)
