"""Exceptions raised while building an ancient program.

Every failure carries the name of the stage that failed and, where a
tool actually ran, the StageResult describing that run.
"""


class BuildError(Exception):
    stage = 'build'

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result

    @property
    def returncode(self):
        """The failing tool's exit code, or 1 when there is none to preserve."""
        if self.result is not None and self.result.returncode:
            return self.result.returncode
        return 1

    def __str__(self):
        msg = super().__str__()
        if self.result is not None and self.result.stderr:
            # the tool's own words, indented under our one-line summary
            detail = self.result.stderr.rstrip().splitlines()
            msg = '\n'.join([msg] + ['    ' + line for line in detail])
        return msg


class UsageError(BuildError):
    stage = 'usage'


class ToolchainError(BuildError):
    stage = 'toolchain'


class ConfigurationQueryFailed(BuildError):
    stage = 'configuration query'


class TranslationFailed(BuildError):
    stage = 'translation'


class CompilationFailed(BuildError):
    stage = 'compilation'


class LinkFailed(BuildError):
    stage = 'link'


class CleanupFailed(BuildError):
    stage = 'cleanup'
