#!/usr/bin/env python
"""Compiles an ancient program into a native SDL executable.

    ancbuild prog.anc prog

runs the translator, llc and the C compiler in turn, linking the
result with the runtime source (runtime.c in the current directory
unless ANCBUILD_RUNTIME says otherwise) and the flags reported by
sdl-config. The first tool to fail stops the build, and its exit
code becomes ours.
"""

import sys

from .errors import BuildError, UsageError
from .logconfig import logConfig, informUser
from .pipeline import build

_logger = logConfig(__name__)

# The usage line predates this tool and scripts grep for it.
USAGE = './compile.rb ANC OUT'


def parseArgs(argv):
    """Returns the (input, output) pair, or raises UsageError."""
    if len(argv) != 2:
        raise UsageError(f'expected 2 arguments, got {len(argv)}')
    return (argv[0], argv[1])


def main(argv=None):
    """ The entry point to ancbuild.
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        (anc, out) = parseArgs(argv)
    except UsageError as e:
        _logger.debug('%s', e)
        print(USAGE)
        return 0

    try:
        results = build(anc, out)
    except BuildError as e:
        informUser(f'ancbuild: {e.stage} failed: {e}\n')
        _logger.debug('ancbuild %s returned %d', argv, e.returncode)
        return e.returncode

    # pass on whatever the tools had to say, warnings mostly
    for result in results:
        if result.stderr:
            informUser(result.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
