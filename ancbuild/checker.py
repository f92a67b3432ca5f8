"""
The ancbuild-sanity-checker tool.

The ancbuild-sanity-checker tool examines the users
environment to see if it makes sense from the
ancbuild point of view. Useful first step in trying to
debug a failed build.
"""

import sys
import os
import shutil
import subprocess as sp
import errno

from .version import ancbuild_version, ancbuild_date
from .logconfig import loggingConfiguration
from .toolchain import Toolchain
from .errors import ToolchainError

explain_ANCIENT_COMPILER = """

The ancient translator should either be in your PATH, or else the
environment variable ANCIENT_COMPILER should hold its full path
(for example ../ancient).

"""

explain_LLVM_COMPILER_PATH = """

Your llc should either be in your PATH, or else located where the
environment variable LLVM_COMPILER_PATH indicates. If it is not called
llc, but something else (llc-3.5 say), set LLVM_LLC_NAME accordingly.

"""

explain_ANCBUILD_CC_NAME = """

The final link is done by gcc unless the environment variable
ANCBUILD_CC_NAME names another C compiler (clang, for example).

"""

explain_ANCBUILD_SDL_CONFIG = """

The SDL compile and link flags come from sdl-config. Install the SDL
development package, or point ANCBUILD_SDL_CONFIG at your sdl-config.

"""

explain_ANCBUILD_RUNTIME = """

Every program is linked with a runtime source file, runtime.c in the
current directory by default. Set ANCBUILD_RUNTIME to use another one.

"""

class Checker:
    def __init__(self, toolchain=None):
        self.toolchain = toolchain

    def check(self):
        """Performs the environmental sanity check.

        Performs the following checks in order:
        0. Prints out the version and logging configuration
        1. Check that the OS is supported.
        2. Checks that the toolchain settings make sense.
        3. Checks that the four tools exist.
        4. Checks that the runtime source exists.
        """

        self.checkSelf()

        self.checkLogging()

        if not self.checkOS():
            print('I do not think we support your OS. Sorry.')
            return 1

        if self.toolchain is None:
            try:
                self.toolchain = Toolchain()
            except ToolchainError as e:
                print(f'{e}\n{explain_LLVM_COMPILER_PATH}')
                return 1

        success = self.checkTools()

        self.checkRuntime()

        return 0 if success else 1

    def checkSelf(self):
        print(f'ancbuild version: {ancbuild_version}')
        print(f'ancbuild released: {ancbuild_date}\n')


    def checkLogging(self):
        (destination, level) = loggingConfiguration()
        print(f'Logging output to {destination if destination else "standard error"}.')
        if not level:
            print('Logging level not set, defaulting to WARNING.')
        else:
            print(f'Logging level set to {level}.')


    def checkOS(self):
        """Returns True if we support the OS."""
        return (sys.platform.startswith('freebsd') or
                sys.platform.startswith('linux') or
                sys.platform.startswith('darwin'))


    def checkTools(self):
        """Tests that the tools actually exist."""
        tc = self.toolchain

        # the translator reads its program from stdin, so there is no
        # version switch to poke it with
        ancient = tc.getTranslator()[0]
        ancientOk = shutil.which(ancient) is not None
        if not ancientOk:
            print(f'The ancient translator {ancient} was not found or not executable.\n')
            print(explain_ANCIENT_COMPILER)
        else:
            print(f'The ancient translator is:\n\n\t{shutil.which(ancient)}\n')

        checks = [
            ('static compiler', tc.getStaticCompiler(), '-version', 1, explain_LLVM_COMPILER_PATH),
            ('C compiler', tc.getCompiler()[0], '-v', 0, explain_ANCBUILD_CC_NAME),
            ('SDL configuration tool', tc.sdlConfig, '--version', 0, explain_ANCBUILD_SDL_CONFIG),
        ]

        success = ancientOk
        for (what, exe, switch, line, explanation) in checks:
            (ok, version) = self.checkExecutable(exe, switch)
            if not ok:
                print(f'The {what} {exe} was not found or not executable.\n{version}\n')
                print(explanation)
            else:
                print(f'The {what} {exe} is:\n\n\t{extractLine(version, line)}\n')
            success = success and ok

        if not success:
            print('Better not try using ancbuild!\n')

        return success


    def checkExecutable(self, exe, version_switch='-v'):
        """Checks that an executable exists, and is executable."""
        cmd = [exe, version_switch]
        try:
            compiler = sp.Popen(cmd, stdout=sp.PIPE, stderr=sp.PIPE)
            (out, err) = compiler.communicate()
            # localized compilers do not always speak utf-8
            compilerOutput = out.decode('utf-8', 'replace') + err.decode('utf-8', 'replace')
        except OSError as e:
            if e.errno == errno.EACCES or e.errno == errno.EPERM:
                return (False, f'{exe} not executable')
            if e.errno == errno.ENOENT:
                return (False, f'{exe} not found')
            return (False, f'{exe} not sure why, errno is {e.errno}')
        else:
            return (True, compilerOutput)


    def checkRuntime(self):
        """Checks that the runtime source, as seen from here, exists."""
        runtime = self.toolchain.getRuntimeSource()
        if os.path.isfile(runtime):
            print(f'Using the runtime source:\n\n\t{runtime}\n\n')
            return True
        print(f'The runtime source:\n\n\t{runtime}\n\ndoes not exist.{explain_ANCBUILD_RUNTIME}')
        return False


def extractLine(version, n):
    if not version:
        return version
    lines = version.split('\n')
    line = lines[n] if n < len(lines) else lines[-1]
    return line.strip() if line else line


def main():
    """ The entry point to ancbuild-sanity-checker.
    """
    return Checker().check()


if __name__ == '__main__':
    sys.exit(main())
