"""The build pipeline: ancient source in, SDL executable out.

A build is four external tools run one after the other:

  sdl-config --cflags / --libs      flags for the final link
  ancient < prog.anc                writes out.bc
  llc out.bc -o out.s               lowers the bitcode to assembly
  gcc -o prog ... runtime.c out.s   links against SDL

Each stage produces a StageResult. The next stage only runs if the
previous one exited zero and left its artifact behind; otherwise the
matching BuildError is raised. The intermediates live in a scratch
directory private to the build, which is removed however the build
ends.
"""

import collections
import os
import shlex
import shutil
import subprocess as sp
import tempfile

from .errors import (CleanupFailed, CompilationFailed,
                     ConfigurationQueryFailed, LinkFailed, TranslationFailed)
from .logconfig import logConfig
from .popenwrapper import Popen
from .toolchain import Toolchain, assemblyName, bitcodeName

# Internal logger
_logger = logConfig(__name__)


class StageResult(collections.namedtuple('StageResult',
                                         'stage command returncode artifact stdout stderr')):
    """What one external tool did.

    artifact is the file the stage is expected to leave behind, or None
    when the stage only produces output on stdout.
    """
    __slots__ = ()

    @property
    def ok(self):
        if self.returncode != 0:
            return False
        return self.artifact is None or os.path.isfile(self.artifact)


def runStage(stage, cmd, artifact=None, **kwargs):
    """Runs cmd to completion and records the outcome.

    OSError (missing or non-executable tool) propagates to the caller,
    which knows which BuildError to turn it into.
    """
    proc = Popen(cmd, stdout=sp.PIPE, stderr=sp.PIPE, **kwargs)
    (out, err) = proc.communicate()
    result = StageResult(stage, cmd, proc.returncode, artifact,
                         out.decode('utf-8', 'replace'),
                         err.decode('utf-8', 'replace'))
    _logger.debug('%s rc = %d', stage, result.returncode)
    return result


def checkStage(result, errorClass):
    if result.ok:
        return result
    if result.returncode != 0:
        errorMsg = f'{result.command[0]} exited with status {result.returncode}'
    else:
        errorMsg = f'{result.command[0]} did not produce "{result.artifact}"'
    _logger.error('%s: %s', result.stage, errorMsg)
    raise errorClass(errorMsg, result)


def _query(toolchain, what):
    cmd = toolchain.getConfigQuery(what)
    try:
        result = runStage('configuration query', cmd)
    except OSError as e:
        errorMsg = f'could not run {cmd[0]}: {e.strerror or e}'
        _logger.error(errorMsg)
        raise ConfigurationQueryFailed(errorMsg) from e
    checkStage(result, ConfigurationQueryFailed)
    return result.stdout.strip()


def query_flags(toolchain):
    """Returns the (cflags, libs) pair for linking against SDL."""
    cflags = _query(toolchain, '--cflags')
    libs = _query(toolchain, '--libs')
    _logger.info('SDL cflags: "%s" libs: "%s"', cflags, libs)
    return (cflags, libs)


def translate(toolchain, inputPath, scratch):
    """Feeds inputPath to the translator, which writes out.bc into scratch."""
    bitcode = os.path.join(scratch, bitcodeName)
    cmd = toolchain.getTranslator()
    try:
        with open(inputPath, 'rb') as source:
            result = runStage('translation', cmd, bitcode, stdin=source, cwd=scratch)
    except OSError as e:
        errorMsg = f'could not translate "{inputPath}": {e.strerror or e}'
        _logger.error(errorMsg)
        raise TranslationFailed(errorMsg) from e
    return checkStage(result, TranslationFailed)


def compile_bitcode(toolchain, bitcode, scratch):
    assembly = os.path.join(scratch, assemblyName)
    cmd = [toolchain.getStaticCompiler(), bitcode, '-o', assembly]
    try:
        result = runStage('compilation', cmd, assembly)
    except OSError as e:
        errorMsg = f'could not run {cmd[0]}: {e.strerror or e}'
        _logger.error(errorMsg)
        raise CompilationFailed(errorMsg) from e
    return checkStage(result, CompilationFailed)


def link(toolchain, assembly, output, cflags, libs, runtime=None):
    """Links the generated assembly and the runtime into output.

    The libraries go last so that linkers defaulting to --as-needed
    still see the references to them.
    """
    if runtime is None:
        runtime = toolchain.getRuntimeSource()
    if not os.path.isfile(runtime):
        errorMsg = f'runtime source "{runtime}" does not exist'
        _logger.error(errorMsg)
        raise LinkFailed(errorMsg)

    # sdl-config output used to go through the shell, quotes and all
    try:
        cflagsArgs = shlex.split(cflags)
        libsArgs = shlex.split(libs)
    except ValueError as e:
        errorMsg = f'cannot parse SDL flags "{cflags}" "{libs}": {e}'
        _logger.error(errorMsg)
        raise LinkFailed(errorMsg) from e

    # a leftover executable must not pass for the result of this link
    try:
        os.remove(output)
    except FileNotFoundError:
        pass
    except OSError as e:
        errorMsg = f'could not replace "{output}": {e.strerror or e}'
        _logger.error(errorMsg)
        raise LinkFailed(errorMsg) from e

    cmd = toolchain.getCompiler()
    cmd.extend(['-o', output])
    cmd.extend(cflagsArgs)
    cmd.extend([runtime, assembly])
    cmd.extend(libsArgs)
    try:
        result = runStage('link', cmd, output)
    except OSError as e:
        errorMsg = f'could not run {cmd[0]}: {e.strerror or e}'
        _logger.error(errorMsg)
        raise LinkFailed(errorMsg) from e
    return checkStage(result, LinkFailed)


def removeScratch(scratch):
    """Best effort; a directory we cannot remove is only worth a warning."""
    try:
        shutil.rmtree(scratch)
    except OSError as e:
        failure = CleanupFailed(f'could not remove "{scratch}": {e.strerror or e}')
        _logger.warning('%s', failure)


def build(inputPath, outputPath, toolchain=None):
    """Builds the executable outputPath from the ancient source inputPath.

    Returns the list of StageResults, in the order the stages ran.
    Raises a BuildError subclass naming the first stage that failed.
    """
    if toolchain is None:
        toolchain = Toolchain()

    # pin everything to the caller's directory before anything else runs
    inputPath = os.path.abspath(inputPath)
    outputPath = os.path.abspath(outputPath)
    runtime = toolchain.getRuntimeSource()

    _logger.info('Building "%s" from "%s"', outputPath, inputPath)

    # nothing on disk is touched until the flags are known
    (cflags, libs) = query_flags(toolchain)

    results = []
    scratch = tempfile.mkdtemp(prefix='ancbuild-')
    _logger.debug('scratch directory: %s', scratch)
    try:
        results.append(translate(toolchain, inputPath, scratch))
        results.append(compile_bitcode(toolchain, results[-1].artifact, scratch))
        results.append(link(toolchain, results[-1].artifact, outputPath, cflags, libs, runtime))
    finally:
        removeScratch(scratch)

    _logger.info('Built "%s"', outputPath)
    return results
