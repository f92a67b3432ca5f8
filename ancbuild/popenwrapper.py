import os
import shlex
import subprocess

from .logconfig import logConfig

# Internal logger
_logger = logConfig(__name__)


def Popen(cmd, **kwargs):
    """subprocess.Popen, logging what runs and where.

    At DEBUG the command is logged in a form that can be pasted into a
    shell, which is usually the quickest way to reproduce a failed stage.
    """
    cwd = kwargs.get('cwd') or os.getcwd()
    _logger.debug('running: %s\nin: %s', shlex.join(cmd), cwd)
    try:
        return subprocess.Popen(cmd, **kwargs)
    except OSError as e:
        _logger.error('could not start %s: %s', cmd[0], e.strerror or e)
        raise
