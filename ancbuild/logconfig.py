"""
  Logging setup shared by the ancbuild command line tools.

  Modules call logConfig(__name__). The first call points the root logger
  at ANCBUILD_OUTPUT_FILE (standard error if unset); every call applies
  ANCBUILD_OUTPUT_LEVEL to the logger it returns.
"""
import logging
import os
import sys

_loggingEnvLevel = 'ANCBUILD_OUTPUT_LEVEL'

_loggingDestination = 'ANCBUILD_OUTPUT_FILE'

_validLogLevels = ['ERROR', 'WARNING', 'INFO', 'DEBUG']

_plainFormat = 'ancbuild %(levelname)s: %(message)s'
_debugFormat = 'ancbuild %(levelname)s: %(module)s.%(funcName)s() at %(filename)s:%(lineno)d: %(message)s'

_rootConfigured = False


def requestedLevel():
    """The level named in the environment, upper-cased, or None.

    Exits with status 1 on a name we do not know.
    """
    level = os.getenv(_loggingEnvLevel)
    if not level:
        return None
    level = level.upper()
    if level not in _validLogLevels:
        logging.error('"%s" is not a valid value for %s. Valid values are %s',
                      level, _loggingEnvLevel, _validLogLevels)
        sys.exit(1)
    return level


def formatFor(level):
    """Debug output says where each message came from."""
    return _debugFormat if level == 'DEBUG' else _plainFormat


def _configureRoot(level):
    global _rootConfigured
    if _rootConfigured:
        return
    settings = {'level': logging.WARNING, 'format': formatFor(level)}
    destination = os.getenv(_loggingDestination)
    if destination:
        settings['filename'] = destination
    logging.basicConfig(**settings)
    _rootConfigured = True


def logConfig(name):
    level = requestedLevel()
    _configureRoot(level)
    retval = logging.getLogger(name)
    if level:
        retval.setLevel(getattr(logging, level))
    return retval


def loggingConfiguration():
    destination = os.getenv(_loggingDestination)
    level = os.getenv(_loggingEnvLevel)
    return (destination, level)


def informUser(msg):
    sys.stderr.write(msg)
