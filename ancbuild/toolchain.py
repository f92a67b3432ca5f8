import os

from .errors import ToolchainError
from .logconfig import logConfig

# Internal logger
_logger = logConfig(__name__)


# Environmental variable for the path to the ancient translator
ancientCompilerEnv = 'ANCIENT_COMPILER'

# Environmental variable for path to the LLVM tools (llc)
llvmCompilerPathEnv = 'LLVM_COMPILER_PATH'

# Environmental variable for the name of the static compiler
llvmLlcNameEnv = 'LLVM_LLC_NAME'

# Environmental variable for the C compiler that assembles and links
ccNameEnv = 'ANCBUILD_CC_NAME'

# Environmental variable for the SDL configuration query tool
sdlConfigEnv = 'ANCBUILD_SDL_CONFIG'

# Environmental variable for the runtime source linked into every program
runtimeEnv = 'ANCBUILD_RUNTIME'

# Names of the intermediates, relative to the build's scratch directory.
# The translator always writes out.bc into its working directory.
bitcodeName = 'out.bc'
assemblyName = 'out.s'


class Toolchain(object):
    """The external tools a build runs, and where to find them.

    Each setting comes from the keyword argument if given, otherwise
    from the environment, otherwise from the historical default.
    """

    def __init__(self, ancient=None, llc=None, cc=None, sdlConfig=None,
                 runtime=None, prefixPath=None):

        if prefixPath is None:
            prefixPath = os.getenv(llvmCompilerPathEnv)

        # Used as prefix path for llc
        if prefixPath:
            self.prefixPath = prefixPath
            # Ensure prefixPath has trailing slash
            if self.prefixPath[-1] != os.path.sep:
                self.prefixPath = self.prefixPath + os.path.sep
            # Check prefix path exists
            if not os.path.exists(self.prefixPath):
                errorMsg = f'Path to LLVM tools "{self.prefixPath}" does not exist'
                _logger.error(errorMsg)
                raise ToolchainError(errorMsg)
        else:
            self.prefixPath = ''

        self.ancient = ancient or os.getenv(ancientCompilerEnv) or 'ancient'
        self.llc = llc or os.getenv(llvmLlcNameEnv) or 'llc'
        self.cc = cc or os.getenv(ccNameEnv) or 'gcc'
        self.sdlConfig = sdlConfig or os.getenv(sdlConfigEnv) or 'sdl-config'
        self.runtime = runtime or os.getenv(runtimeEnv) or 'runtime.c'

        _logger.debug('ancbuild toolchain: %s', self)

    def __repr__(self):
        return (f'Toolchain(ancient={self.ancient!r}, llc={self.getStaticCompiler()!r}, '
                f'cc={self.cc!r}, sdlConfig={self.sdlConfig!r}, runtime={self.runtime!r})')

    def getTranslator(self):
        # the translator runs inside the scratch directory, so a relative
        # path like ../ancient has to be pinned down first
        if os.path.sep in self.ancient:
            return [os.path.abspath(self.ancient)]
        return [self.ancient]

    def getStaticCompiler(self):
        return f'{self.prefixPath}{self.llc}'

    def getCompiler(self):
        return [self.cc]

    def getConfigQuery(self, what):
        return [self.sdlConfig, what]

    def getRuntimeSource(self):
        """Absolute path of the runtime source.

        Relative paths are taken from the current working directory,
        so this must be called before anything changes it.
        """
        return os.path.abspath(self.runtime)
