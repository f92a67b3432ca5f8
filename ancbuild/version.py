# The version number used by pip.
#
"""
Version History:

0.1.0    - 3/2/2026 initial birth as a pip package; replaces the old
           compile.rb script.

0.1.1    - 4/14/2026 intermediates go into a private scratch directory,
           so two builds in the same directory no longer clobber each
           other's out.bc.

0.2.0    - 6/9/2026 every stage is checked; a failing tool stops the
           build and its exit code is preserved.

0.2.1    - 8/27/2026 ancbuild-sanity-checker.

"""

ancbuild_version = '0.2.1'
ancbuild_date = 'August 27 2026'
