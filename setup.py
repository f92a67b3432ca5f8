from setuptools import setup, find_packages

from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

# use the in house version number so we stay in synch with ourselves.
from ancbuild.version import ancbuild_version

setup(
    name='ancbuild',
    version=ancbuild_version,
    description='Build driver for ancient programs: translator, llc and cc in one go',
    long_description=long_description,

    packages=find_packages(exclude=['test']),

    python_requires='>=3.8',

    entry_points = {
        'console_scripts': [
            'ancbuild = ancbuild.ancbuild:main',
            'ancbuild-sanity-checker = ancbuild.checker:main',
        ],
    },

    license='MIT',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Natural Language :: English',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Compilers',
        'Topic :: Software Development :: Build Tools',
        'License :: OSI Approved :: MIT License',
        'Operating System :: MacOS',
        'Operating System :: POSIX :: Linux',
        'Operating System :: POSIX :: BSD',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
