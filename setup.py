from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*\w+\[?\w*\]?)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='tokensync',
    version=file_getVersion('tokensync/tokensync.py'),
    description='Resolve design-token style sheets and sync their colors into named styles',
    author='FNNDSC',
    author_email='dev@babyMRI.org',
    url='https://github.com/FNNDSC/pl-tokensync',
    packages=find_namespace_packages(include=['tokensync', 'tokensync.*']),
    install_requires=[
        'chris_plugin',
        'loguru',
        'pydantic>=2',
        'pydantic-settings',
        'rich',
        'click>=8',
        'appdirs',
    ],
    python_requires='>=3.11',
    license='MIT',
    entry_points={
        'console_scripts': [
            'tokensync = tokensync.tokensync:main',
            'tokensync-cli = tokensync.commands.app:cli',
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Software Development :: User Interfaces',
    ],
    extras_require={
        'none': [],
        'dev': [
            'pytest~=7.1'
        ]
    }
)
