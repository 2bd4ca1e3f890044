#!/usr/bin/env python3

""" Build script for main program; originally copied from Plover and stripped down. """

import glob
import os
import shutil
import subprocess
import sys

from setuptools import Command as stCommand, find_packages, setup


def iglob_all(*patterns):
    """ Yield each unique file path that matches one of many glob <patterns>. """
    seen = set()
    for pattern in patterns:
        for path in glob.iglob(pattern, recursive=True):
            if path not in seen:
                yield path
                seen.add(path)


class Command(stCommand):
    """ setuptools Command with default fields and methods defined. """
    user_options = []
    def initialize_options(self):
        self.args = []
    def finalize_options(self):
        pass


class CommandNamespace:
    """ Contains all command classes for use in setuptools.setup().
        Any command here may be run by name, e.g. > python3 setup.py clean. """

    class clean(Command):
        description = "Remove all build and test-generated files."
        def run(self):
            for path in iglob_all('.pytest_cache', 'build', 'dist', '*.egg-info', '**/__pycache__'):
                if os.path.isdir(path):
                    shutil.rmtree(path)
                elif os.path.exists(path):
                    os.remove(path)

    class run(Command):
        description = "Run the program from source with any extra arguments."
        command_consumes_arguments = True
        def run(self):
            cmd = (sys.executable, '-m', 'plojo', *self.args)
            subprocess.run(cmd, check=True)

    class test(Command):
        description = "Run all unit tests."
        def run(self):
            import pytest
            sys.exit(pytest.main(['test']))


setup(
    name="plojo",
    version="0.1.0",
    description="Real-time steno translation engine with minimal-edit output correction.",
    python_requires=">=3.8",
    packages=find_packages(exclude=["test", "test.*"]),
    package_data={"plojo": ["assets/*"]},
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["plojo=plojo.__main__:main"]},
    cmdclass={k: v for k, v in vars(CommandNamespace).items() if not k.startswith("_")},
)
