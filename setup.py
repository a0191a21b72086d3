import os
import pathlib

from setuptools import extension as setuptools_ext
from setuptools import setup
from setuptools.command import build_ext as setuptools_build_ext


_ROOT = pathlib.Path(__file__).parent


with open(str(_ROOT / "README.rst")) as f:
    readme = f.read()


with open(str(_ROOT / "gramtab" / "_version.py")) as f:
    for line in f:
        if line.startswith("__version__ ="):
            _, _, version = line.partition("=")
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            "unable to read the version from gramtab/_version.py"
        )


USE_MYPYC = False
MYPY_DEPENDENCY = "mypy>=0.910"
setup_requires = []
ext_modules = []

if os.environ.get("GRAMTAB_USE_MYPYC", None) in {"true", "1", "on"}:
    setup_requires.extend([MYPY_DEPENDENCY, "packaging"])
    # Fool setuptools into calling build_ext.  The actual list of
    # extensions would get replaced by mypycify.
    ext_modules.append(
        setuptools_ext.Extension("gramtab.foo", ["gramtab/foo.c"])
    )
    USE_MYPYC = True


class build_ext(setuptools_build_ext.build_ext):  # type: ignore
    def finalize_options(self) -> None:
        # finalize_options() may be called multiple times on the
        # same command object, so make sure not to override previously
        # set options.
        if getattr(self, "_initialized", False):
            return

        if USE_MYPYC:
            from packaging.requirements import Requirement

            # Double check mypy presence in case setup_requires
            # didn't go into effect.
            try:
                import mypy.version
                from mypyc.build import mypycify
            except ImportError:
                raise RuntimeError(
                    "please install {} to compile gramtab from source".format(
                        MYPY_DEPENDENCY
                    )
                )

            mypy_dep = Requirement(MYPY_DEPENDENCY)
            if not mypy_dep.specifier.contains(
                mypy.version.__version__, prereleases=True
            ):
                raise RuntimeError(
                    "gramtab requires {}, got mypy=={}".format(
                        MYPY_DEPENDENCY, mypy.version.__version__
                    )
                )

            self.distribution.ext_modules = mypycify(
                [
                    "gramtab/symbols.py",
                    "gramtab/grammar.py",
                    "gramtab/analysis.py",
                    "gramtab/automaton.py",
                ],
            )

        super(build_ext, self).finalize_options()


setup(
    name="gramtab",
    version=VERSION,
    python_requires=">=3.8.0",
    license="MIT",
    description="A pure-Python LL(1), LR(0) and SLR(1) parsing table "
    "generator, with predictive and shift-reduce parser drivers.",
    long_description=readme,
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
        "Topic :: Text Processing :: General",
    ],
    packages=["gramtab", "gramtab.tests", "gramtab.tests.specs"],
    package_data={"gramtab": ["py.typed"]},
    setup_requires=setup_requires,
    ext_modules=ext_modules,
    install_requires=["mypy_extensions>=0.4"],
    extras_require={
        "test": [
            "flake8",
            MYPY_DEPENDENCY,
        ]
    },
    cmdclass={"build_ext": build_ext},
)
