import os

from setuptools import setup

# Hot-path modules compiled with Cython when CHIP8_CYTHONIZE=1 (pip install .[accel] first)
ACCEL_MODULES = ["state.py", "decoder.py", "cpu.py", "display.py"]

ext_modules = []
if os.environ.get("CHIP8_CYTHONIZE") == "1":
    from Cython.Build import cythonize

    ext_modules = cythonize(ACCEL_MODULES, compiler_directives={
        "language_level": 3,
        "annotation_typing": False,
    })

setup(
    name="chip8-emu",
    version="0.1.0",
    description="CHIP-8 virtual machine with an SDL2 front end",
    python_requires=">=3.8",
    py_modules=[
        "buzzer",
        "chip8",
        "config",
        "cpu",
        "decoder",
        "disasm",
        "display",
        "errors",
        "headless_run",
        "main",
        "state",
        "timers",
        "utils",
    ],
    install_requires=[
        "PySDL2",
        "pysdl2-dll",
        "Pillow>=9.1",
    ],
    extras_require={
        "test": ["pytest"],
        "accel": ["Cython>=3.0"],
    },
    entry_points={
        "console_scripts": [
            "chip8=main:main",
            "chip8-headless=headless_run:main",
            "chip8-disasm=disasm:main",
        ],
    },
    ext_modules=ext_modules,
)
