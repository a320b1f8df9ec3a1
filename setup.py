"""Build configuration for Sticker Year.

Usage:
    pip install -e .[test]          # development install
    python setup.py py2app          # macOS app bundle, produces dist/Sticker Year.app
"""
import sys

from setuptools import setup

APP = ['sticker_year.py']
DATA_FILES = []
MODULES = [
    'calendar_grid', 'catalog', 'codec', 'controller', 'daykey', 'engine',
    'generate_stickers', 'models', 'navigation', 'placements', 'storage',
    'sticker_year', 'views',
]
OPTIONS = {
    'argv_emulation': False,  # must be False for Qt apps
    'plist': {
        'CFBundleName': 'Sticker Year',
        'CFBundleDisplayName': 'Sticker Year',
        'CFBundleIdentifier': 'com.stickeryear.app',
        'CFBundleVersion': '1.0.0',
        'CFBundleShortVersionString': '1.0',
        'LSMinimumSystemVersion': '11.0',
        'NSHighResolutionCapable': True,
    },
    'packages': ['PySide6', 'PIL'],
    'strip': False,  # avoid "Operation not permitted" on macOS SIP-protected binaries
}

extra = {}
if 'py2app' in sys.argv:
    extra = dict(
        app=APP,
        data_files=DATA_FILES,
        options={'py2app': OPTIONS},
        setup_requires=['py2app'],
    )

setup(
    name='sticker-year',
    version='1.0.0',
    description='One sticker per calendar day, browsed by month or year',
    python_requires='>=3.10',
    py_modules=MODULES,
    install_requires=[
        'PySide6>=6.5',
        'Pillow>=10.0',
    ],
    extras_require={
        'test': ['pytest>=7.0', 'pytest-qt>=4.2'],
    },
    entry_points={
        'gui_scripts': ['sticker-year=sticker_year:main'],
        'console_scripts': ['generate-stickers=generate_stickers:main'],
    },
    **extra,
)
