"""Shared pytest fixtures for Sticker Year tests."""
import os

os.environ['QT_QPA_PLATFORM'] = 'offscreen'  # must be set before QApplication import

import io
import json
from datetime import date

import pytest
from PIL import Image, ImageDraw


FIXED_TODAY = date(2025, 3, 14)


@pytest.fixture(scope='session')
def qapp():
    """Create a single QApplication for all tests."""
    from controller import StickerYearApp
    app = StickerYearApp([])
    yield app


@pytest.fixture
def make_png():
    """Factory fixture: make_png(width, height, color) -> PNG bytes."""
    def _make(width=64, height=64, color='red'):
        img = Image.new('RGBA', (width, height), color)
        draw = ImageDraw.Draw(img)
        draw.ellipse([4, 4, width - 4, height - 4], outline='black')
        buf = io.BytesIO()
        img.save(buf, format='PNG')
        return buf.getvalue()
    return _make


@pytest.fixture
def grouped_feed():
    """A grouped feed mixing both image field names and a per-item category."""
    return [
        {
            'category': 'Animals',
            'items': [
                {'id': 'cat01', 'file': 'cat01.png', 'label': 'cat', 'tags': ['pet', 'cute']},
                {'id': 'dog01', 'src': 'dog01.png'},
            ],
        },
        {
            'category': 'Party Hat',
            'items': [
                {'id': 'party-hat01', 'file': 'party-hat01.png', 'src': 'ignored.png'},
                {'id': 'balloon01', 'file': 'balloon01.png', 'category': 'Balloons'},
            ],
        },
        {
            'items': [
                {'id': 'mystery', 'file': 'mystery.png'},
            ],
        },
    ]


@pytest.fixture
def flat_feed():
    return [
        {'id': 'sun', 'file': 'sun.png', 'category': 'Weather'},
        {'id': 'cloud', 'file': 'cloud.png', 'category': 'Weather', 'label': 'Cloudy'},
        {'id': 'apple', 'file': 'apple.png', 'category': 'Food'},
        {'id': 'star', 'file': 'star.png'},
    ]


@pytest.fixture
def catalog(grouped_feed):
    from catalog import normalize
    return normalize(grouped_feed)


@pytest.fixture
def sticker_dir(tmp_path, make_png, grouped_feed):
    """A directory with a real PNG for every sticker in grouped_feed."""
    d = tmp_path / 'stickers'
    d.mkdir()
    colors = ['red', 'blue', 'green', 'orange', 'purple']
    for i, name in enumerate(['cat01.png', 'dog01.png', 'party-hat01.png', 'balloon01.png', 'mystery.png']):
        (d / name).write_bytes(make_png(48, 48, colors[i % len(colors)]))
    (tmp_path / 'stickers.json').write_text(json.dumps(grouped_feed), encoding='utf-8')
    return d


@pytest.fixture
def clock():
    """A settable clock; tests move ``clock.today`` around."""
    class _Clock:
        today = FIXED_TODAY

        def __call__(self):
            return self.today
    return _Clock()


@pytest.fixture
def storage():
    from storage import MemoryStorage
    return MemoryStorage()


@pytest.fixture
def engine(storage, catalog, clock):
    from engine import CalendarEngine
    return CalendarEngine(storage, catalog, today=clock)
