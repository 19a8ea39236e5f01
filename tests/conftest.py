import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests when the package is not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from xray_jaeger_mapper.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are cached process-wide; isolate env changes between tests.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
