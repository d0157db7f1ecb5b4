"""Shared test fixtures for esp-create-project tests."""
import io
import zipfile

import pytest
import requests

from esp_create_project.core.config import CreatorConfig, set_config
from esp_create_project.services import template_fetcher

ARCHIVE_ROOT = "esp-idf-template-master"

TOP_CMAKE = """# The following lines of boilerplate have to be in your project's
# CMakeLists in this exact order for cmake to work correctly
cmake_minimum_required(VERSION 3.5)

include($ENV{IDF_PATH}/tools/cmake/project.cmake)
project(app-template)
"""

MAIN_CMAKE = """idf_component_register(SRCS "main.c"
                    INCLUDE_DIRS "")
"""

TEMPLATE_FILES = {
    "CMakeLists.txt": TOP_CMAKE,
    "Makefile": "PROJECT_NAME := app-template\n\ninclude $(IDF_PATH)/make/project.mk\n",
    "README.md": "# ESP-IDF template app\n",
    "main/CMakeLists.txt": MAIN_CMAKE,
    "main/component.mk": "#\n# Main component makefile.\n#\n",
    "main/main.c": "void app_main(void)\n{\n}\n",
}


def build_zip(files, root=ARCHIVE_ROOT, extra_members=None) -> bytes:
    """Build a GitHub-style zip archive with every file under root/."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        if root:
            zf.writestr(f"{root}/", "")
        for name, content in files.items():
            zf.writestr(f"{root}/{name}" if root else name, content)
        for name, content in (extra_members or {}).items():
            zf.writestr(name, content)
    return buffer.getvalue()


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config file and environment."""
    monkeypatch.setenv("ESP_CREATE_PROJECT_CONFIG", str(tmp_path / "no-config.yml"))
    for name in ("TEMPLATE_URL", "DOWNLOAD_TIMEOUT", "GIT", "GIT_TIMEOUT"):
        monkeypatch.delenv(f"ESP_CREATE_PROJECT_{name}", raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def creator_config():
    """Config with a small chunk size so downloads span several chunks."""
    return CreatorConfig(template_url="https://example.com/template.zip", chunk_size=256)


@pytest.fixture
def template_zip():
    """Zip archive shaped like the esp-idf-template GitHub download."""
    return build_zip(TEMPLATE_FILES)


@pytest.fixture
def fake_download(monkeypatch, template_zip):
    """Serve template_zip for every requests.get and record the calls."""
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(template_zip)

    monkeypatch.setattr(template_fetcher.requests, "get", fake_get)
    return calls


@pytest.fixture
def offline(monkeypatch):
    """Make every download fail with a connection error."""
    def fake_get(url, **kwargs):
        raise requests.ConnectionError("Failed to establish a new connection")

    monkeypatch.setattr(template_fetcher.requests, "get", fake_get)
