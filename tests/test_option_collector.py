"""Tests for interactive option collection."""
import pytest
import typer
from rich.console import Console

from esp_create_project.core.errors import InputError
from esp_create_project.models.project import CppStandard, Language
from esp_create_project.scaffold.options import OptionCollector


def _scripted(monkeypatch, prompts=(), confirms=()):
    """Answer typer prompts from the given sequences and record the questions."""
    prompt_answers = list(prompts)
    confirm_answers = list(confirms)
    asked = []

    def fake_prompt(text, **kwargs):
        asked.append(text)
        answer = prompt_answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def fake_confirm(text, **kwargs):
        asked.append(text)
        answer = confirm_answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    monkeypatch.setattr(typer, "prompt", fake_prompt)
    monkeypatch.setattr(typer, "confirm", fake_confirm)
    return asked


@pytest.fixture
def collector():
    return OptionCollector(console=Console(quiet=True))


class TestOptionCollector:
    """Test prompt order, defaults and failures."""

    def test_c_project(self, monkeypatch, collector):
        asked = _scripted(monkeypatch, prompts=[0], confirms=[True])

        config = collector.collect("demo")

        assert config.language == Language.C
        assert config.cpp_standard is None
        assert config.init_git is True
        assert asked == ["Select", "Initialize git repo? (needs git)"]

    def test_cpp_menu_entry_sets_standard(self, monkeypatch, collector):
        asked = _scripted(monkeypatch, prompts=[2], confirms=[False])

        config = collector.collect("demo")

        assert config.language == Language.CPP
        assert config.cpp_standard == CppStandard.CPP14
        assert len(asked) == 2

    def test_cpp_language_prompts_for_standard(self, monkeypatch, collector):
        asked = _scripted(monkeypatch, prompts=["11"], confirms=[False])

        config = collector.collect("demo", language=Language.CPP)

        assert config.cpp_standard == CppStandard.CPP11
        assert asked[0].startswith("C++ standard")

    def test_supplied_values_skip_prompts(self, monkeypatch, collector):
        asked = _scripted(monkeypatch)

        config = collector.collect(
            "demo", language=Language.CPP, cpp_standard=CppStandard.CPP17, init_git=False
        )

        assert asked == []
        assert config.describe() == "C++ 17"

    def test_standard_implies_cpp(self, monkeypatch, collector):
        _scripted(monkeypatch)
        config = collector.collect("demo", cpp_standard=CppStandard.CPP11, init_git=False)
        assert config.language == Language.CPP

    def test_standard_with_c_is_input_error(self, collector):
        with pytest.raises(InputError):
            collector.collect("demo", language=Language.C, cpp_standard=CppStandard.CPP11)

    def test_out_of_range_selection(self, monkeypatch, collector):
        _scripted(monkeypatch, prompts=[7])
        with pytest.raises(InputError, match="Invalid language selection"):
            collector.collect("demo")

    def test_non_numeric_selection(self, monkeypatch, collector):
        _scripted(monkeypatch, prompts=["abc"])
        with pytest.raises(InputError, match="expected a number"):
            collector.collect("demo")

    def test_invalid_standard(self, monkeypatch, collector):
        _scripted(monkeypatch, prompts=["20"])
        with pytest.raises(InputError, match="Invalid C\\+\\+ standard"):
            collector.collect("demo", language=Language.CPP)

    def test_abort_is_input_error(self, monkeypatch, collector):
        _scripted(monkeypatch, prompts=[typer.Abort()])
        with pytest.raises(InputError, match="Aborted"):
            collector.collect("demo")

    def test_abort_on_git_prompt(self, monkeypatch, collector):
        _scripted(monkeypatch, prompts=[0], confirms=[typer.Abort()])
        with pytest.raises(InputError):
            collector.collect("demo")

    def test_non_interactive_defaults(self, monkeypatch):
        _scripted(monkeypatch)
        collector = OptionCollector(
            console=Console(quiet=True), default_init_git=True, non_interactive=True
        )

        config = collector.collect("demo")
        assert config.language == Language.C
        assert config.init_git is True

        cpp = collector.collect("demo", language=Language.CPP)
        assert cpp.cpp_standard == CppStandard.CPP17
