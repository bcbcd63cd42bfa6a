"""Unit tests for utility functions (nodegen.utils).

Tests cover:
- run_command (success, failure, timeout, cwd, env vars, missing program)
- sanitize_name / split_tokens
- dump_json / save_json
- format_duration
- STAGE_NAMES / STAGE_COLORS constants
- Rich output helpers, including text that looks like markup
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from nodegen.pipeline import STAGES
from nodegen.utils import (
    STAGE_COLORS,
    STAGE_NAMES,
    console,
    dump_json,
    format_duration,
    print_error,
    print_plain,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    sanitize_name,
    save_json,
    split_tokens,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    async def test_failed_command(self):
        returncode, _, _ = await run_command(
            [sys.executable, "-c", "import sys; sys.exit(4)"]
        )
        assert returncode == 4

    @pytest.mark.unit
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    async def test_command_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_command_with_env(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['NODEGEN_TEST_VAR'])"],
            env={"NODEGEN_TEST_VAR": "test_value"},
        )
        assert returncode == 0
        assert stdout == "test_value"

    @pytest.mark.unit
    async def test_arguments_are_not_shell_interpreted(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import sys; print(sys.argv[1])", "a b; echo c"]
        )
        assert returncode == 0
        assert stdout == "a b; echo c"

    @pytest.mark.unit
    async def test_missing_program(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["nonexistent-binary-12345-xyz"])


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


class TestSanitizeName:
    @pytest.mark.unit
    def test_simple_name(self):
        assert sanitize_name("My Shop API") == "my-shop-api"

    @pytest.mark.unit
    def test_special_chars(self):
        assert sanitize_name("  Blog (v2)  ") == "blog-v2"

    @pytest.mark.unit
    def test_allowed_punctuation_kept(self):
        assert sanitize_name("my_app.v2~beta") == "my_app.v2~beta"

    @pytest.mark.unit
    def test_leading_dots_stripped(self):
        assert sanitize_name("../escape") == "escape"

    @pytest.mark.unit
    def test_consecutive_hyphens_collapsed(self):
        assert sanitize_name("a - - b") == "a-b"

    @pytest.mark.unit
    def test_empty_string(self):
        assert sanitize_name("") == ""


class TestSplitTokens:
    @pytest.mark.unit
    def test_spaces(self):
        assert split_tokens("lodash  axios") == ["lodash", "axios"]

    @pytest.mark.unit
    def test_commas_and_spaces(self):
        assert split_tokens("lodash,axios, dayjs") == ["lodash", "axios", "dayjs"]

    @pytest.mark.unit
    def test_blank(self):
        assert split_tokens("  ,  ") == []

    @pytest.mark.unit
    def test_scoped_names_untouched(self):
        assert split_tokens("@scope/pkg") == ["@scope/pkg"]


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


class TestJsonIO:
    @pytest.mark.unit
    def test_dump_json_trailing_newline(self):
        assert dump_json({"a": 1}) == '{\n  "a": 1\n}\n'

    @pytest.mark.unit
    def test_dump_json_keeps_unicode(self):
        assert "café" in dump_json({"name": "café"})

    @pytest.mark.unit
    async def test_save_json_creates_parents(self, tmp_path: Path):
        path = await save_json({"key": "value"}, tmp_path / "a" / "b" / "out.json")
        assert path == tmp_path / "a" / "b" / "out.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"key": "value"}

    @pytest.mark.unit
    async def test_save_json_tab_indent(self, tmp_path: Path):
        path = await save_json({"key": "value"}, tmp_path / "out.json", indent="\t")
        assert path.read_text(encoding="utf-8") == '{\n\t"key": "value"\n}\n'


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_hours(self):
        assert format_duration(3661.0) == "1h 1m 1s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


class TestStageConstants:
    @pytest.mark.unit
    def test_every_stage_has_name_and_color(self):
        assert set(STAGE_NAMES) == set(STAGES)
        assert set(STAGE_COLORS) == set(STAGES)


class TestRichOutput:
    @pytest.mark.unit
    def test_print_stage_header(self):
        print_stage_header(1, "validate")
        print_stage_header(9, "unknown")

    @pytest.mark.unit
    def test_print_summary_table(self):
        print_summary_table({"App": "my-api", "Framework": "express"}, title="Test")

    @pytest.mark.unit
    def test_print_messages(self):
        print_success("done")
        print_error("failed")
        print_warning("careful")

    @pytest.mark.unit
    def test_messages_print_brackets_literally(self):
        with console.capture() as capture:
            print_error("Invalid database selection '[/bogus]'")
            print_warning("[bold]not a tag")
            print_plain("lodash [/x]", "dim")
        output = capture.get()
        assert "'[/bogus]'" in output
        assert "[bold]not a tag" in output
        assert "lodash [/x]" in output

    @pytest.mark.unit
    def test_summary_values_print_literally(self):
        with console.capture() as capture:
            print_summary_table({"Dependencies": "express [/x]"}, title="Test")
        assert "express [/x]" in capture.get()
